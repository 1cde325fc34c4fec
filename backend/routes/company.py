# backend/routes/company.py
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from database import get_db
from models.company import Company, Contact
from models.users import User, Permission
from utils.tokenJWT import get_current_user
from utils.audit import write_log, client_ip
from utils import credits as ledger
from schemas.company import (
    CompanyCreate, CompanyUpdate, CompanyOut, ContactCreate, ContactOut, CompanyCredits
)

router = APIRouter(prefix="/company", tags=["Company"])

# Brands (companies) owned by the caller, their contacts and credit balance


def _get_company(db: Session, company_uuid: str, user: User, allow_staff: bool = False) -> Company:
    c = db.query(Company).filter(Company.uuid == company_uuid, Company.is_deleted == False).first()
    if not c:
        raise HTTPException(status_code=404, detail="Company not found")
    if c.user_id != user.id and not (allow_staff and user.can(Permission.MANAGE_USERS)):
        raise HTTPException(status_code=403, detail="Forbidden")
    return c


@router.get("", response_model=List[CompanyOut])
def list_companies(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return db.query(Company).filter(
        Company.user_id == current_user.id, Company.is_deleted == False
    ).order_by(Company.company_name.asc()).all()


@router.post("", response_model=CompanyOut, status_code=201)
def create_company(payload: CompanyCreate, request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    c = Company(uuid=str(uuid.uuid4()), user_id=current_user.id, **payload.model_dump())
    db.add(c)
    db.commit()
    db.refresh(c)

    write_log(db, user_id=current_user.id, action="COMPANY_CREATE", resource="company",
              ip=client_ip(request), meta={"company_id": c.id})
    return c


@router.get("/{company_uuid}", response_model=CompanyOut)
def get_company(company_uuid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_company(db, company_uuid, current_user, allow_staff=True)


@router.put("/{company_uuid}", response_model=CompanyOut)
def update_company(company_uuid: str, payload: CompanyUpdate, request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    c = _get_company(db, company_uuid, current_user)

    # Update fields if provided in the payload
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "company_name" and not value:
            continue
        setattr(c, field, value)

    db.commit()
    db.refresh(c)

    write_log(db, user_id=current_user.id, action="COMPANY_UPDATE", resource="company",
              ip=client_ip(request), meta={"company_id": c.id})
    return c


@router.delete("/{company_uuid}")
def delete_company(company_uuid: str, request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    c = _get_company(db, company_uuid, current_user)
    c.is_deleted = True
    db.commit()

    write_log(db, user_id=current_user.id, action="COMPANY_DELETE", resource="company",
              ip=client_ip(request), meta={"company_id": c.id})
    return {"success": True}


# ---- Credits ----
@router.get("/{company_uuid}/credits", response_model=CompanyCredits)
def get_company_credits(company_uuid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    c = _get_company(db, company_uuid, current_user, allow_staff=True)
    return CompanyCredits(
        company_id=c.id,
        balance=ledger.company_balance(db, c.id),
        by_type=ledger.balance_by_type(db, c.user_id, c.id),
    )


# ---- Contacts ----
@router.get("/{company_uuid}/contacts", response_model=List[ContactOut])
def list_contacts(company_uuid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    c = _get_company(db, company_uuid, current_user)
    return db.query(Contact).filter(Contact.company_id == c.id).order_by(Contact.id.asc()).all()


@router.post("/{company_uuid}/contacts", response_model=ContactOut, status_code=201)
def add_contact(company_uuid: str, payload: ContactCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    c = _get_company(db, company_uuid, current_user)
    if payload.is_primary:
        # Only one primary contact per company
        db.query(Contact).filter(Contact.company_id == c.id).update({Contact.is_primary: False})
    contact = Contact(uuid=str(uuid.uuid4()), company_id=c.id, user_id=current_user.id, **payload.model_dump())
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


@router.delete("/{company_uuid}/contacts/{contact_uuid}")
def delete_contact(company_uuid: str, contact_uuid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    c = _get_company(db, company_uuid, current_user)
    contact = db.query(Contact).filter(Contact.uuid == contact_uuid, Contact.company_id == c.id).first()
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    db.delete(contact)
    db.commit()
    return {"success": True}
