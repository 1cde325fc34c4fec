# backend/routes/admin.py
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from typing import List, Optional, Literal
from sqlalchemy.orm import Session
from pydantic import BaseModel

from database import get_db
from models.company import Company
from models.users import User, UserSubscription, Permission
from schemas.user import UserResponse, UserDetail, UserAdminUpdate, SubscriptionOut, CreditGrant, CreditGrantResult
from utils import credits as ledger
from utils.audit import write_log, client_ip
from utils.tokenJWT import permission_required

router = APIRouter(prefix="/admin", tags=["Admin"])

admin_required = permission_required(Permission.MANAGE_USERS)

# Schema for paginated user list response
class PaginatedUsersResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    page_size: int


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id, User.is_deleted == False).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

def _user_detail(db: Session, user: User) -> UserDetail:
    sub = user.subscription
    return UserDetail(
        **UserResponse.model_validate(user).model_dump(),
        subscription=SubscriptionOut.model_validate(sub) if sub else SubscriptionOut(),
        credit_balance=ledger.user_balance(db, user.id),
    )


# Retrieve a list of users with filtering, sorting, and pagination
@router.get("/users", response_model=PaginatedUsersResponse)
def get_all_users(
    q: Optional[str] = Query(None, description="Search by e-mail"),
    last_name: Optional[str] = Query(None, description="Search by last name"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    sort_by: Literal["id", "email", "first_name", "last_name"] = "id",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required)
):
    query = db.query(User).filter(User.is_deleted == False)

    if q:
        query = query.filter(User.email.ilike(f"%{q.lower()}%"))
    if last_name:
        query = query.filter(User.last_name.ilike(f"%{last_name}%"))

    sort_map = {
        "id": User.id,
        "email": User.email,
        "first_name": User.first_name,
        "last_name": User.last_name,
    }
    col = sort_map.get(sort_by, User.id)
    query = query.order_by(col.asc() if order == "asc" else col.desc())

    total = query.count()
    users = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": users,
        "total": total,
        "page": page,
        "page_size": page_size,
    }


@router.get("/users/{user_id}", response_model=UserDetail)
def get_user(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(admin_required)):
    return _user_detail(db, _get_user(db, user_id))


# Update names, role flags and the database-lookup credit counter
@router.put("/users/{user_id}", response_model=UserDetail)
def update_user(
    user_id: int,
    payload: UserAdminUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required)
):
    user = _get_user(db, user_id)
    changes = payload.model_dump(exclude_unset=True)
    newsdb_credits = changes.pop("newsdb_credits", None)

    # An admin cannot drop their own admin flag
    if user.id == current_user.id and changes.get("is_admin") is False:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot remove your own admin role")

    for field, value in changes.items():
        if value is not None:
            setattr(user, field, value)

    if newsdb_credits is not None:
        sub = db.query(UserSubscription).filter(UserSubscription.user_id == user.id).first()
        if sub:
            sub.newsdb_credits = newsdb_credits
        else:
            db.add(UserSubscription(user_id=user.id, remaining_pr=0, remaining_pluspr=0, newsdb_credits=newsdb_credits))

    db.commit()
    db.refresh(user)

    write_log(db, user_id=current_user.id, action="USER_UPDATE", resource="users",
              ip=client_ip(request), meta={"target_user_id": user.id, "fields": sorted(payload.model_fields_set)})
    return _user_detail(db, user)


# Grant (or take back, with a negative amount) ledger credits
@router.post("/users/{user_id}/credits", response_model=CreditGrantResult, status_code=201)
def grant_user_credits(
    user_id: int,
    payload: CreditGrant,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required)
):
    user = _get_user(db, user_id)
    if payload.credits == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Credit amount must not be zero")

    if payload.company_id is not None:
        company = db.query(Company).filter(Company.id == payload.company_id, Company.user_id == user.id).first()
        if not company:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")

    row = ledger.grant_credits(
        db, user_id=user.id, credits=payload.credits, company_id=payload.company_id,
        product_type=payload.product_type, notes=payload.notes,
    )
    db.commit()

    if payload.company_id is not None:
        balance = ledger.company_balance(db, payload.company_id)
    else:
        balance = ledger.user_balance(db, user.id)

    write_log(db, user_id=current_user.id, action="CREDIT_GRANT", resource="credits",
              ip=client_ip(request),
              meta={"target_user_id": user.id, "company_id": payload.company_id, "credits": payload.credits})
    return CreditGrantResult(id=row.id, credits=row.credits, company_id=row.company_id, balance=balance)
