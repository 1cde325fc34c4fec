# backend/routes/releases.py
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_db
from models.company import Company
from models.release import Release, Queue, LOCKED_STATUSES
from models.users import User
from schemas.release import (
    ReleaseCreate, ReleaseUpdate, ReleaseOut, ReleaseDetail, ReleaseCreated, ApplyEditRequest
)
from utils import credits as ledger
from utils.audit import write_log, client_ip
from utils.body_edit import apply_edit
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/pr", tags=["Releases"])
logger = logging.getLogger(__name__)

# Statuses that can no longer be deleted by the owner
PROTECTED_STATUSES = frozenset({"approved", "sent", "editorial"})


def _now():
    return datetime.now(timezone.utc)

def _slugify(text: str) -> str:
    text = text.strip().lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")[:200]

def get_own_release(db: Session, release_uuid: str, user: User) -> Release:
    release = db.query(Release).filter(Release.uuid == release_uuid, Release.is_deleted == False).first()
    if not release:
        raise HTTPException(status_code=404, detail="Release not found")
    if release.user_id != user.id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return release

def _ensure_editable(release: Release):
    if release.status in LOCKED_STATUSES:
        raise HTTPException(status_code=409, detail=f'Cannot edit release with status "{release.status}"')


# ==========================================
#  CRUD
# ==========================================
@router.get("", response_model=List[ReleaseOut])
def list_releases(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return db.query(Release).filter(
        Release.user_id == current_user.id, Release.is_deleted == False
    ).order_by(Release.id.desc()).all()


@router.post("", response_model=ReleaseCreated, status_code=201)
def create_release(
    payload: ReleaseCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not payload.company_id:
        raise HTTPException(status_code=400, detail="Company is required")

    company = db.query(Company).filter(
        Company.id == payload.company_id, Company.user_id == current_user.id, Company.is_deleted == False
    ).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")

    if ledger.available_credits(db, current_user.id, company.id) <= 0:
        raise HTTPException(
            status_code=402,
            detail="No press release credits available. Please purchase credits to create a release.",
        )

    try:
        release = Release(
            uuid=uuid.uuid4().hex,
            user_id=current_user.id,
            company_id=company.id,
            slug=_slugify(payload.title) if payload.title else None,
            status="draftnxt", # stays here until submitted for review
            **payload.model_dump(exclude={"company_id"}),
        )
        db.add(release)
        db.flush()

        ledger.consume_credit(
            db, user_id=current_user.id, company_id=company.id, release_id=release.id,
            notes=f"PR: {(payload.title or release.uuid)[:40]}",
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error creating release for user %s", current_user.id)
        raise HTTPException(status_code=500, detail="Failed to create release")

    write_log(db, user_id=current_user.id, action="RELEASE_CREATE", resource="releases",
              ip=client_ip(request), meta={"release_id": release.id, "company_id": company.id})
    return ReleaseCreated(id=release.id, uuid=release.uuid)


@router.get("/{release_uuid}", response_model=ReleaseDetail)
def get_release(release_uuid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_own_release(db, release_uuid, current_user)


@router.put("/{release_uuid}", response_model=ReleaseOut)
def update_release(
    release_uuid: str,
    payload: ReleaseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    release = get_own_release(db, release_uuid, current_user)
    _ensure_editable(release)

    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(release, field, value)
    if changes.get("title"):
        release.slug = _slugify(changes["title"])

    db.commit()
    db.refresh(release)
    return release


# ==========================================
#  STATUS TRANSITIONS
# ==========================================
@router.post("/{release_uuid}/finalize")
def submit_for_review(
    release_uuid: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    release = get_own_release(db, release_uuid, current_user)
    if release.status in LOCKED_STATUSES:
        raise HTTPException(status_code=409, detail="Release has already been submitted")

    now = _now()
    release.status = "editorial"

    entry = db.query(Queue).filter(Queue.release_id == release.id).first()
    if entry is None:
        db.add(Queue(uuid=str(uuid.uuid4()), release_id=release.id, submitted=now))
    else:
        # Resubmission after a rejection starts a fresh review
        entry.submitted = now
        entry.approved = None
        entry.returned = None
        entry.checkedout = None
    db.commit()

    write_log(db, user_id=current_user.id, action="RELEASE_SUBMIT", resource="releases",
              ip=client_ip(request), meta={"release_id": release.id})
    return {"success": True}


@router.post("/{release_uuid}/retract")
def retract_release(
    release_uuid: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    release = get_own_release(db, release_uuid, current_user)
    if release.status != "editorial":
        raise HTTPException(status_code=409, detail="Only releases in editorial review can be retracted")

    entry = db.query(Queue).filter(Queue.release_id == release.id).first()
    if entry is not None and entry.checkedout:
        raise HTTPException(
            status_code=409,
            detail="This release is currently being reviewed by an editor and cannot be retracted",
        )

    release.status = "draftnxt"
    if entry is not None:
        db.delete(entry)
    db.commit()

    write_log(db, user_id=current_user.id, action="RELEASE_RETRACT", resource="releases",
              ip=client_ip(request), meta={"release_id": release.id})
    return {"success": True}


@router.post("/{release_uuid}/delete")
def delete_release(
    release_uuid: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    release = get_own_release(db, release_uuid, current_user)
    if release.status in PROTECTED_STATUSES:
        raise HTTPException(status_code=409, detail=f'Cannot delete release with status "{release.status}"')

    # Dropping the consumption rows hands the credit back
    restored = ledger.release_consumption(db, release_id=release.id, user_id=current_user.id)
    release.is_deleted = True
    db.commit()

    write_log(db, user_id=current_user.id, action="RELEASE_DELETE", resource="releases",
              ip=client_ip(request), meta={"release_id": release.id, "credits_restored": restored})
    return {"success": True}


@router.post("/{release_uuid}/apply-edit")
def apply_suggested_edit(
    release_uuid: str,
    payload: ApplyEditRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not (payload.original_text or "").strip() or not payload.improved_text:
        raise HTTPException(status_code=400, detail="original_text and improved_text are required")

    release = get_own_release(db, release_uuid, current_user)
    _ensure_editable(release)
    if not release.body:
        raise HTTPException(status_code=400, detail="Release has no body content")

    updated = apply_edit(release.body, payload.original_text, payload.improved_text)
    if updated is None:
        raise HTTPException(status_code=400, detail="Original text not found in release body")

    release.body = updated
    db.commit()
    return {"success": True}
