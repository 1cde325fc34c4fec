# backend/routes/editorial.py
from datetime import datetime, timezone
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session, joinedload

from database import get_db
from models.release import Release, Queue, ReleaseNote
from models.users import User, Permission
from schemas.editorial import QueueCheckout, QueueRelease, ReviewRequest, ReviewResult, QueueItemOut
from utils.audit import write_log, client_ip
from utils.body_edit import strip_tags
from utils.tokenJWT import permission_required

router = APIRouter(prefix="/editorial", tags=["Editorial"])

editor_required = permission_required(Permission.REVIEW_RELEASES)


def _now():
    return datetime.now(timezone.utc)

def _get_queue(db: Session, queue_id: int) -> Queue:
    entry = db.query(Queue).filter(Queue.id == queue_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Queue entry not found")
    return entry


# Releases waiting for review, oldest submission first
@router.get("/queue", response_model=List[QueueItemOut])
def get_queue(db: Session = Depends(get_db), current_user: User = Depends(editor_required)):
    rows = db.query(Queue).join(Release, Queue.release_id == Release.id).options(
        joinedload(Queue.release).joinedload(Release.company)
    ).filter(
        Release.status == "editorial", Release.is_deleted == False
    ).order_by(Queue.submitted.asc(), Queue.id.asc()).all()

    items = []
    for q in rows:
        r = q.release
        items.append(QueueItemOut(
            queue_id=q.id,
            queue_uuid=q.uuid,
            release_id=r.id,
            release_uuid=r.uuid,
            title=r.title,
            company_name=r.company.company_name if r.company else None,
            excerpt=strip_tags(r.abstract or r.body or "")[:200],
            submitted=q.submitted,
            checkedout=q.checkedout,
            editor_id=q.editor_id,
            editor_name=q.editor_name,
        ))
    return items


# Editor takes the item; the owner can no longer retract it
@router.post("/checkout")
def checkout_release(payload: QueueCheckout, db: Session = Depends(get_db), current_user: User = Depends(editor_required)):
    entry = _get_queue(db, payload.queue_id)
    release = entry.release
    if release is None or release.is_deleted or release.status != "editorial":
        raise HTTPException(status_code=409, detail="Release is no longer in editorial review")
    if entry.checkedout and entry.editor_id != payload.editor_id:
        raise HTTPException(
            status_code=409,
            detail=f"Already checked out by {entry.editor_name or 'another editor'}",
        )

    entry.editor_id = payload.editor_id
    entry.editor_name = payload.editor_name
    entry.checkedout = _now()
    db.commit()
    return {"success": True}


@router.post("/release")
def release_checkout(payload: QueueRelease, db: Session = Depends(get_db), current_user: User = Depends(editor_required)):
    entry = _get_queue(db, payload.queue_id)
    entry.checkedout = None
    db.commit()
    return {"success": True}


@router.post("/review", response_model=ReviewResult)
def review_release(
    payload: ReviewRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(editor_required),
):
    release = db.query(Release).filter(Release.id == payload.release_id, Release.is_deleted == False).first()
    if not release:
        raise HTTPException(status_code=404, detail="Release not found")

    entry = db.query(Queue).filter(Queue.id == payload.queue_id, Queue.release_id == release.id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Queue entry not found")

    if release.status != "editorial":
        raise HTTPException(status_code=409, detail=f'Release is not in editorial review (status "{release.status}")')

    notes = (payload.notes or "").strip()
    if payload.action == "reject" and not notes:
        raise HTTPException(status_code=400, detail="Notes are required when rejecting a release")

    now = _now()
    entry.editor_id = payload.editor_id
    entry.editor_name = payload.editor_name

    if payload.action == "approve":
        entry.approved = now
        release.status = "approved"
        release.approved_at = now
        outcome, prefix = "approved", "[Approved]"
    else:
        entry.returned = now
        entry.checkedout = None
        release.status = "draft"
        outcome, prefix = "rejected", "[Rejected]"

    if notes:
        db.add(ReleaseNote(
            pr_id=release.id,
            note=f"{prefix} {notes}",
            from_id=payload.editor_id,
            from_name=payload.editor_name,
            created_at=now,
        ))
    db.commit()

    write_log(db, user_id=current_user.id, action=f"RELEASE_{outcome.upper()}", resource="editorial",
              ip=client_ip(request), meta={"release_id": release.id, "queue_id": entry.id})
    return ReviewResult(action=outcome)
