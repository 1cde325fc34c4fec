# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, date, time

from database import get_db
from models.log import Log
from models.users import User, Permission
from schemas.log import LogEntryOut, LogPage
from utils.tokenJWT import permission_required

router = APIRouter(prefix="/logs", tags=["Logs"])

auditor_required = permission_required(Permission.VIEW_AUDIT_LOG)


def _entry(log: Log) -> LogEntryOut:
    out = LogEntryOut.model_validate(log)
    out.user_email = log.user.email if log.user else None
    return out


# Audit trail: checkouts, payments, credit grants, release decisions
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = Query(None, description="e.g. PAYMENT_SUCCEEDED, CREDIT_GRANT"),
    user_id: Optional[int] = Query(None),
    resource: Optional[str] = Query(None, description="payment / credits / releases / editorial ..."),
    status: Optional[str] = Query(None, description="SUCCESS or FAIL"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None, description="Inclusive"),
    db: Session = Depends(get_db),
    current_user: User = Depends(auditor_required),
):
    query = db.query(Log)

    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))
    if user_id is not None:
        query = query.filter(Log.user_id == user_id)
    if resource:
        query = query.filter(Log.resource == resource)
    if status:
        query = query.filter(Log.status == status.upper())
    if date_from:
        query = query.filter(Log.ts >= datetime.combine(date_from, time.min))
    if date_to:
        query = query.filter(Log.ts <= datetime.combine(date_to, time.max))

    total = query.count()
    rows = query.order_by(Log.ts.desc(), Log.id.desc()).offset((page - 1) * page_size).limit(page_size).all()

    return LogPage(items=[_entry(r) for r in rows], total=total, page=page, page_size=page_size)


# Distinct action names, for the dashboard filter dropdown
@router.get("/actions", response_model=List[str])
def list_actions(db: Session = Depends(get_db), current_user: User = Depends(auditor_required)):
    return [a for (a,) in db.query(Log.action).distinct().order_by(Log.action.asc()).all() if a]
