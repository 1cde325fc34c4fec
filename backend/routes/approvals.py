# backend/routes/approvals.py
import logging
import uuid
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_db
from models.release import Approval
from models.users import User
from routes.releases import get_own_release
from schemas.release import (
    ApprovalCreate, ApprovalCreated, ApprovalList, ApprovalOut, ApprovalResponse, PriorApprover
)
from utils.audit import write_log, client_ip
from utils.tokenJWT import get_current_user

router = APIRouter(tags=["Approvals"])
logger = logging.getLogger(__name__)

# Stakeholder sign-off on a release. Owners request approvals; approvers answer
# through the public /approval/{uuid} link they receive by e-mail.


def _now():
    return datetime.now(timezone.utc)


@router.get("/pr/{release_uuid}/approval", response_model=ApprovalList)
def list_approvals(release_uuid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    release = get_own_release(db, release_uuid, current_user)

    approvals = db.query(Approval).filter(
        Approval.release_id == release.id
    ).order_by(Approval.requested_at.asc(), Approval.id.asc()).all()

    # Approvers used on the brand's other releases, one per address
    prior, seen = [], set()
    rows = db.query(Approval.email, Approval.email_to).filter(
        Approval.company_id == release.company_id,
        Approval.release_id != release.id,
        Approval.email.isnot(None),
    ).order_by(Approval.id.asc()).all()
    for email, email_to in rows:
        if email and email not in seen:
            seen.add(email)
            prior.append(PriorApprover(email=email, email_to=email_to))

    return ApprovalList(approvals=[ApprovalOut.model_validate(a) for a in approvals], prior_approvers=prior)


@router.post("/pr/{release_uuid}/approval", response_model=ApprovalCreated, status_code=201)
def request_approval(
    release_uuid: str,
    payload: ApprovalCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    release = get_own_release(db, release_uuid, current_user)

    recipients = [(p.email, p.email_to) for p in payload.prior_approvers]
    if payload.email and payload.email_to:
        recipients.append((payload.email, payload.email_to))
    if not recipients:
        raise HTTPException(status_code=400, detail="No approver specified")

    now = _now()
    created = []
    for email, email_to in recipients:
        approval = Approval(
            uuid=str(uuid.uuid4()),
            release_id=release.id,
            company_id=release.company_id,
            user_id=current_user.id,
            email=email,
            email_to=email_to,
            notes=payload.notes or None,
            requested_at=now,
            approved=False,
        )
        db.add(approval)
        created.append(approval)
    db.commit()

    result = ApprovalCreated(approvals=[ApprovalOut.model_validate(a) for a in created])
    for approval in result.approvals:
        logger.info("Approval %s for release %s requested from %s", approval.uuid, release.id, approval.email)

    write_log(db, user_id=current_user.id, action="APPROVAL_REQUEST", resource="releases",
              ip=client_ip(request), meta={"release_id": release.id, "count": len(created)})
    return result


@router.delete("/pr/{release_uuid}/approval/{approval_uuid}")
def delete_approval(
    release_uuid: str,
    approval_uuid: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    release = get_own_release(db, release_uuid, current_user)
    approval = db.query(Approval).filter(
        Approval.uuid == approval_uuid, Approval.release_id == release.id
    ).first()
    if not approval:
        raise HTTPException(status_code=404, detail="Approval not found")
    if approval.signed_at:
        raise HTTPException(status_code=400, detail="Cannot delete a signed approval")

    db.delete(approval)
    db.commit()
    return {"success": True}


# Public: the approval uuid is the credential
@router.post("/approval/{approval_uuid}/respond")
def respond_to_approval(approval_uuid: str, payload: ApprovalResponse, request: Request, db: Session = Depends(get_db)):
    approval = db.query(Approval).filter(Approval.uuid == approval_uuid).first()
    if not approval:
        raise HTTPException(status_code=404, detail="Approval request not found")
    if approval.signed_at:
        raise HTTPException(status_code=400, detail="This approval has already been responded to")

    signature = (payload.signature or "").strip()
    if not signature:
        raise HTTPException(status_code=400, detail="Signature is required")

    approval.signature = signature
    approval.feedback = payload.feedback or None
    approval.approved = payload.approved
    approval.signed_at = _now()
    db.commit()

    write_log(db, user_id=approval.user_id, action="APPROVAL_RESPONSE", resource="releases",
              ip=client_ip(request), meta={"release_id": approval.release_id, "approved": payload.approved})
    return {"success": True}
