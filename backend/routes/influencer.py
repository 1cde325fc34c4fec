# backend/routes/influencer.py
import uuid
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_db
from models.influencer import Influencer
from models.users import User
from schemas.influencer import InfluencerWrite, InfluencerOut
from utils.audit import write_log, client_ip
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/influencer", tags=["Influencer"])


def _own_profile(db: Session, user: User):
    return db.query(Influencer).filter(Influencer.user_id == user.id).first()


@router.get("", response_model=InfluencerOut)
def get_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    profile = _own_profile(db, current_user)
    if not profile:
        raise HTTPException(status_code=404, detail="Influencer profile not found")
    return profile


@router.post("", response_model=InfluencerOut, status_code=201)
def create_profile(payload: InfluencerWrite, request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    if _own_profile(db, current_user):
        raise HTTPException(status_code=400, detail="You already have an influencer profile")

    full_name = " ".join(filter(None, [current_user.first_name, current_user.last_name]))
    profile = Influencer(
        uuid=str(uuid.uuid4()),
        user_id=current_user.id,
        completed_jobs=0,
        **payload.model_dump(exclude={"name"}),
    )
    profile.name = (payload.name or full_name or current_user.email)[:64]
    db.add(profile)
    db.commit()
    db.refresh(profile)

    write_log(db, user_id=current_user.id, action="INFLUENCER_CREATE", resource="influencer",
              ip=client_ip(request), meta={"influencer_id": profile.id})
    return profile


@router.put("", response_model=InfluencerOut)
def update_profile(payload: InfluencerWrite, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    profile = _own_profile(db, current_user)
    if not profile:
        raise HTTPException(status_code=404, detail="Influencer profile not found")

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile
