# backend/routes/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.user import MeResponse, SubscriptionOut, UserResponse
from utils import credits as ledger
from utils.tokenJWT import get_current_user

router = APIRouter(tags=["Auth"])


# Retrieve current authenticated user details, permissions and credit counters
@router.get("/me", response_model=MeResponse)
def me(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    sub = current_user.subscription
    return MeResponse(
        **UserResponse.model_validate(current_user).model_dump(),
        permissions=sorted(p.value for p in current_user.permissions),
        subscription=SubscriptionOut.model_validate(sub) if sub else SubscriptionOut(),
        credit_balance=ledger.user_balance(db, current_user.id),
    )
