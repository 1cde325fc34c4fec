# backend/routes/distribution.py
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import or_
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from models.users import User
from routes.releases import get_own_release
from schemas.release import DistributionInfo, DistributionProduct, DistributionRequest, DistributionResult
from utils import credits as ledger
from utils.audit import write_log, client_ip
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/pr", tags=["Distribution"])
logger = logging.getLogger(__name__)


def _upgrade_products(db: Session, partner_id) -> List[Product]:
    # Global upgrades plus the ones sold by the caller's partner, cheapest first
    partner_filter = Product.partner_id.is_(None)
    if partner_id:
        partner_filter = or_(partner_filter, Product.partner_id == partner_id)
    return db.query(Product).filter(
        Product.is_active == True,
        Product.is_deleted == False,
        Product.is_upgrade == True,
        Product.product_type.isnot(None),
        partner_filter,
    ).order_by(Product.price.asc(), Product.id.asc()).all()


def _append_type(current: str, product_type: str) -> str:
    types = [t for t in (current or "").split(",") if t and t != "standard"]
    if product_type not in types:
        types.append(product_type)
    return ",".join(types)


@router.get("/{release_uuid}/distribution", response_model=DistributionInfo)
def get_distribution(release_uuid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    release = get_own_release(db, release_uuid, current_user)

    products = [
        DistributionProduct(
            id=p.id,
            name=p.display_name or p.short_name or "Product",
            description=p.description,
            price=p.price,
            price_display=f"${p.price / 100:.0f}",
            type=p.product_type,
            icon=p.icon,
            label=p.label,
            is_solo_upgrade=bool(p.is_solo_upgrade),
        )
        for p in _upgrade_products(db, current_user.partner_id)
    ]
    return DistributionInfo(
        distribution=release.distribution,
        credit_balance=ledger.balance_by_type(db, current_user.id, release.company_id),
        products=products,
    )


@router.post("/{release_uuid}/distribution", response_model=DistributionResult)
def choose_distribution(
    release_uuid: str,
    payload: DistributionRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    release = get_own_release(db, release_uuid, current_user)

    if payload.action == "skip":
        release.distribution = "standard"
        db.commit()
        return DistributionResult(distribution=release.distribution)

    offered = {p.product_type for p in _upgrade_products(db, current_user.partner_id)}
    if not payload.product_type or payload.product_type not in offered:
        raise HTTPException(status_code=400, detail="Invalid product type")

    product_type = payload.product_type
    if ledger.type_balance(db, current_user.id, release.company_id, product_type) < 1:
        raise HTTPException(status_code=400, detail="Insufficient credits")

    try:
        ledger.spend_typed_credit(
            db, user_id=current_user.id, company_id=release.company_id, release_id=release.id,
            product_type=product_type, notes=f"Used for PR: {(release.title or release.uuid)[:30]}",
        )
        release.distribution = _append_type(release.distribution, product_type)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error applying %s credit to release %s", product_type, release.id)
        raise HTTPException(status_code=500, detail="Failed to process distribution")

    write_log(db, user_id=current_user.id, action="RELEASE_DISTRIBUTION", resource="releases",
              ip=client_ip(request), meta={"release_id": release.id, "product_type": product_type})
    return DistributionResult(distribution=release.distribution)
