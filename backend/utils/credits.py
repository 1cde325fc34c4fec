# backend/utils/credits.py
"""Brand credit ledger.

Balances are never stored: they are sums over ``brand_credits`` rows.
Grants are positive rows without a release; consuming a credit inserts a
``-1`` row linked to the release, and deleting that release removes the row
again, so the ledger corrects itself without a refund entry.
"""
from typing import Dict, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from models.credits import BrandCredit


def company_balance(db: Session, company_id: int) -> int:
    """Unconsumed credits granted to a company."""
    total = db.query(func.coalesce(func.sum(BrandCredit.credits), 0)).filter(
        BrandCredit.company_id == company_id,
        BrandCredit.pr_id.is_(None),
    ).scalar()
    return int(total or 0)


def _net_balance(db: Session, user_id: int, company_id: Optional[int]) -> int:
    q = db.query(func.coalesce(func.sum(BrandCredit.credits), 0)).filter(BrandCredit.user_id == user_id)
    if company_id is None:
        q = q.filter(BrandCredit.company_id.is_(None))
    else:
        q = q.filter(BrandCredit.company_id == company_id)
    return int(q.scalar() or 0)


def user_balance(db: Session, user_id: int) -> int:
    """Net user-level credits (rows without a company)."""
    return _net_balance(db, user_id, None)


def available_credits(db: Session, user_id: int, company_id: int) -> int:
    # Brand credits first, user-level credits as fallback
    brand = _net_balance(db, user_id, company_id)
    if brand > 0:
        return brand
    return user_balance(db, user_id)


def balance_by_type(db: Session, user_id: int, company_id: int) -> Dict[str, int]:
    rows = db.query(BrandCredit.product_type, func.sum(BrandCredit.credits)).filter(
        BrandCredit.user_id == user_id,
        BrandCredit.company_id == company_id,
    ).group_by(BrandCredit.product_type).all()
    return {ptype: int(total or 0) for ptype, total in rows if ptype}


def grant_credits(db: Session, *, user_id: int, credits: int, company_id: Optional[int] = None,
                  product_type: str = "pr", notes: Optional[str] = None) -> BrandCredit:
    row = BrandCredit(
        user_id=user_id,
        company_id=company_id,
        pr_id=None,
        credits=credits,
        product_type=product_type or "pr",
        notes=notes[:48] if notes else None,
    )
    db.add(row)
    db.flush()
    return row


def consume_credit(db: Session, *, user_id: int, company_id: int, release_id: int,
                   notes: Optional[str] = None) -> BrandCredit:
    """Debit one credit for a release, from the brand ledger when it has a balance."""
    ledger_company = company_id if _net_balance(db, user_id, company_id) > 0 else None
    row = BrandCredit(
        user_id=user_id,
        company_id=ledger_company,
        pr_id=release_id,
        credits=-1,
        product_type="pr",
        notes=notes[:48] if notes else None,
    )
    db.add(row)
    db.flush()
    return row


def release_consumption(db: Session, *, release_id: int, user_id: int) -> int:
    """Drop the consumption rows of a release; returns how many were removed."""
    return db.query(BrandCredit).filter(
        BrandCredit.pr_id == release_id,
        BrandCredit.user_id == user_id,
    ).delete(synchronize_session=False)


def type_balance(db: Session, user_id: int, company_id: int, product_type: str) -> int:
    """Net credits of one product type held for a brand."""
    total = db.query(func.coalesce(func.sum(BrandCredit.credits), 0)).filter(
        BrandCredit.user_id == user_id,
        BrandCredit.company_id == company_id,
        BrandCredit.product_type == product_type,
    ).scalar()
    return int(total or 0)


def spend_typed_credit(db: Session, *, user_id: int, company_id: int, release_id: int,
                       product_type: str, notes: Optional[str] = None) -> BrandCredit:
    # Upgrades are always paid from the brand ledger
    row = BrandCredit(
        user_id=user_id,
        company_id=company_id,
        pr_id=release_id,
        credits=-1,
        product_type=product_type,
        notes=notes[:48] if notes else None,
    )
    db.add(row)
    db.flush()
    return row
