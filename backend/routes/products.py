# backend/routes/products.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import get_current_user, permission_required
from utils.audit import write_log, client_ip
from models.users import User, Permission
from models.product import Product
import schemas.product as product_schemas

router = APIRouter(tags=["Products"])

# ---- HELPERS ----
def _require_fields(payload: product_schemas.ProductWrite):
    if not payload.display_name or not payload.price or not payload.product_type:
        raise HTTPException(status_code=400, detail="Display name, price, and distribution tag are required")
    if payload.price < 0:
        raise HTTPException(status_code=400, detail="Price must be a positive amount in cents")

def _get_live_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id, Product.is_deleted == False).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# CATALOG
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_catalog(
    product_type: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Active products a user can buy, cheapest first."""
    query = db.query(Product).filter(Product.is_active == True, Product.is_deleted == False)
    if product_type:
        query = query.filter(Product.product_type == product_type)
    items = query.order_by(Product.price.asc(), Product.id.asc()).all()
    return {"items": items, "total": len(items)}


# =========================
# ADMIN
# =========================
@router.get("/admin/products", response_model=product_schemas.ProductListPage)
def list_products_admin(
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.MANAGE_PRODUCTS)),
):
    items = db.query(Product).filter(Product.is_deleted == False).order_by(Product.id.asc()).all()
    return {"items": items, "total": len(items)}


@router.post("/admin/products", response_model=product_schemas.ProductOut)
def create_product(
    payload: product_schemas.ProductWrite,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.MANAGE_PRODUCTS)),
):
    _require_fields(payload)

    product = Product(
        display_name=payload.display_name,
        short_name=payload.short_name or None,
        description=payload.description or None,
        icon=payload.icon or None,
        label=payload.label or None,
        price=payload.price,
        product_type=payload.product_type,
        product_credits=payload.product_credits,
        partner_id=payload.partner_id,
        stripe_test=payload.stripe_test,
        stripe_live=payload.stripe_live,
        is_active=True if payload.is_active is None else payload.is_active,
        is_upgrade=True if payload.is_upgrade is None else payload.is_upgrade,
        is_solo_upgrade=bool(payload.is_solo_upgrade),
        partner_share=0,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
              ip=client_ip(request), meta={"product_id": product.id, "price": product.price})
    return product


@router.put("/admin/products/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductWrite,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.MANAGE_PRODUCTS)),
):
    _require_fields(payload)
    product = _get_live_product(db, product_id)

    product.display_name = payload.display_name
    product.short_name = payload.short_name or None
    product.description = payload.description or None
    product.icon = payload.icon or None
    product.label = payload.label or None
    product.price = payload.price
    product.product_type = payload.product_type
    product.product_credits = payload.product_credits
    product.partner_id = payload.partner_id
    if payload.stripe_test is not None:
        product.stripe_test = payload.stripe_test
    if payload.stripe_live is not None:
        product.stripe_live = payload.stripe_live
    if payload.is_active is not None:
        product.is_active = payload.is_active
    product.is_upgrade = True if payload.is_upgrade is None else payload.is_upgrade
    product.is_solo_upgrade = bool(payload.is_solo_upgrade)

    db.commit()
    db.refresh(product)

    write_log(db, user_id=current_user.id, action="PRODUCT_UPDATE", resource="products",
              ip=client_ip(request), meta={"product_id": product.id, "price": product.price})
    return product


@router.delete("/admin/products/{product_id}")
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(permission_required(Permission.MANAGE_PRODUCTS)),
):
    # Soft delete: historical cart items keep pointing at the row
    product = _get_live_product(db, product_id)
    product.is_deleted = True
    db.commit()

    write_log(db, user_id=current_user.id, action="PRODUCT_DELETE", resource="products",
              ip=client_ip(request), meta={"product_id": product_id})
    return {"success": True}
