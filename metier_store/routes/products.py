from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from metier_store.database import get_session
from metier_store.models.category import Category
from metier_store.models.product import Product
from metier_store.services.catalog_service import product_read
from metier_store.utils.pagination import paginate

router = APIRouter()


# ---------- LIST / SEARCH PRODUCTS ----------
@router.get("", summary="List products with search and category filter")
def list_products(
    search: Optional[str] = None,
    category: Optional[str] = Query(None, description="Category slug"),
    page: int = 1,
    per_page: int = 20,
    session: Session = Depends(get_session),
):
    query = select(Product).order_by(Product.id)

    if search:
        like = f"%{search}%"
        query = query.where(
            Product.title.ilike(like) |
            Product.sku.ilike(like) |
            Product.brand.ilike(like) |
            Product.compatibility.ilike(like)
        )

    if category:
        query = query.join(Category).where(Category.slug == category.lower())

    page_data = paginate(session=session, query=query, page=page, per_page=per_page)
    rows = page_data.pop("rows")

    return {"products": [product_read(p) for p in rows], **page_data}


# ---------- PRODUCT DETAIL ----------
@router.get("/{product_id}", summary="Get product by ID")
def get_product(product_id: int, session: Session = Depends(get_session)):
    product = session.get(Product, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product_read(product)


# ---------- RELATED PRODUCTS ----------
@router.get("/{product_id}/related", summary="Products in the same category")
def related_products(product_id: int, session: Session = Depends(get_session)):
    product = session.get(Product, product_id)
    if not product:
        raise HTTPException(404, "Product not found")

    related = session.exec(
        select(Product).where(
            Product.category_id == product.category_id,
            Product.id != product.id,
        )
    ).all()

    return {"products": [product_read(p) for p in related]}
