from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from metier_store.database import get_session
from metier_store.models.category import Category
from metier_store.schemas.product_schemas import CategoryRead

router = APIRouter()


# ---------- LIST ALL CATEGORIES ----------
@router.get("", summary="List all categories")
def list_categories(session: Session = Depends(get_session)):
    categories = session.exec(select(Category).order_by(Category.name)).all()
    return {"categories": [CategoryRead.model_validate(c) for c in categories]}
