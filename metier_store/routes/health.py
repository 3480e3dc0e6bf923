import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from metier_store.config import settings
from metier_store.database import get_session
from metier_store.models.product import Product
from metier_store.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check")
def health_check(session: Session = Depends(get_session)):
    database = "ok"
    products = None

    try:
        products = session.exec(select(func.count()).select_from(Product)).one()
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        database = "failed"

    return {
        "status": "ok",
        "env": settings.ENV,
        "database": database,
        "catalog_products": products,
        "timestamp": utc_now().isoformat(),
    }
