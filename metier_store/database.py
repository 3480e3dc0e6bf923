from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool

from metier_store.config import settings


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        # a single shared connection keeps an in-memory database alive
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=1800,
    )


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables(bind=None):
    from metier_store.models import category, product, cart, order, order_item  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session
