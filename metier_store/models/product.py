from sqlmodel import SQLModel, Field, Relationship, Column, JSON
from typing import Optional, TYPE_CHECKING, List
from datetime import datetime

from sqlalchemy import DateTime

from metier_store.utils.timestamps import utc_now

if TYPE_CHECKING:
    from .category import Category


class Product(SQLModel, table=True):
    #main info
    id: Optional[int] = Field(default=None, primary_key=True)
    sku: str = Field(index=True, unique=True)
    title: str
    brand: str = "Métier"
    description: str = ""

    #fitment
    compatibility: str = ""
    model: Optional[str] = None
    specifications: dict = Field(default_factory=dict, sa_column=Column(JSON))
    fitment: List[dict] = Field(default_factory=list, sa_column=Column(JSON))

    #Shop Details
    price: float
    msrp: Optional[float] = None
    quantity: int = 0  # units available
    rating: float = 0.0
    reviews: int = 0
    image: str = "/api/placeholder/300/200"

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    #category
    category_id: Optional[int] = Field(default=None, foreign_key="category.id")
    category: Optional["Category"] = Relationship(back_populates="products")

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0
