from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class ProductSummary(BaseModel):
    id: int
    sku: str
    title: str
    brand: str = "Métier"
    category: Optional[str] = None
    price: Decimal
    msrp: Optional[Decimal] = None
    in_stock: bool = True
    quantity: int = 0
    image: Optional[str] = None
    compatibility: str = ""


class ProductRead(ProductSummary):
    description: str = ""
    model: Optional[str] = None
    rating: float = 0.0
    reviews: int = 0
    specifications: dict = {}
    fitment: List[dict] = []


class ProductList(BaseModel):
    products: List[ProductRead]
    total_items: int = 0
    total_pages: int = 1
    current_page: int = 1
    limit: int = 20
