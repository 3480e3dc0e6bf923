from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "local"

    # backend storage (in-memory sqlite unless overridden)
    DATABASE_URL: str = "sqlite://"
    SEED_CATALOG: bool = True

    # client side
    API_BASE_URL: str = "http://localhost:5000"
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    ORDER_SUBMIT_TIMEOUT_SECONDS: float = 15.0
    PAYMENT_CONFIRM_DELAY_SECONDS: float = 2.0

    # pricing
    FREE_SHIPPING_THRESHOLD: Decimal = Decimal("500")
    FLAT_SHIPPING_FEE: Decimal = Decimal("25")
    TAX_RATE: Decimal = Decimal("0.08")

    ORDER_NUMBER_PREFIX: str = "MET"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"


settings = Settings()
