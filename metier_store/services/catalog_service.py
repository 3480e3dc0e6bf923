# metier_store/services/catalog_service.py
import logging

from slugify import slugify
from sqlmodel import Session, select

from metier_store.models.category import Category
from metier_store.models.product import Product
from metier_store.schemas.product_schemas import ProductRead, ProductSummary

logger = logging.getLogger(__name__)


SEED_CATEGORIES = [
    "Electronics",
    "Exhaust Systems",
    "Intake Systems",
    "Intercoolers",
    "Turbocharger Components",
    "Turbochargers",
]

SEED_PRODUCTS = [
    {
        "sku": "MP17029",
        "title": "Compressor Wheel (Wicked Wheel)",
        "category": "Turbocharger Components",
        "price": 299,
        "msrp": 349,
        "rating": 4.5,
        "reviews": 15,
        "quantity": 12,
        "compatibility": "Ford Powerstroke 7.3L (1994.5–2003)",
        "model": "GTP38",
        "description": (
            "This is an upgraded billet compressor wheel (wicked wheel style) designed for the "
            "Garrett GTP38 turbocharger, widely used in Ford Powerstroke 7.3L diesel engines."
        ),
        "specifications": {
            "Part Number": "MP17029",
            "OE Reference": "170293",
            "Model Compatibility": "GTP38",
            "Material": "Billet Aluminum",
            "Finish": "Machined",
            "Weight": "0.8 lbs",
            "Warranty": "2 Years",
        },
        "fitment": [
            {"year": "1994-2003", "make": "Ford", "model": "F-250 Super Duty", "engine": "7.3L Powerstroke"},
            {"year": "1994-2003", "make": "Ford", "model": "F-350 Super Duty", "engine": "7.3L Powerstroke"},
        ],
    },
    {
        "sku": "MET-7811",
        "title": "GTX 2867R Turbocharger",
        "category": "Turbochargers",
        "price": 899,
        "msrp": 999,
        "rating": 4.5,
        "reviews": 15,
        "quantity": 8,
        "compatibility": "Subaru WRX STI 2015-2018",
        "model": "GTX 2867R",
        "description": "High-performance turbocharger designed for maximum power and reliability.",
        "specifications": {
            "Part Number": "MET-7811",
            "Compressor Wheel": "67mm",
            "Turbine Wheel": "62mm",
            "A/R Ratio": "0.64",
            "Max HP": "450HP",
            "Material": "Inconel",
            "Warranty": "2 Years",
        },
        "fitment": [
            {"year": "2015-2018", "make": "Subaru", "model": "WRX STI", "engine": "2.5L H4"},
        ],
    },
    {
        "sku": "MET-5432",
        "title": "500HP Intercooler Kit",
        "category": "Intercoolers",
        "price": 549,
        "msrp": 599,
        "rating": 4.5,
        "reviews": 15,
        "quantity": 0,
        "compatibility": "Subaru WRX 2015-2021",
        "model": "Front Mount",
        "description": "High-efficiency front-mount intercooler kit for maximum cooling performance.",
        "specifications": {
            "Part Number": "MET-5432",
            "Core Size": '24" x 12" x 3.5"',
            "End Tank": "Cast Aluminum",
            "Piping": '2.5" Aluminum',
            "Max HP": "500HP",
            "Finish": "Black Powder Coat",
            "Warranty": "2 Years",
        },
        "fitment": [
            {"year": "2015-2021", "make": "Subaru", "model": "WRX", "engine": "2.0L H4"},
        ],
    },
    {
        "sku": "MET-9876",
        "title": "Electronic Boost Controller",
        "category": "Electronics",
        "price": 359,
        "msrp": 399,
        "rating": 4.5,
        "reviews": 15,
        "quantity": 0,
        "compatibility": "Universal Application",
        "model": "EBC-Pro",
        "description": "Advanced electronic boost controller with smartphone connectivity.",
        "specifications": {
            "Part Number": "MET-9876",
            "Display": '3.5" Color LCD',
            "Connectivity": "Bluetooth/WiFi",
            "Channels": "4 Input / 2 Output",
            "Operating Temp": "-40°F to 185°F",
            "Power": "12V DC",
            "Warranty": "3 Years",
        },
        "fitment": [
            {"year": "Universal", "make": "Universal", "model": "Universal", "engine": "Turbocharged"},
        ],
    },
    {
        "sku": "MET-3344",
        "title": "Cold Air Intake System",
        "category": "Intake Systems",
        "price": 299,
        "msrp": 349,
        "rating": 4.5,
        "reviews": 15,
        "quantity": 15,
        "compatibility": "Subaru WRX 2015-2021",
        "model": "CAI-Pro",
        "description": "High-flow cold air intake system for improved performance and sound.",
        "specifications": {
            "Part Number": "MET-3344",
            "Filter": "High-Flow Cotton",
            "Piping": '3" Aluminum',
            "Heat Shield": "Carbon Fiber",
            "Finish": "Polished Aluminum",
            "HP Gain": "+15-20HP",
            "Warranty": "2 Years",
        },
        "fitment": [
            {"year": "2015-2021", "make": "Subaru", "model": "WRX", "engine": "2.0L H4"},
        ],
    },
]


def seed_catalog(session: Session) -> int:
    """Insert the demo categories and products once. Returns products added."""
    if session.exec(select(Product)).first():
        return 0

    categories = {}
    for name in SEED_CATEGORIES:
        category = Category(name=name, slug=slugify(name))
        session.add(category)
        categories[name] = category
    session.commit()

    for data in SEED_PRODUCTS:
        data = dict(data)
        category = categories[data.pop("category")]
        session.add(Product(category_id=category.id, **data))
    session.commit()

    logger.info(f"Seeded catalog with {len(SEED_PRODUCTS)} products")
    return len(SEED_PRODUCTS)


def product_summary(product: Product) -> ProductSummary:
    return ProductSummary(
        id=product.id,
        sku=product.sku,
        title=product.title,
        brand=product.brand,
        category=product.category.name if product.category else None,
        price=product.price,
        msrp=product.msrp,
        in_stock=product.in_stock,
        quantity=product.quantity,
        image=product.image,
        compatibility=product.compatibility,
    )


def product_read(product: Product) -> ProductRead:
    return ProductRead(
        **product_summary(product).model_dump(),
        description=product.description,
        model=product.model,
        rating=product.rating,
        reviews=product.reviews,
        specifications=product.specifications or {},
        fitment=product.fitment or [],
    )
