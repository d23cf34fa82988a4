# storefront/data/seed.py
from sqlalchemy.orm import Session

from storefront.data.models import CategoryModel, ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = [
    {"name": "Clothing", "slug": "clothing",
     "image_url": "https://images.pexels.com/photos/298863/pexels-photo-298863.jpeg"},
    {"name": "Tableware", "slug": "tableware",
     "image_url": "https://images.pexels.com/photos/7045694/pexels-photo-7045694.jpeg"},
    {"name": "Kitchen", "slug": "kitchen",
     "image_url": "https://images.pexels.com/photos/3768162/pexels-photo-3768162.jpeg"},
    {"name": "Home Decor", "slug": "home-decor",
     "image_url": "https://images.pexels.com/photos/2986011/pexels-photo-2986011.jpeg"},
]

# category = slug z CATEGORIES
PRODUCTS = [
    {"name": "Handwoven Basket", "slug": "handwoven-basket", "category": "home-decor",
     "description": "Beautifully crafted Rwandan basket made from natural sisal and sweetgrass.",
     "price": 15000, "discount_price": None, "is_new": True, "stock_level": 40,
     "image_url": "https://images.pexels.com/photos/1409937/pexels-photo-1409937.jpeg"},
    {"name": "Ceramic Dinner Plate", "slug": "ceramic-dinner-plate", "category": "tableware",
     "description": "Locally made ceramic plate, ideal for modern table settings.",
     "price": 12000, "discount_price": 10000, "is_new": False, "stock_level": 60,
     "image_url": "https://images.pexels.com/photos/1126728/pexels-photo-1126728.jpeg"},
    {"name": "Woven Wall Art", "slug": "woven-wall-art", "category": "home-decor",
     "description": "Traditional wall decor made from banana leaves and raffia.",
     "price": 20000, "discount_price": 18000, "is_new": True, "stock_level": 8,
     "image_url": "https://images.pexels.com/photos/1166642/pexels-photo-1166642.jpeg"},
    {"name": "Cooking Spoon Set", "slug": "cooking-spoon-set", "category": "kitchen",
     "description": "Hand-carved spoon set made from sustainable hardwood.",
     "price": 8000, "discount_price": None, "is_new": False, "stock_level": 35,
     "image_url": "https://images.pexels.com/photos/3952040/pexels-photo-3952040.jpeg"},
    {"name": "Cotton Wrap Skirt", "slug": "cotton-wrap-skirt", "category": "clothing",
     "description": "Colorful African print skirt made from 100% cotton fabric.",
     "price": 22000, "discount_price": 20000, "is_new": True, "stock_level": 15,
     "image_url": "https://images.pexels.com/photos/977659/pexels-photo-977659.jpeg"},
    {"name": "Luxury Woven Blanket", "slug": "luxury-woven-blanket", "category": "clothing",
     "description": "Soft handwoven blanket crafted from local cotton, perfect for cozy evenings.",
     "price": 40000, "discount_price": 35000, "is_new": False, "stock_level": 5,
     "image_url": "https://images.pexels.com/photos/1866149/pexels-photo-1866149.jpeg"},
    {"name": "Handcrafted Teak Tray", "slug": "handcrafted-teak-tray", "category": "kitchen",
     "description": "Elegant serving tray made from polished teak wood.",
     "price": 25000, "discount_price": None, "is_new": True, "stock_level": 20,
     "image_url": "https://images.pexels.com/photos/5946733/pexels-photo-5946733.jpeg"},
    {"name": "Gold-Trimmed Ceramic Bowl", "slug": "gold-ceramic-bowl", "category": "tableware",
     "description": "Luxury bowl with 24k gold trim, fired in small artisan batches.",
     "price": 30000, "discount_price": 28000, "is_new": False, "stock_level": 0,
     "image_url": "https://images.pexels.com/photos/5638742/pexels-photo-5638742.jpeg"},
    {"name": "Rwandan Coffee Gift Box", "slug": "coffee-gift-box", "category": "home-decor",
     "description": "Premium Arabica coffee with handmade cup set, perfect for gifting.",
     "price": 35000, "discount_price": 30000, "is_new": True, "stock_level": 12,
     "image_url": "https://images.pexels.com/photos/3394654/pexels-photo-3394654.jpeg"},
]


def seed(db: Session) -> None:
    # not forcing: only seed if empty
    if db.query(CategoryModel).first():
        return

    by_slug = {}
    for data in CATEGORIES:
        category = CategoryModel(**data)
        db.add(category)
        by_slug[category.slug] = category
    db.flush()

    for data in PRODUCTS:
        data = dict(data)
        category = by_slug[data.pop("category")]
        db.add(ProductModel(category_id=category.id, **data))

    db.commit()
    logger.info(f"Seeded catalog: {len(CATEGORIES)} categories, {len(PRODUCTS)} products")
