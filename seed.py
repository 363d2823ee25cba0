"""
First-run defaults

Every collection is seeded only when its document does not exist yet; an
existing collection, even an empty one, is never touched.
"""

import logging

from auth import hash_password
from database import BaseStore, new_id, now_iso

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@gaushalafresh.com"
ADMIN_PASSWORD = "admin123"


def _variant(size: str, price: float, unit: str) -> dict:
    return {"id": new_id(), "size": size, "price": price, "unit": unit, "stockStatus": "in_stock"}


def _product(name, slug, tagline, category_id, short, long, variants, image, benefits, rating, reviews) -> dict:
    now = now_iso()
    return {
        "id": new_id(),
        "name": name,
        "slug": slug,
        "tagline": tagline,
        "categoryId": category_id,
        "shortDescription": short,
        "longDescription": long,
        "variants": variants,
        "images": [image],
        "amazonLink": "https://amazon.in",
        "benefits": benefits,
        "isFeatured": True,
        "isPublished": True,
        "stockStatus": "in_stock",
        "rating": rating,
        "reviewCount": reviews,
        "createdAt": now,
        "updatedAt": now,
    }


def default_users() -> list:
    pwd_hash, salt = hash_password(ADMIN_PASSWORD)
    return [{
        "id": new_id(),
        "email": ADMIN_EMAIL,
        "passwordHash": pwd_hash,
        "salt": salt,
        "name": "Admin",
        "role": "admin",
        "createdAt": now_iso(),
    }]


def default_categories() -> list:
    return [
        {"id": new_id(), "name": "Milk", "slug": "milk", "sortOrder": 1},
        {"id": new_id(), "name": "Ghee", "slug": "ghee", "sortOrder": 2},
        {"id": new_id(), "name": "Dahi", "slug": "dahi", "sortOrder": 3},
        {"id": new_id(), "name": "Lassi", "slug": "lassi", "sortOrder": 4},
    ]


def default_products(categories: list) -> list:
    by_slug = {c.get("slug"): c.get("id") for c in categories}
    return [
        _product(
            "Fresh Cow's Milk", "fresh-cows-milk", "Pure milk from happy cows", by_slug.get("milk"),
            "Farm-fresh cow's milk from our grass-fed, free-range cows.",
            "Collected fresh every morning and delivered within 24 hours. No preservatives, "
            "no additives, just pure wholesome milk the way nature intended.",
            [_variant("500ml", 35, "pouch"), _variant("1 Liter", 65, "pouch"), _variant("2 Liter", 125, "pack")],
            "https://images.unsplash.com/photo-1563636619-e9143da7973b?w=800",
            ["Farm Fresh", "No Preservatives", "Rich in Calcium"], 4.9, 2340,
        ),
        _product(
            "Pure Desi Ghee", "pure-desi-ghee", "The golden essence of tradition", by_slug.get("ghee"),
            "Made using the traditional Bilona method.",
            "Slow-churned to perfection with the rich aroma of grandmother's kitchen.",
            [_variant("200g", 250, "jar"), _variant("500g", 550, "jar"), _variant("1kg", 999, "jar")],
            "https://images.unsplash.com/photo-1631452180519-c014fe946bc7?w=800",
            ["Bilona Method", "High Smoke Point", "Omega-3 Rich"], 4.95, 1856,
        ),
        _product(
            "Fresh Dahi", "fresh-dahi", "Set curd with cultured taste", by_slug.get("dahi"),
            "Thick, creamy dahi made from fresh cow's milk.",
            "Perfect consistency, mildly tangy, and incredibly smooth.",
            [_variant("200g", 30, "cup"), _variant("400g", 55, "cup"), _variant("1kg", 120, "pack")],
            "https://images.unsplash.com/photo-1488477181946-6428a0291777?w=800",
            ["Probiotics", "Aids Digestion", "No Preservatives"], 4.8, 1234,
        ),
        _product(
            "Fresh Lassi", "fresh-lassi", "Refreshing tradition in every sip", by_slug.get("lassi"),
            "Signature lassi made fresh from thick dahi.",
            "Churned to creamy perfection. Available in sweet and salted variants.",
            [_variant("200ml Sweet", 35, "bottle"), _variant("200ml Salted", 35, "bottle"),
             _variant("500ml Sweet", 75, "bottle")],
            "https://images.unsplash.com/photo-1587304801900-75dee63b6ea0?w=800",
            ["Cooling Effect", "Probiotic Rich", "Energy Booster"], 4.85, 987,
        ),
    ]


def default_testimonials() -> list:
    return [
        {
            "id": new_id(),
            "name": "Priya Sharma",
            "location": "Mumbai",
            "image": "https://images.unsplash.com/photo-1494790108377-be9c29b29330?w=200",
            "quote": "The taste of GauShala Fresh milk takes me back to my grandmother's village.",
            "product": "Fresh Milk",
            "rating": 5,
            "isFeatured": True,
            "isPublished": True,
            "createdAt": now_iso(),
        },
        {
            "id": new_id(),
            "name": "Rajesh Patel",
            "location": "Ahmedabad",
            "image": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=200",
            "quote": "The ghee is absolutely incredible. The aroma is heavenly!",
            "product": "Pure Desi Ghee",
            "rating": 5,
            "isFeatured": True,
            "isPublished": True,
            "createdAt": now_iso(),
        },
    ]


def default_banners() -> list:
    return [{
        "id": new_id(),
        "title": "Farm Fresh, Heart Blessed",
        "subtitle": "Experience the pure taste of tradition",
        "backgroundImage": "https://images.unsplash.com/photo-1500595046743-cd271d694d30?w=2000",
        "ctaText": "Explore Products",
        "ctaLink": "/products",
        "page": "home",
        "sortOrder": 1,
        "isActive": True,
        "createdAt": now_iso(),
    }]


def default_settings() -> dict:
    return {
        "siteName": "Shudh Dudh",
        "tagline": "100% Unadulterated",
        "phone": "+91-9815987765",
        "phone2": "+91-9988250038",
        "email": "jindal.dairy@gmail.com",
        "address": "House No. 43-A, Gian Colony, Sant Nagar, Patiala, Punjab - 147001",
        "whatsappNumber": "919815987765",
        "amazonStoreUrl": "",
        "fssai": "12125681000197",
        "socialLinks": {"facebook": "", "instagram": "", "youtube": "", "twitter": ""},
    }


def default_faqs() -> list:
    return [
        {
            "id": new_id(),
            "question": "How fresh is your milk?",
            "answer": "Our milk is collected fresh every morning and delivered within 24 hours.",
            "category": "products",
            "sortOrder": 1,
            "isPublished": True,
        },
        {
            "id": new_id(),
            "question": "Do you deliver to my area?",
            "answer": "We currently deliver across major cities. Contact us on WhatsApp to check availability.",
            "category": "delivery",
            "sortOrder": 2,
            "isPublished": True,
        },
    ]


def initialize_data(store: BaseStore) -> list:
    """Seed every missing collection; returns the names that were created."""
    defaults = [
        ("users", default_users),
        ("categories", default_categories),
        ("products", lambda: default_products(store.read("categories"))),
        ("testimonials", default_testimonials),
        ("banners", default_banners),
        ("settings", default_settings),
        ("faqs", default_faqs),
        ("inquiries", list),
    ]
    created = []
    for name, factory in defaults:
        if store.exists(name):
            continue
        store.write(name, factory())
        created.append(name)
        logger.info("Seeded collection %s", name)
    return created
