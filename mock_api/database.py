import copy
from typing import Dict, Any, List

# In-memory catalog served by the mock API. Records are kept as raw dicts so
# tests can seed malformed entries on purpose.

SAMPLE_SELLERS: List[Dict[str, Any]] = [
    {
        "id": "s-1",
        "name": "Gadget Corner",
        "avatar_url": "https://cdn.example.com/sellers/gadget.png",
        "telegram_url": "https://t.me/gadgetcorner",
        "vk_url": "https://vk.com/gadgetcorner",
        "whatsapp_url": None,
        "instagram_url": None,
    },
    {
        "id": "s-2",
        "name": "Sneaker Lab",
        "avatar_url": None,
        "telegram_url": "https://t.me/sneakerlab",
        "vk_url": None,
        "whatsapp_url": "https://wa.me/79990000000",
        "instagram_url": "https://instagram.com/sneakerlab",
    },
]

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "p-1",
        "name": "iPhone 15",
        "image_url": "https://cdn.example.com/products/iphone15.jpg",
        "price": 89990.0,
        "discount": 10,
        "category": "electronics",
        "stock_quantity": 4,
        "description": "128 GB, black",
        "seller_id": "s-1",
    },
    {
        "id": "p-2",
        "name": "iPhone 13 case",
        "image_url": "https://cdn.example.com/products/case.jpg",
        "price": 990.0,
        "category": "accessories",
        "stock_quantity": 25,
        "description": "",
        "seller_id": "s-1",
    },
    {
        "id": "p-3",
        "name": "Air Runner",
        "image_url": "https://cdn.example.com/products/runner.jpg",
        "price": 12500.0,
        "discount": 25,
        "category": "shoes",
        "stock_quantity": 0,
        "description": "Lightweight running shoes",
        "seller_id": "s-2",
    },
]

SAMPLE_STORIES: List[Dict[str, Any]] = [
    {
        "id": "st-1",
        "title": "New iPhones in stock",
        "image_url": "https://cdn.example.com/stories/iphone.jpg",
        "link": "https://t.me/gadgetcorner/120",
        "seller_id": "s-1",
        "created_at": "2024-05-01T10:00:00Z",
    },
    {
        "id": "st-2",
        "title": "Spring sale",
        "image_url": "https://cdn.example.com/stories/sale.jpg",
        "link": None,
        "seller_id": "s-2",
        "created_at": "2024-05-03T08:30:00Z",
    },
]

COLLECTIONS = ("products", "stories", "sellers")
ENDPOINTS = COLLECTIONS + ("search", "health")

PRODUCTS: List[Any] = []
STORIES: List[Any] = []
SELLERS: List[Any] = []

# endpoint name -> fault settings, see core.FaultIn
FAULTS: Dict[str, Dict[str, Any]] = {}

# every /api request seen since the last reset: path, query and headers
REQUEST_LOG: List[Dict[str, Any]] = []


def get_collection(name: str) -> List[Any]:
    return {"products": PRODUCTS, "stories": STORIES, "sellers": SELLERS}[name]


def load_samples():
    for target, sample in ((PRODUCTS, SAMPLE_PRODUCTS), (STORIES, SAMPLE_STORIES), (SELLERS, SAMPLE_SELLERS)):
        target[:] = copy.deepcopy(sample)
    FAULTS.clear()
    REQUEST_LOG.clear()


load_samples()
