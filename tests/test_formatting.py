# tests/test_formatting.py
from decimal import Decimal

from storefront.formatting import format_price, product_details, product_subtitle, product_title
from storefront.models import Product


def _product(**overrides):
    raw = {"id": "p-1", "name": "Sneakers", "image_url": "https://x/p.jpg", "price": "100.00"}
    raw.update(overrides)
    return Product.model_validate(raw)


def test_format_price():
    assert format_price(Decimal("75")) == "75.00₽"
    assert format_price(Decimal("1999.9")) == "1999.90₽"


def test_title_with_and_without_discount():
    assert product_title(_product(discount=25)) == "Sneakers (25% OFF - 75.00₽)"
    assert product_title(_product()) == "Sneakers - 100.00₽"


def test_subtitle_omits_empty_parts():
    assert product_subtitle(_product(category="shoes", stock_quantity=3)) == "Category: shoes | In stock: 3 pcs"
    assert product_subtitle(_product(category="shoes")) == "Category: shoes"
    assert product_subtitle(_product(stock_quantity=2)) == "In stock: 2 pcs"
    assert product_subtitle(_product()) == ""


def test_details():
    text = product_details(_product(discount=10, category="shoes", description="Light"))
    assert "Discount: 10%" in text
    assert "Discounted price: 90.00₽" in text
    assert text.endswith("Description: Light")

    plain = product_details(_product())
    assert "Discount" not in plain
    assert plain.endswith("No description")
