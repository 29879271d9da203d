# tests/test_models.py
import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from storefront.models import Product, Story, Seller, Envelope


def _product(**overrides):
    raw = {"id": "p-1", "name": "Phone", "image_url": "https://x/p.jpg", "price": 100.0}
    raw.update(overrides)
    return raw


def test_product_optional_fields_default():
    p = Product.model_validate(_product())
    assert p.discount == 0
    assert p.stock_quantity == 0
    assert p.category == ""
    assert p.description == ""
    assert p.seller_id == ""
    assert not p.has_discount
    assert not p.in_stock


def test_null_discount_and_stock_are_zero():
    p = Product.model_validate(_product(discount=None, stock_quantity=None, category=None))
    assert p.discount == 0
    assert p.stock_quantity == 0
    assert p.category == ""


def test_discounted_price():
    p = Product.model_validate(_product(discount=25))
    assert p.has_discount
    assert p.discounted_price == Decimal("75.00")


def test_discounted_price_without_discount_is_price():
    p = Product.model_validate(_product(price="1999.90"))
    assert p.discounted_price == Decimal("1999.90")


def test_discounted_price_rounds_to_cents():
    p = Product.model_validate(_product(price="0.10", discount=50))
    assert p.discounted_price == Decimal("0.05")
    p = Product.model_validate(_product(price="9.99", discount=33))
    assert p.discounted_price == Decimal("6.69")


@pytest.mark.parametrize("field,value", [
    ("price", -0.01),
    ("price", "abc"),
    ("image_url", None),
    ("id", ""),
    ("name", None),
])
def test_product_rejects_invalid_values(field, value):
    with pytest.raises(ValidationError):
        Product.model_validate(_product(**{field: value}))


def test_product_requires_name():
    raw = _product()
    del raw["name"]
    with pytest.raises(ValidationError):
        Product.model_validate(raw)


def test_numeric_id_is_stringified():
    assert Product.model_validate(_product(id=42)).id == "42"


def test_numeric_required_text_is_stringified():
    p = Product.model_validate(_product(name=1984, image_url=7))
    assert p.name == "1984"
    assert p.image_url == "7"
    s = Story.model_validate({"id": 1, "title": 2024, "image_url": "https://x/s.jpg"})
    assert s.title == "2024"
    assert Seller.model_validate({"id": "s", "name": 5}).name == "5"


@pytest.mark.parametrize("field,value,default", [
    ("discount", "abc", 0),
    ("discount", 12.5, 0),
    ("discount", 101, 0),
    ("discount", -1, 0),
    ("stock_quantity", "many", 0),
    ("stock_quantity", -3, 0),
    ("category", 7, ""),
    ("description", ["x"], ""),
    ("seller_id", {"id": 1}, ""),
])
def test_bad_optional_product_field_falls_back_to_default(field, value, default, caplog):
    with caplog.at_level(logging.WARNING, logger="storefront.models"):
        p = Product.model_validate(_product(**{field: value}))
    assert getattr(p, field) == default
    assert p.name == "Phone"
    assert f"Bad Product.{field}" in caplog.text


def test_bad_optional_story_and_seller_fields_fall_back():
    s = Story.model_validate({"id": "st", "title": "T", "image_url": "u", "link": 5, "created_at": []})
    assert s.link is None
    assert s.created_at is None

    seller = Seller.model_validate({"id": "s", "name": "N", "telegram_url": 12, "vk_url": {"a": 1}})
    assert seller.telegram_url is None
    assert seller.vk_url is None
    assert seller.contact_links() == []


def test_null_optional_fields_are_not_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="storefront.models"):
        Product.model_validate(_product(discount=None, description=None))
    assert caplog.text == ""


def test_records_are_immutable():
    p = Product.model_validate(_product())
    with pytest.raises(ValidationError):
        p.name = "Other"


def test_unknown_fields_ignored():
    p = Product.model_validate(_product(created_at="2024-01-01", is_active=True))
    assert not hasattr(p, "is_active")


def test_story_optional_fields():
    s = Story.model_validate({"id": "st-1", "title": "Sale", "image_url": "https://x/s.jpg"})
    assert s.link is None
    assert s.created_at is None
    assert s.seller_id == ""


def test_seller_contact_links_order_and_presence():
    s = Seller.model_validate({
        "id": "s-1",
        "name": "Shop",
        "instagram_url": "https://instagram.com/shop",
        "telegram_url": "https://t.me/shop",
        "vk_url": "",
    })
    assert s.contact_links() == [
        ("telegram", "https://t.me/shop"),
        ("instagram", "https://instagram.com/shop"),
    ]


def test_envelope_success_must_be_bool():
    with pytest.raises(ValidationError):
        Envelope.model_validate({"success": "yes"})
    assert Envelope.model_validate({"success": False, "error": "boom"}).error == "boom"
