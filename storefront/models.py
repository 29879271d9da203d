# storefront/models.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    ValidationInfo,
    field_validator,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _number_to_str(v: Any):
    # the API sometimes sends numbers where strings are expected
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


def _or_default(model, v: Any, handler, info: ValidationInfo):
    """Optional fields never reject a record: null or a bad value becomes the field default."""
    default = model.model_fields[info.field_name].default
    if v is None:
        return default
    try:
        return handler(v)
    except ValidationError as e:
        logger.warning(
            "Bad %s.%s value %r, using default %r (%s)",
            model.__name__, info.field_name, v, default, e.errors()[0].get("msg"),
        )
        return default


class _Record(BaseModel):
    # records are read-only once decoded; unknown keys from the API are dropped
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def id_from_number(cls, v: Any):
        return _number_to_str(v)


class Product(_Record):
    name: str
    image_url: str
    price: Decimal = Field(ge=0)
    discount: int = Field(0, ge=0, le=100)
    category: str = ""
    stock_quantity: int = Field(0, ge=0)
    description: str = ""
    seller_id: str = ""

    @field_validator("name", "image_url", mode="before")
    @classmethod
    def text_from_number(cls, v: Any):
        return _number_to_str(v)

    @field_validator("discount", "stock_quantity", "category", "description", "seller_id", mode="wrap")
    @classmethod
    def optional_or_default(cls, v: Any, handler, info: ValidationInfo):
        return _or_default(cls, v, handler, info)

    @property
    def has_discount(self) -> bool:
        return self.discount > 0

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def discounted_price(self) -> Decimal:
        """Price after `discount` percent, rounded to cents."""
        raw = self.price * (100 - self.discount) / 100
        return raw.quantize(CENTS, rounding=ROUND_HALF_UP)


class Story(_Record):
    title: str
    image_url: str
    link: Optional[str] = None
    seller_id: str = ""
    created_at: Optional[str] = None

    @field_validator("title", "image_url", mode="before")
    @classmethod
    def text_from_number(cls, v: Any):
        return _number_to_str(v)

    @field_validator("link", "seller_id", "created_at", mode="wrap")
    @classmethod
    def optional_or_default(cls, v: Any, handler, info: ValidationInfo):
        return _or_default(cls, v, handler, info)


class Seller(_Record):
    name: str
    avatar_url: Optional[str] = None
    telegram_url: Optional[str] = None
    vk_url: Optional[str] = None
    whatsapp_url: Optional[str] = None
    instagram_url: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def text_from_number(cls, v: Any):
        return _number_to_str(v)

    @field_validator("avatar_url", "telegram_url", "vk_url", "whatsapp_url", "instagram_url", mode="wrap")
    @classmethod
    def optional_or_default(cls, v: Any, handler, info: ValidationInfo):
        return _or_default(cls, v, handler, info)

    def contact_links(self) -> List[tuple]:
        """(messenger, url) pairs for every link the seller has filled in."""
        links = [
            ("telegram", self.telegram_url),
            ("vk", self.vk_url),
            ("whatsapp", self.whatsapp_url),
            ("instagram", self.instagram_url),
        ]
        return [(name, url) for name, url in links if url]


class Envelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: StrictBool
    data: Optional[Any] = None
    message: Optional[Any] = None
    error: Optional[Any] = None
