# storefront/formatting.py
from decimal import Decimal

from storefront.models import Product, CENTS

CURRENCY = "₽"


def format_price(amount: Decimal) -> str:
    return f"{Decimal(amount).quantize(CENTS):.2f}{CURRENCY}"


def product_title(p: Product) -> str:
    """One-line title used in product lists."""
    if p.has_discount:
        return f"{p.name} ({p.discount}% OFF - {format_price(p.discounted_price)})"
    return f"{p.name} - {format_price(p.price)}"


def product_subtitle(p: Product) -> str:
    parts = []
    if p.category:
        parts.append(f"Category: {p.category}")
    if p.in_stock:
        parts.append(f"In stock: {p.stock_quantity} pcs")
    return " | ".join(parts)


def product_details(p: Product) -> str:
    lines = [p.name, "", f"Price: {format_price(p.price)}"]
    if p.has_discount:
        lines.append(f"Discount: {p.discount}%")
        lines.append(f"Discounted price: {format_price(p.discounted_price)}")
    lines.append(f"Category: {p.category}")
    lines.append(f"In stock: {p.stock_quantity} pcs")
    lines.append("")
    lines.append(f"Description: {p.description}" if p.description else "No description")
    return "\n".join(lines)
