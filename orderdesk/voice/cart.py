# orderdesk/voice/cart.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from .models import CartLine, ResolvedLine


def _find_line(cart: Sequence[CartLine], catalog_item_id: Optional[str]) -> Optional[CartLine]:
    if catalog_item_id is None:
        return None
    for line in cart:
        if line.catalog_item_id == catalog_item_id:
            return line
    return None


def merge(lines: Sequence[ResolvedLine], cart: List[CartLine]) -> List[CartLine]:
    """
    Apply resolved lines to the cart in place and return it.

    Catalog items already in the cart get their quantity bumped (price stays as
    it was when the line was created). Lines without a catalog id always become
    new cart lines; two "extra sauce" phrases stay two lines.
    """
    for rl in lines:
        existing = _find_line(cart, rl.catalog_item_id)
        if existing is not None:
            existing.quantity = existing.quantity + rl.quantity
            continue

        cart.append(
            CartLine(
                catalog_item_id=rl.catalog_item_id,
                name=rl.display_name,
                unit_price=rl.unit_price,
                quantity=rl.quantity,
            )
        )
    return cart


def line_total(line: CartLine) -> Decimal:
    return line.unit_price * line.quantity


def cart_subtotal(cart: Sequence[CartLine]) -> Decimal:
    return sum((line_total(x) for x in cart), Decimal("0"))


def build_summary(cart: Sequence[CartLine], currency_symbol: str = "₹") -> Tuple[str, Decimal]:
    if not cart:
        return ("Cart is empty.", Decimal("0"))

    lines: List[str] = []
    for i, line in enumerate(cart, start=1):
        lt = line_total(line)
        lines.append(f"{i}. x{line.quantity} {line.name} = {currency_symbol}{lt:.2f}")

    total = cart_subtotal(cart)
    return ("Order summary:\n" + "\n".join(lines) + f"\n\nSubtotal: {currency_symbol}{total:.2f}", total)
