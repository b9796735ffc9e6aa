# cafelib.py
# pricing logic for the campus café quote page
# This file only holds the data and the calculator so app.py can stay focused on UI.

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

# Menu: unit price per item type
prices = {
    "coffee": Decimal("3.25"),
    "sandwich": Decimal("8.50"),
    "salad": Decimal("7.25"),
}

# one picture per item for the quantity line
icons = {"coffee": "☕", "sandwich": "🥪", "salad": "🥗"}
unknown_icon = "❓"

tax_rate = Decimal("0.05")      # 5%, always the last step in the math
student_rate = Decimal("0.10")  # 10% off the subtotal
eco_fee = Decimal("1.00")       # reusable cup, coffee only
bulk_qty = 6                    # bulk deal kicks in at this many items
bulk_off = Decimal("2.00")
max_icons = 10

CENT = Decimal("0.01")

# plain decimal text only: no underscores, no non-ASCII digits, no "nan"
NUMBER_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


class QuoteError(ValueError):
    """Base class for anything the UI should show as an error message."""


class InvalidItemType(QuoteError):
    pass


class InvalidQuantity(QuoteError):
    pass


@dataclass(frozen=True)
class Pricing:
    """All the numbers the engine needs. Swap it out in tests for other prices."""
    prices: Mapping[str, Decimal] = field(default_factory=lambda: MappingProxyType(dict(prices)))
    tax_rate: Decimal = tax_rate
    student_rate: Decimal = student_rate
    eco_fee: Decimal = eco_fee
    bulk_qty: int = bulk_qty
    bulk_off: Decimal = bulk_off
    icons: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(icons)))
    max_icons: int = max_icons

    def __post_init__(self):
        # plain dicts get wrapped so nobody can change prices after the fact
        if not isinstance(self.prices, MappingProxyType):
            object.__setattr__(self, "prices", MappingProxyType(dict(self.prices)))
        if not isinstance(self.icons, MappingProxyType):
            object.__setattr__(self, "icons", MappingProxyType(dict(self.icons)))


PRICING = Pricing()


@dataclass(frozen=True)
class QuoteRequest:
    item: str
    quantity: int
    student: bool = False
    eco_cup: bool = False


@dataclass(frozen=True)
class QuoteBreakdown:
    unit_price: Decimal
    subtotal: Decimal
    student_discount: Decimal
    eco_fee: Decimal
    bulk_discount: Decimal
    tax: Decimal
    total: Decimal

    @property
    def taxable_amount(self) -> Decimal:
        return self.subtotal - self.student_discount + self.eco_fee - self.bulk_discount


def _to_decimal(n) -> Decimal:
    if isinstance(n, Decimal):
        return n
    # go through str so 2.675 stays 2.675 instead of 2.67499999...
    return Decimal(str(n))


def money(n) -> str:
    '''
    format an amount as dollars with 2 decimals, half-up rounding

    Example: 0.1625 -> "$0.16", 2.675 -> "$2.68", -1 -> "-$1.00"
    '''
    amount = _to_decimal(n).quantize(CENT, rounding=ROUND_HALF_UP)
    if amount < 0:
        return f"-${-amount}"
    # abs() also turns a rounded -0.00 into 0.00
    return f"${abs(amount)}"


def percent(rate: Decimal) -> str:
    # 0.10 -> "10", 0.075 -> "7.5"
    return f"{(rate * 100).normalize():f}"


class QuoteEngine:
    """Turns a QuoteRequest into a QuoteBreakdown and a printable receipt."""

    def __init__(self, pricing: Pricing = PRICING):
        self.pricing = pricing

    def compute(self, request: QuoteRequest) -> QuoteBreakdown:
        """
        do all price math, in this order:
          1) unit price from the menu
          2) subtotal
          3) student discount (10% of subtotal)
          4) eco cup fee (coffee only)
          5) bulk deal (flat amount off at 6+ items)
          6) tax on what is left
        """
        p = self.pricing
        try:
            unit_price = p.prices[request.item]
        except KeyError:
            raise InvalidItemType(f"No price for item type {request.item!r}.") from None

        subtotal = unit_price * request.quantity
        student_discount = subtotal * p.student_rate if request.student else Decimal("0")
        fee = p.eco_fee if (request.item == "coffee" and request.eco_cup) else Decimal("0")
        bulk_discount = p.bulk_off if request.quantity >= p.bulk_qty else Decimal("0")

        # not clamped at zero: a big enough discount would give negative tax
        taxable = subtotal - student_discount + fee - bulk_discount
        tax = taxable * p.tax_rate
        total = taxable + tax

        logger.debug("quote %s x%d -> total %s", request.item, request.quantity, total)
        return QuoteBreakdown(
            unit_price=unit_price,
            subtotal=subtotal,
            student_discount=student_discount,
            eco_fee=fee,
            bulk_discount=bulk_discount,
            tax=tax,
            total=total,
        )

    def icons_for(self, item: str, qty: int) -> str:
        icon = self.pricing.icons.get(item, unknown_icon)
        return icon * max(0, min(qty, self.pricing.max_icons))

    def receipt(self, request: QuoteRequest, calc: QuoteBreakdown) -> str:
        p = self.pricing
        student_text = "Yes" if request.student else "No"
        if request.item == "coffee":
            eco_text = "Yes" if request.eco_cup else "No"
        else:
            eco_text = "N/A"

        lines = [
            "CAMPUS CAFÉ RECEIPT",
            "------------",
            f"Item: {request.item}",
            f"Unit price: {money(calc.unit_price)}",
            f"Quantity: {request.quantity} {self.icons_for(request.item, request.quantity)}",
            f"Student disc: {student_text}",
            f"Eco cup add-on: {eco_text}",
            f"Subtotal: {money(calc.subtotal)}",
            f"Student -{percent(p.student_rate)}%: -{money(calc.student_discount)}",
            f"Eco cup fee: {money(calc.eco_fee)}",
            f"Bulk deal: -{money(calc.bulk_discount)}",
            f"Tax ({percent(p.tax_rate)}%): {money(calc.tax)}",
            "------------",
            f"TOTAL: {money(calc.total)}",
        ]
        return "\n".join(lines) + "\n"


engine = QuoteEngine()


def compute_quote(request: QuoteRequest) -> QuoteBreakdown:
    return engine.compute(request)


def format_receipt(request: QuoteRequest, breakdown: QuoteBreakdown) -> str:
    return engine.receipt(request, breakdown)


# ---- input checks used by the UI before it calls the engine ----

def normalize_type(raw) -> str:
    # a cancelled or empty box comes through as None
    if raw is None:
        return ""
    return str(raw).strip().lower()


def is_valid_type(item: str, pricing: Pricing = PRICING) -> bool:
    return item in pricing.prices


def parse_quantity(raw) -> int:
    '''
    turn whatever the user typed into a whole number from 1 to 10

    Blank text counts as 0, so it fails the range check like the old page did.
    '''
    if isinstance(raw, bool):
        raise InvalidQuantity("Quantity must be a valid number.")
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            value = Decimal("0")
        elif not NUMBER_RE.fullmatch(text):
            raise InvalidQuantity("Quantity must be a valid number.")
        else:
            value = Decimal(text)
    else:
        try:
            value = _to_decimal(raw)
        except (ArithmeticError, ValueError, TypeError):
            raise InvalidQuantity("Quantity must be a valid number.") from None

    if not value.is_finite():
        raise InvalidQuantity("Quantity must be a valid number.")
    if value != value.to_integral_value():
        raise InvalidQuantity("Quantity must be a whole number (integer).")
    if value < 1 or value > 10:
        raise InvalidQuantity("Quantity must be between 1 and 10.")
    return int(value)


def build_request(raw_type, raw_qty, student=False, eco_cup=False, pricing: Pricing = PRICING) -> QuoteRequest:
    """Check the raw inputs and build a request the engine can trust."""
    item = normalize_type(raw_type)
    if not is_valid_type(item, pricing):
        raise InvalidItemType("Item must be coffee, sandwich, or salad.")
    qty = parse_quantity(raw_qty)
    # eco cup only makes sense for coffee
    return QuoteRequest(
        item=item,
        quantity=qty,
        student=bool(student),
        eco_cup=bool(eco_cup) if item == "coffee" else False,
    )
