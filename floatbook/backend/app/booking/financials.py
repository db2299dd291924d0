from dataclasses import dataclass
from typing import Any

from app.core.constants import DiscountType


@dataclass(frozen=True)
class BookingFinancials:
    """Derived money fields of a booking. Never persisted."""
    discount_amount: float
    discounted_amount: float
    tax_amount: float
    final_total: float
    due_amount: float


def calculate_financials(
    base_amount: float,
    discount_type: str = DiscountType.FIXED,
    discount_value: float = 0.0,
    tax_enabled: bool = False,
    tax_rate: float = 0.0,
    advance_paid: float = 0.0,
) -> BookingFinancials:
    """
    Calculate a booking's totals:
    discount -> discounted amount -> tax on discounted amount -> final total -> due

    Args:
        base_amount: Room charge before discount
        discount_type: "fixed" (absolute) or "percentage" (of base_amount)
        discount_value: Discount amount or percentage
        tax_enabled: Company tax switch
        tax_rate: Company tax rate in percent
        advance_paid: Amount already collected

    Returns:
        BookingFinancials (plain float arithmetic, no rounding)

    Examples:
        - base 100, 10% discount, 5% tax, advance 50 -> final 94.5, due 44.5
        - base 100, 100% discount, tax off -> final 0.0, due 0.0
    """
    base = float(base_amount or 0)
    value = float(discount_value or 0)
    advance = float(advance_paid or 0)

    if discount_type == DiscountType.PERCENTAGE:
        discount_amount = base * value / 100
    else:
        discount_amount = value

    discounted_amount = base - discount_amount
    tax_amount = discounted_amount * float(tax_rate or 0) / 100 if tax_enabled else 0.0
    final_total = discounted_amount + tax_amount
    due_amount = max(0.0, final_total - advance)

    return BookingFinancials(
        discount_amount=discount_amount,
        discounted_amount=discounted_amount,
        tax_amount=tax_amount,
        final_total=final_total,
        due_amount=due_amount,
    )


def financials_for(booking: Any, company: Any) -> BookingFinancials:
    """Financials of a stored booking under the company's current tax settings"""
    return calculate_financials(
        base_amount=booking.total_amount,
        discount_type=booking.discount_type,
        discount_value=booking.discount_value,
        tax_enabled=bool(company.tax_enabled) if company is not None else False,
        tax_rate=company.tax_rate if company is not None else 0.0,
        advance_paid=booking.advance_paid,
    )


def is_fully_paid(financials: BookingFinancials, advance_paid: float) -> bool:
    """Save-time paid flag: the advance covers the final total"""
    return float(advance_paid or 0) >= financials.final_total
