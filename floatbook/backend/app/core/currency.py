"""Currency display helpers. Amounts stay floats everywhere else."""

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "SGD": "SGD ",
    "EUR": "€",
    "GBP": "£",
    "BDT": "৳",
    "INR": "₹",
    "AED": "AED ",
    "JPY": "¥",
}

# Currencies displayed without minor units
ZERO_DECIMAL_CURRENCIES = {"JPY"}


def format_currency(amount: float, currency: str = "USD") -> str:
    """Render an amount with its symbol, Latin digits and thousands separators."""
    code = (currency or "USD").upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    decimals = 0 if code in ZERO_DECIMAL_CURRENCIES else 2

    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"
