"""Project-wide constants."""

from decimal import Decimal
from os import getenv


def _env_bool(name: str, default: str | None = None) -> bool:
    """Return a boolean flag read from the environment."""

    value = getenv(name)
    if value is None:
        value = default if default is not None else "0"
    value = str(value).strip().lower()
    return value not in {"0", "false", "no", "off", ""}


def _env_decimal(name: str, default: Decimal | str) -> Decimal:
    """Return a non-negative :class:`Decimal` read from the environment."""

    fallback = Decimal(str(default))
    raw = getenv(name)
    if raw is None or str(raw).strip() == "":
        return abs(fallback)
    try:
        normalized = str(raw).strip().replace(",", ".")
        value = Decimal(normalized)
    except Exception:
        return abs(fallback)
    return abs(value) if value.is_finite() else abs(fallback)


def _env_choice(name: str, choices: set[str], default: str) -> str:
    """Return one of ``choices`` read from the environment (case-insensitive)."""

    raw = getenv(name)
    if raw is None:
        return default
    value = str(raw).strip().lower()
    return value if value in choices else default


# Step used when figures are rounded for display (round-half-up).
DISPLAY_STEP = _env_decimal("BILLCALC_DISPLAY_STEP", "0.01")

# What to do when a line discount exceeds the line subtotal:
# "clamp" caps it at the subtotal, "error" raises DiscountExceedsSubtotal.
DISCOUNT_OVERFLOW_POLICY = _env_choice(
    "BILLCALC_DISCOUNT_OVERFLOW", {"clamp", "error"}, "clamp"
)

DEFAULT_RATE_TYPE = _env_choice(
    "BILLCALC_DEFAULT_RATE_TYPE", {"with_tax", "without_tax"}, "without_tax"
)

# Relative tolerance for with_tax <-> without_tax round trips.
ROUNDTRIP_TOLERANCE = _env_decimal("BILLCALC_ROUNDTRIP_TOLERANCE", "1e-9")

TRACE_ITEMS = _env_bool("BILLCALC_TRACE", "0")
