"""
Domain rules — value imputation and seed field parsing.

These are pure functions with no database access, so they can be exercised
without a test database.

Estimation constants:

- CARBON_KG_PER_KWH: average grid carbon intensity (kg CO2 per kWh).
- COST_USD_PER_KWH: average unit price (USD per kWh).

All arithmetic is Decimal arithmetic; nothing here goes through float.
"""

from decimal import Decimal, InvalidOperation

from monitoring.domain.exceptions import InvalidSourceType
from monitoring.models import EnergyReading, Suggestion

CARBON_KG_PER_KWH = Decimal("0.45")
COST_USD_PER_KWH = Decimal("0.12")

SAVINGS_USD_PER_PERCENT = Decimal("10")
DEFAULT_SAVINGS_USD = Decimal("100.00")

KWH_QUANTUM = Decimal("0.001")
AMOUNT_QUANTUM = Decimal("0.00001")
SAVINGS_QUANTUM = Decimal("0.01")


def to_decimal(value):
    """
    Converts a JSON scalar to Decimal.

    Floats go through their repr so 0.1 becomes Decimal("0.1") rather than
    the binary expansion. Raises InvalidOperation for anything non-numeric
    or non-finite.
    """
    if isinstance(value, bool):
        raise InvalidOperation(f"boolean is not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        result = Decimal(str(value).strip())
    else:
        raise InvalidOperation(f"not a number: {value!r}")
    if not result.is_finite():
        raise InvalidOperation(f"not a finite number: {value!r}")
    return result


def estimate_carbon_kg(kwh_used):
    return kwh_used * CARBON_KG_PER_KWH


def estimate_cost_usd(kwh_used):
    return kwh_used * COST_USD_PER_KWH


def has_kwh_precision(kwh_used):
    """True when kwh_used fits the stored precision, so storing it does not round."""
    return kwh_used.normalize().as_tuple().exponent >= KWH_QUANTUM.as_tuple().exponent


def impute_reading_values(kwh_used, cost_usd=None, carbon_kg=None):
    """
    Returns (kwh_used, cost_usd, carbon_kg) ready to persist.

    kWh is quantised to the stored precision first, so the derived values
    are exact products of what ends up in the database.
    """
    kwh_used = kwh_used.quantize(KWH_QUANTUM)
    if carbon_kg is None:
        carbon_kg = estimate_carbon_kg(kwh_used)
    if cost_usd is None:
        cost_usd = estimate_cost_usd(kwh_used)
    return kwh_used, cost_usd.quantize(AMOUNT_QUANTUM), carbon_kg.quantize(AMOUNT_QUANTUM)


def parse_source_type(value):
    """Case-insensitive match against EnergyReading.SourceType."""
    if not isinstance(value, str):
        raise InvalidSourceType(value)
    normalized = value.strip().upper()
    if normalized not in EnergyReading.SourceType.values:
        raise InvalidSourceType(value)
    return EnergyReading.SourceType(normalized)


def parse_priority(value):
    """HIGH and LOW are recognised in any case; everything else is MEDIUM."""
    normalized = str(value or "").strip().upper()
    if normalized == Suggestion.Priority.HIGH:
        return Suggestion.Priority.HIGH
    if normalized == Suggestion.Priority.LOW:
        return Suggestion.Priority.LOW
    return Suggestion.Priority.MEDIUM


def parse_savings(value):
    """
    Turns a percentage string such as "15%" into an estimated dollar amount.

    The percentage is multiplied by SAVINGS_USD_PER_PERCENT. Unparsable input
    falls back to DEFAULT_SAVINGS_USD.
    """
    text = str(value if value is not None else "").strip()
    if text.endswith("%"):
        text = text[:-1]
    try:
        percent = to_decimal(text)
    except InvalidOperation:
        return DEFAULT_SAVINGS_USD
    return (percent * SAVINGS_USD_PER_PERCENT).quantize(SAVINGS_QUANTUM)
