"""
Application Use Case — Dashboard aggregation

The dashboard covers a trailing 24 hour window, [now - 24h, now], with both
ends inclusive. Totals and the per-department breakdown are computed with
SUM/COUNT aggregates in the database.

Some backends (SQLite) hand aggregate results back as floats. Every sum is
therefore re-quantised to the column's precision; since each summand has at
most that many decimal places, the quantised value is the exact decimal sum.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, Sum
from django.utils import timezone

from monitoring.application.suggestions import DEFAULT_SUGGESTION_LIMIT, get_active_suggestions
from monitoring.domain.rules import AMOUNT_QUANTUM, KWH_QUANTUM
from monitoring.models import EnergyReading

logger = logging.getLogger(__name__)

DASHBOARD_WINDOW = timedelta(hours=24)


def _exact(value, quantum):
    if value is None:
        return Decimal(0).quantize(quantum)
    return Decimal(str(value)).quantize(quantum)


def windowed_readings(now=None):
    now = now or timezone.now()
    return EnergyReading.objects.filter(timestamp__range=(now - DASHBOARD_WINDOW, now))


def get_dashboard(now=None, rng=None):
    """
    Builds the dashboard snapshot for the window ending at `now`.

    Returns a dict with overall totals, one summary row per department that
    has at least one reading in the window, and up to two suggestions.
    """
    readings = windowed_readings(now)

    totals = readings.aggregate(
        carbon=Sum("carbon_kg"),
        cost=Sum("cost_usd"),
        kwh=Sum("kwh_used"),
    )

    rows = (
        readings
        .values("department_id", "department__name")
        .annotate(
            total_kwh=Sum("kwh_used"),
            total_carbon=Sum("carbon_kg"),
            total_cost=Sum("cost_usd"),
            reading_count=Count("id"),
        )
        .order_by("department__name")
    )

    department_summaries = [
        {
            "departmentName": row["department__name"],
            "totalKwh": _exact(row["total_kwh"], KWH_QUANTUM),
            "totalCarbonKg": _exact(row["total_carbon"], AMOUNT_QUANTUM),
            "totalCostUsd": _exact(row["total_cost"], AMOUNT_QUANTUM),
            "readingCount": row["reading_count"],
        }
        for row in rows
    ]

    snapshot = {
        "totalCarbonFootprint": _exact(totals["carbon"], AMOUNT_QUANTUM),
        "totalCostUsd": _exact(totals["cost"], AMOUNT_QUANTUM),
        "totalKwhUsed": _exact(totals["kwh"], KWH_QUANTUM),
        "departmentSummaries": department_summaries,
        "aiSuggestions": get_active_suggestions(DEFAULT_SUGGESTION_LIMIT, rng=rng),
    }

    logger.info(
        "Dashboard built: departments=%s kwh=%s",
        len(department_summaries), snapshot["totalKwhUsed"],
    )
    return snapshot
