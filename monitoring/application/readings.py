"""
Application Use Cases — Energy Readings

record_reading() is the ingestion path for simulated IoT sensors:

- Atomicity: department lookup and insert run inside one transaction.atomic()
  block.
- Row-level locking: select_for_update() on the department keeps a
  concurrent reset from deleting it between the lookup and the insert.
- Imputation: missing cost and carbon values are derived from kWh with the
  fixed factors in monitoring.domain.rules.
- The reading is always stamped with the ingestion time; callers cannot
  backdate it through this path.

get_recent_readings() exposes the newest rows for inspection.
"""

import logging

from django.db import transaction
from django.utils import timezone

from monitoring.domain.exceptions import DepartmentNotFound
from monitoring.domain.rules import impute_reading_values, parse_source_type
from monitoring.models import Department, EnergyReading

logger = logging.getLogger(__name__)

RECENT_READINGS_LIMIT = 10


def record_reading(department_id, kwh_used, source_type, cost_usd=None, carbon_kg=None, now=None):
    """
    Persists one reading and returns an acknowledgement.

    kwh_used, cost_usd and carbon_kg are Decimals (cost/carbon optional).
    Raises InvalidSourceType before touching the database, and
    DepartmentNotFound if department_id does not resolve; neither case
    writes anything.
    """
    source_type = parse_source_type(source_type)
    kwh_used, cost_usd, carbon_kg = impute_reading_values(kwh_used, cost_usd, carbon_kg)

    with transaction.atomic():
        try:
            department = Department.objects.select_for_update().get(pk=department_id)
        except Department.DoesNotExist:
            logger.warning("Reading rejected: unknown department=%s", department_id)
            raise DepartmentNotFound(department_id)

        reading = EnergyReading.objects.create(
            department=department,
            kwh_used=kwh_used,
            source_type=source_type,
            timestamp=now or timezone.now(),
            cost_usd=cost_usd,
            carbon_kg=carbon_kg,
        )

    logger.info(
        "Reading stored: id=%s department=%s kwh=%s source=%s",
        reading.id, department.name, kwh_used, source_type,
    )
    return {
        "id": reading.id,
        "message": "Energy data saved successfully",
    }


def reading_to_dict(reading):
    return {
        "id": reading.id,
        "departmentId": reading.department_id,
        "departmentName": reading.department.name,
        "kwhUsed": reading.kwh_used,
        "sourceType": reading.source_type,
        "timestamp": reading.timestamp,
        "costUsd": reading.cost_usd,
        "carbonKg": reading.carbon_kg,
        "createdAt": reading.created_at,
    }


def get_recent_readings(department_id=None, limit=RECENT_READINGS_LIMIT):
    """Newest readings first, optionally restricted to one department."""
    readings = EnergyReading.objects.select_related("department")

    if department_id is not None:
        if not Department.objects.filter(pk=department_id).exists():
            raise DepartmentNotFound(department_id)
        readings = readings.filter(department_id=department_id)

    readings = readings.order_by("-created_at", "-id")[:limit]
    return [reading_to_dict(reading) for reading in readings]
