"""
Application Use Cases — Seed data loading

Populates an empty store from a static JSON document with three ordered
lists: departments, energyReadings and aiSuggestions.

Core guarantees provided:

- Idempotency: initialize_seed_data() refuses to load when any department
  exists. The check and the inserts share one transaction, and the UNIQUE
  department name turns a racing second load into an IntegrityError, which
  is reported the same way as the explicit check.
- Atomicity: reset_and_initialize() deletes readings, then suggestions, then
  departments, then reloads, all inside one transaction.atomic() block. A
  failure half-way leaves the previous data untouched.

Mapping rules for seed entries:

- A reading whose department name is unknown is skipped, not reported.
- A reading's source type is ELECTRICITY unless the entry names a
  recognised `sourceType`; carbon is always imputed from kWh and cost is
  imputed when the entry has none.
- A suggestion's text is "<title>: <description>"; its category is
  ENERGY_SAVING unless the entry names a recognised `category`.
"""

import json
import logging
from datetime import datetime

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from monitoring.domain.exceptions import InvalidSourceType, SeedDataAlreadyLoaded, SeedDataError
from monitoring.domain.rules import (
    impute_reading_values,
    parse_priority,
    parse_savings,
    parse_source_type,
    to_decimal,
)
from monitoring.models import Department, EnergyReading, Suggestion

logger = logging.getLogger(__name__)

SEED_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def read_seed_document(path=None):
    path = path or settings.ECOMETER_SEED_DATA_PATH
    try:
        with open(path, encoding="utf-8") as handle:
            document = json.load(handle)
    except OSError as exc:
        raise SeedDataError(path, exc.strerror or str(exc))
    except json.JSONDecodeError as exc:
        raise SeedDataError(path, f"invalid JSON ({exc})")

    if not isinstance(document, dict):
        raise SeedDataError(path, "top level must be an object")
    for key in ("departments", "energyReadings", "aiSuggestions"):
        if not isinstance(document.get(key, []), list):
            raise SeedDataError(path, f"'{key}' must be a list")
    return document


def _seed_source_type(entry):
    if "sourceType" not in entry:
        return EnergyReading.SourceType.ELECTRICITY
    try:
        return parse_source_type(entry["sourceType"])
    except InvalidSourceType:
        logger.debug("Seed reading has unknown sourceType=%r, using ELECTRICITY", entry["sourceType"])
        return EnergyReading.SourceType.ELECTRICITY


def _seed_category(entry):
    category = str(entry.get("category", "")).strip().upper()
    if category in Suggestion.Category.values:
        return Suggestion.Category(category)
    return Suggestion.Category.ENERGY_SAVING


def _parse_timestamp(value):
    parsed = datetime.strptime(value, SEED_TIMESTAMP_FORMAT)
    return timezone.make_aware(parsed, timezone.get_default_timezone())


def _load_departments(entries):
    by_name = {}
    for entry in entries:
        if entry["name"] in by_name:
            logger.debug("Skipping duplicate seed department=%r", entry["name"])
            continue
        department = Department.objects.create(
            name=entry["name"],
            description=entry.get("description", ""),
        )
        by_name[department.name] = department
    return by_name


def _load_readings(entries, departments):
    readings = []
    for entry in entries:
        department = departments.get(entry.get("department"))
        if department is None:
            logger.debug("Skipping seed reading for unknown department=%r", entry.get("department"))
            continue

        cost = entry.get("cost")
        kwh_used, cost_usd, carbon_kg = impute_reading_values(
            to_decimal(entry["consumption"]),
            cost_usd=to_decimal(cost) if cost is not None else None,
        )
        readings.append(EnergyReading(
            department=department,
            kwh_used=kwh_used,
            source_type=_seed_source_type(entry),
            timestamp=_parse_timestamp(entry["timestamp"]),
            cost_usd=cost_usd,
            carbon_kg=carbon_kg,
        ))
    EnergyReading.objects.bulk_create(readings)


def _load_suggestions(entries):
    Suggestion.objects.bulk_create([
        Suggestion(
            text=f"{entry['title']}: {entry['description']}",
            category=_seed_category(entry),
            priority=parse_priority(entry.get("priority")),
            estimated_savings_usd=parse_savings(entry.get("potentialSavings")),
        )
        for entry in entries
    ])


def load_seed_data(path=None):
    """
    Inserts every entry of the seed document. Callers own the transaction.

    Departments are created first so readings can resolve them by name.
    Malformed entries (missing keys, bad numbers or timestamps) raise
    SeedDataError.
    """
    document = read_seed_document(path)
    source = path or settings.ECOMETER_SEED_DATA_PATH

    try:
        departments = _load_departments(document.get("departments", []))
        _load_readings(document.get("energyReadings", []), departments)
        _load_suggestions(document.get("aiSuggestions", []))
    except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
        raise SeedDataError(source, f"malformed entry ({exc!r})")

    logger.info("Seed data loaded from %s", source)


def data_status():
    departments = Department.objects.count()
    return {
        "departments": departments,
        "energyData": EnergyReading.objects.count(),
        "aiSuggestions": Suggestion.objects.count(),
        "hasData": departments > 0,
    }


def _counts():
    status = data_status()
    del status["hasData"]
    return status


def initialize_seed_data(path=None):
    """
    Loads the seed document into an empty store.

    Raises SeedDataAlreadyLoaded when departments already exist; nothing is
    modified in that case.
    """
    try:
        with transaction.atomic():
            existing = Department.objects.count()
            if existing > 0:
                raise SeedDataAlreadyLoaded(existing)
            load_seed_data(path)
    except IntegrityError as exc:
        existing = Department.objects.count()
        if existing == 0:
            # Nothing committed: the seed document itself violates a constraint
            raise SeedDataError(path or settings.ECOMETER_SEED_DATA_PATH, f"integrity error ({exc!r})")
        # Another initialisation committed the same department names first
        logger.info("Seed load lost a race against a concurrent initialisation")
        raise SeedDataAlreadyLoaded(existing)

    return {
        "message": "Test data loaded successfully!",
        "success": True,
        **_counts(),
    }


def reset_and_initialize(path=None):
    """Deletes all three entity kinds, children first, then reloads the seed."""
    with transaction.atomic():
        readings_deleted, _ = EnergyReading.objects.all().delete()
        suggestions_deleted, _ = Suggestion.objects.all().delete()
        departments_deleted, _ = Department.objects.all().delete()
        logger.info(
            "Store reset: readings=%s suggestions=%s departments=%s",
            readings_deleted, suggestions_deleted, departments_deleted,
        )
        load_seed_data(path)

    return {
        "message": "Database reset and test data loaded successfully!",
        "success": True,
        **_counts(),
    }
