"""
Persistence Models — Energy Monitoring (Django ORM)

This module defines the three record kinds the backend stores:

- Department groups readings by organisational unit. Its name is UNIQUE,
  which also makes concurrent seed loads collide instead of duplicating.
- EnergyReading is a single timestamped consumption observation. It is
  written once and never updated.
- Suggestion is a canned recommendation shown on the dashboard.

Enumerations are stored as their upper-case names so the values read back
from the database are exactly the names rendered over the API.

Monetary and physical quantities are DecimalFields. kWh keeps three decimal
places and cost/carbon keep five, so an imputed value (kWh multiplied by a
two-decimal factor) is stored without rounding.
"""

from django.db import models


class Department(models.Model):
    name = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name


class EnergyReading(models.Model):
    """
    One energy observation tied to a department.

    - department is a PROTECT foreign key: a department can only disappear
      after its readings have been removed, which is the order the reset
      path follows.
    - timestamp is assigned by the writer (ingestion time or seed value);
      created_at records when the row was inserted.
    """

    class SourceType(models.TextChoices):
        ELECTRICITY = "ELECTRICITY", "Electricity"
        TRANSPORT = "TRANSPORT", "Transport"
        WASTE = "WASTE", "Waste"
        HEATING = "HEATING", "Heating"
        COOLING = "COOLING", "Cooling"

    department = models.ForeignKey(
        Department,
        on_delete=models.PROTECT,
        related_name="readings",
    )

    kwh_used = models.DecimalField(max_digits=12, decimal_places=3)
    source_type = models.CharField(max_length=20, choices=SourceType.choices)
    timestamp = models.DateTimeField(db_index=True)
    cost_usd = models.DecimalField(max_digits=14, decimal_places=5)
    carbon_kg = models.DecimalField(max_digits=14, decimal_places=5)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "energy_reading"

    def __str__(self):
        return f"Reading {self.id} - {self.kwh_used} kWh ({self.source_type})"


class Suggestion(models.Model):
    class Category(models.TextChoices):
        ENERGY_SAVING = "ENERGY_SAVING", "Energy saving"
        COST_REDUCTION = "COST_REDUCTION", "Cost reduction"
        SUSTAINABILITY = "SUSTAINABILITY", "Sustainability"
        MAINTENANCE = "MAINTENANCE", "Maintenance"

    class Priority(models.TextChoices):
        LOW = "LOW", "Low"
        MEDIUM = "MEDIUM", "Medium"
        HIGH = "HIGH", "High"

    text = models.TextField()
    category = models.CharField(max_length=20, choices=Category.choices)
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )
    estimated_savings_usd = models.DecimalField(max_digits=10, decimal_places=2)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Suggestion {self.id} [{self.priority}]"
