import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Department",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True)),
                ("description", models.TextField(blank=True, default="")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Suggestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.TextField()),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("ENERGY_SAVING", "Energy saving"),
                            ("COST_REDUCTION", "Cost reduction"),
                            ("SUSTAINABILITY", "Sustainability"),
                            ("MAINTENANCE", "Maintenance"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "priority",
                    models.CharField(
                        choices=[("LOW", "Low"), ("MEDIUM", "Medium"), ("HIGH", "High")],
                        default="MEDIUM",
                        max_length=10,
                    ),
                ),
                ("estimated_savings_usd", models.DecimalField(decimal_places=2, max_digits=10)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="EnergyReading",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("kwh_used", models.DecimalField(decimal_places=3, max_digits=12)),
                (
                    "source_type",
                    models.CharField(
                        choices=[
                            ("ELECTRICITY", "Electricity"),
                            ("TRANSPORT", "Transport"),
                            ("WASTE", "Waste"),
                            ("HEATING", "Heating"),
                            ("COOLING", "Cooling"),
                        ],
                        max_length=20,
                    ),
                ),
                ("timestamp", models.DateTimeField(db_index=True)),
                ("cost_usd", models.DecimalField(decimal_places=5, max_digits=14)),
                ("carbon_kg", models.DecimalField(decimal_places=5, max_digits=14)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "department",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="readings",
                        to="monitoring.department",
                    ),
                ),
            ],
            options={
                "db_table": "energy_reading",
            },
        ),
    ]
