from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from monitoring.application.readings import get_recent_readings, record_reading
from monitoring.domain.exceptions import DepartmentNotFound, InvalidSourceType
from monitoring.models import Department, EnergyReading


class RecordReadingTest(TestCase):

    def setUp(self):
        self.department = Department.objects.create(name="Physics", description="Laser labs")

    def test_imputed_values_are_exact_products_of_kwh(self):
        record_reading(self.department.id, Decimal("123.456"), "electricity")

        reading = EnergyReading.objects.get()
        self.assertEqual(reading.kwh_used, Decimal("123.456"))
        self.assertEqual(reading.cost_usd, reading.kwh_used * Decimal("0.12"))
        self.assertEqual(reading.carbon_kg, reading.kwh_used * Decimal("0.45"))

    def test_timestamp_is_ingestion_time(self):
        before = timezone.now()
        record_reading(self.department.id, Decimal("5"), "COOLING")
        after = timezone.now()

        reading = EnergyReading.objects.get()
        self.assertTrue(before <= reading.timestamp <= after)
        self.assertEqual(reading.source_type, EnergyReading.SourceType.COOLING)

    def test_unknown_department_persists_nothing(self):
        with self.assertRaises(DepartmentNotFound) as ctx:
            record_reading(99999, Decimal("10"), "ELECTRICITY")

        self.assertEqual(ctx.exception.department_id, 99999)
        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_unknown_source_type_persists_nothing(self):
        with self.assertRaises(InvalidSourceType):
            record_reading(self.department.id, Decimal("10"), "NUCLEAR")

        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_acknowledgement_carries_new_id(self):
        result = record_reading(self.department.id, Decimal("1"), "WASTE")

        self.assertEqual(result["id"], EnergyReading.objects.get().id)
        self.assertEqual(result["message"], "Energy data saved successfully")


class RecentReadingsTest(TestCase):

    def setUp(self):
        self.physics = Department.objects.create(name="Physics")
        self.chemistry = Department.objects.create(name="Chemistry")
        now = timezone.now()
        for offset in range(12):
            EnergyReading.objects.create(
                department=self.physics if offset % 2 else self.chemistry,
                kwh_used=Decimal(offset),
                source_type=EnergyReading.SourceType.ELECTRICITY,
                timestamp=now - timedelta(minutes=offset),
                cost_usd=Decimal("0"),
                carbon_kg=Decimal("0"),
            )

    def test_newest_first_and_limited_to_ten(self):
        readings = get_recent_readings()

        self.assertEqual(len(readings), 10)
        ids = [reading["id"] for reading in readings]
        self.assertEqual(ids, sorted(ids, reverse=True))

    def test_filtered_by_department(self):
        readings = get_recent_readings(self.physics.id)

        self.assertEqual(len(readings), 6)
        self.assertTrue(all(r["departmentName"] == "Physics" for r in readings))

    def test_unknown_department(self):
        with self.assertRaises(DepartmentNotFound):
            get_recent_readings(99999)


class EnergyDataEndpointTest(TestCase):
    """
    Tests for POST/GET /api/data

    Each test runs inside a transaction that is rolled back automatically,
    ensuring full isolation between test cases.
    """

    def setUp(self):
        self.client = APIClient()
        self.department = Department.objects.create(name="Physics")

    def test_successful_ingestion(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id,
            "kwhUsed": 50,
            "sourceType": "heating",
        }, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["message"], "Energy data saved successfully")

        reading = EnergyReading.objects.get()
        self.assertEqual(reading.source_type, EnergyReading.SourceType.HEATING)
        self.assertEqual(reading.cost_usd, Decimal("6.00"))
        self.assertEqual(reading.carbon_kg, Decimal("22.50"))

    def test_explicit_cost_and_carbon_are_stored(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id,
            "kwhUsed": "12.5",
            "sourceType": "ELECTRICITY",
            "costUsd": "4.20",
            "carbonKg": 1.75,
        }, format="json")

        self.assertEqual(response.status_code, 200)
        reading = EnergyReading.objects.get()
        self.assertEqual(reading.cost_usd, Decimal("4.2"))
        self.assertEqual(reading.carbon_kg, Decimal("1.75"))

    def test_unknown_department_returns_404(self):
        response = self.client.post("/api/data", {
            "departmentId": 99999,
            "kwhUsed": 10,
            "sourceType": "ELECTRICITY",
        }, format="json")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_unknown_source_type_returns_400(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id,
            "kwhUsed": 10,
            "sourceType": "solar",
        }, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_missing_fields_returns_400(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id,
        }, format="json")

        self.assertEqual(response.status_code, 400)

    def test_non_numeric_kwh_returns_400(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id,
            "kwhUsed": "lots",
            "sourceType": "ELECTRICITY",
        }, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_kwh_beyond_stored_precision_returns_400(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id,
            "kwhUsed": "1.2345",
            "sourceType": "ELECTRICITY",
        }, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_kwh_with_trailing_zeros_is_accepted(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id,
            "kwhUsed": "1.23400",
            "sourceType": "ELECTRICITY",
        }, format="json")

        self.assertEqual(response.status_code, 200)
        reading = EnergyReading.objects.get()
        self.assertEqual(reading.cost_usd, Decimal("1.234") * Decimal("0.12"))

    def test_fractional_department_id_returns_400(self):
        response = self.client.post("/api/data", {
            "departmentId": self.department.id + 0.9,
            "kwhUsed": 10,
            "sourceType": "ELECTRICITY",
        }, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_integral_float_department_id_is_accepted(self):
        response = self.client.post("/api/data", {
            "departmentId": float(self.department.id),
            "kwhUsed": 10,
            "sourceType": "ELECTRICITY",
        }, format="json")

        self.assertEqual(response.status_code, 200)

    def test_array_body_returns_400(self):
        response = self.client.post("/api/data", [{
            "departmentId": self.department.id,
            "kwhUsed": 10,
            "sourceType": "ELECTRICITY",
        }], format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(EnergyReading.objects.count(), 0)

    def test_recent_readings_listing(self):
        self.client.post("/api/data", {
            "departmentId": self.department.id,
            "kwhUsed": 3,
            "sourceType": "WASTE",
        }, format="json")

        response = self.client.get("/api/data", {"departmentId": self.department.id})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["departmentName"], "Physics")
        self.assertEqual(response.data[0]["sourceType"], "WASTE")

    def test_recent_readings_unknown_department_returns_404(self):
        response = self.client.get("/api/data", {"departmentId": 99999})

        self.assertEqual(response.status_code, 404)
