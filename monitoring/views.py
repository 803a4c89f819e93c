"""
API Layer — Energy monitoring endpoints (Django REST Framework)

Views are thin controllers. Their responsibilities are limited to:

- Basic input validation and type coercion
- Delegation to the application use cases
- Translation of domain exceptions into HTTP responses

Domain exceptions map explicitly to status codes: unknown department → 404,
unrecognised enum value or malformed field → 400. Anything unexpected is
logged and answered with a generic 500 by api_exception_handler.

The two initialisation endpoints keep their own response contract:
{message, success, ...counts}, with success false (and status 200) when data
already exists, and status 500 when loading fails.
"""

import logging
from decimal import InvalidOperation

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView, exception_handler

from monitoring.application.dashboard import get_dashboard
from monitoring.application.departments import list_departments
from monitoring.application.readings import get_recent_readings, record_reading
from monitoring.application.seeding import data_status, initialize_seed_data, reset_and_initialize
from monitoring.application.suggestions import get_active_suggestions
from monitoring.domain.exceptions import (
    DepartmentNotFound,
    InvalidPriority,
    InvalidSourceType,
    SeedDataAlreadyLoaded,
)
from monitoring.domain.rules import has_kwh_precision, to_decimal

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    REST framework exception handler.

    Framework exceptions (parse errors, method not allowed, ...) keep their
    standard responses. Any other exception becomes a generic 500.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", type(view).__name__ if view else "API view")
    return Response(
        {"error": "Internal server error."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _parse_department_id(value):
    number = to_decimal(value)
    if number != number.to_integral_value():
        raise ValueError(f"departmentId is not an integer: {value!r}")
    return int(number)


class EnergyDataView(APIView):
    """
    POST /api/data — record one simulated sensor reading.
    GET  /api/data — list the most recent readings (optional ?departmentId=).
    """

    def post(self, request):
        if not isinstance(request.data, dict):
            return Response(
                {"error": "Request body must be a JSON object."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        department_id = request.data.get("departmentId")
        kwh_used = request.data.get("kwhUsed")
        source_type = request.data.get("sourceType")
        cost_usd = request.data.get("costUsd")
        carbon_kg = request.data.get("carbonKg")

        if department_id is None or kwh_used is None or not source_type:
            return Response(
                {"error": "departmentId, kwhUsed, and sourceType are required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            department_id = _parse_department_id(department_id)
            kwh_used = to_decimal(kwh_used)
            cost_usd = to_decimal(cost_usd) if cost_usd is not None else None
            carbon_kg = to_decimal(carbon_kg) if carbon_kg is not None else None
        except (TypeError, ValueError, InvalidOperation):
            return Response(
                {"error": "departmentId must be an integer; kwhUsed, costUsd and carbonKg must be numbers."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if not has_kwh_precision(kwh_used):
            return Response(
                {"error": "kwhUsed must have at most 3 decimal places."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = record_reading(department_id, kwh_used, source_type, cost_usd, carbon_kg)
        except DepartmentNotFound as exc:
            return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidSourceType as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(result, status=status.HTTP_200_OK)

    def get(self, request):
        department_id = request.query_params.get("departmentId")
        if department_id is not None:
            try:
                department_id = int(department_id)
            except ValueError:
                return Response(
                    {"error": "departmentId must be an integer."},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        try:
            readings = get_recent_readings(department_id)
        except DepartmentNotFound as exc:
            return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        return Response(readings, status=status.HTTP_200_OK)


class DashboardView(APIView):
    """GET /api/dashboard-data"""

    def get(self, request):
        return Response(get_dashboard(), status=status.HTTP_200_OK)


class SuggestionListView(APIView):
    """GET /api/suggestions (optional ?priority=HIGH|MEDIUM|LOW)"""

    def get(self, request):
        try:
            suggestions = get_active_suggestions(priority=request.query_params.get("priority"))
        except InvalidPriority as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(suggestions, status=status.HTTP_200_OK)


class DepartmentListView(APIView):
    """GET /api/departments"""

    def get(self, request):
        return Response(list_departments(), status=status.HTTP_200_OK)


class InitializeTestDataView(APIView):
    """POST /api/initialize-test-data"""

    def post(self, request):
        try:
            result = initialize_seed_data()
        except SeedDataAlreadyLoaded as exc:
            return Response(
                {"message": str(exc), "success": False},
                status=status.HTTP_200_OK,
            )
        except Exception as exc:
            logger.exception("Seed initialisation failed")
            return Response(
                {"message": f"Error loading test data: {exc}", "success": False},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(result, status=status.HTTP_200_OK)


class ResetAndInitializeView(APIView):
    """POST /api/reset-and-initialize"""

    def post(self, request):
        try:
            result = reset_and_initialize()
        except Exception as exc:
            logger.exception("Seed reset failed")
            return Response(
                {"message": f"Error resetting data: {exc}", "success": False},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(result, status=status.HTTP_200_OK)


class DataStatusView(APIView):
    """GET /api/data-status"""

    def get(self, request):
        return Response(data_status(), status=status.HTTP_200_OK)
