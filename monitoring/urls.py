from django.urls import path

from .views import (
    DashboardView,
    DataStatusView,
    DepartmentListView,
    EnergyDataView,
    InitializeTestDataView,
    ResetAndInitializeView,
    SuggestionListView,
)

urlpatterns = [
    path("data", EnergyDataView.as_view(), name="energy-data"),
    path("dashboard-data", DashboardView.as_view(), name="dashboard-data"),
    path("suggestions", SuggestionListView.as_view(), name="suggestions"),
    path("departments", DepartmentListView.as_view(), name="departments"),
    path("initialize-test-data", InitializeTestDataView.as_view(), name="initialize-test-data"),
    path("reset-and-initialize", ResetAndInitializeView.as_view(), name="reset-and-initialize"),
    path("data-status", DataStatusView.as_view(), name="data-status"),
]
