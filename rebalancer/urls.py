from django.urls import path

from . import views

app_name = "rebalancer"

urlpatterns = [
    path("", views.PortfolioListView.as_view(), name="portfolio_list"),
    path("health/", views.HealthCheckView.as_view(), name="health"),
    path("portfolio/<int:portfolio_id>/", views.AllocationView.as_view(), name="allocation"),
    path(
        "portfolio/<int:portfolio_id>/allocation.json",
        views.AllocationJSONView.as_view(),
        name="allocation_json",
    ),
    path(
        "portfolio/<int:portfolio_id>/export.csv",
        views.AllocationExportView.as_view(),
        name="allocation_export",
    ),
    path(
        "portfolio/<int:portfolio_id>/backup.csv",
        views.PortfolioBackupView.as_view(),
        name="portfolio_backup",
    ),
    path(
        "portfolio/<int:portfolio_id>/import/",
        views.PortfolioImportView.as_view(),
        name="portfolio_import",
    ),
    path(
        "portfolio/<int:portfolio_id>/targets/<str:asset_class>/",
        views.ClassTargetUpdateView.as_view(),
        name="class_target_update",
    ),
    path(
        "portfolio/<int:portfolio_id>/assets/add/",
        views.AssetCreateView.as_view(),
        name="asset_add",
    ),
    path("portfolio/<int:portfolio_id>/dca/", views.DCAView.as_view(), name="dca"),
]
