"""
URL configuration for reseller API endpoints.
"""

from django.urls import path

from api.v1.reseller import views

urlpatterns = [
    path("credits", views.CreditsView.as_view(), name="reseller-credits"),
    path("keys", views.KeysView.as_view(), name="reseller-keys"),
    path("keys/<int:key_id>", views.KeyDetailView.as_view(), name="reseller-key-detail"),
    path("keys/<int:key_id>/reset", views.KeyResetView.as_view(), name="reseller-key-reset"),
    path(
        "keys/<int:key_id>/devices",
        views.KeyDevicesView.as_view(),
        name="reseller-key-devices",
    ),
]
