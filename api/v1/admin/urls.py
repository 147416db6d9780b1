"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path("resellers", views.ResellersView.as_view(), name="admin-resellers"),
    path(
        "resellers/<int:reseller_id>",
        views.ResellerDetailView.as_view(),
        name="admin-reseller-detail",
    ),
    path(
        "resellers/<int:reseller_id>/credits",
        views.ResellerCreditsView.as_view(),
        name="admin-reseller-credits",
    ),
    path("keys", views.AdminKeysView.as_view(), name="admin-keys"),
    path("referral-tokens", views.ReferralTokensView.as_view(), name="admin-referral-tokens"),
]
