"""
URL configuration for authentication endpoints.
"""

from django.urls import path

from api.v1.auth import views

urlpatterns = [
    path("admin/login", views.AdminLoginView.as_view(), name="admin-login"),
    path("reseller/login", views.ResellerLoginView.as_view(), name="reseller-login"),
    path("reseller/register", views.RegisterResellerView.as_view(), name="reseller-register"),
    path("logout", views.LogoutView.as_view(), name="logout"),
    path("me", views.MeView.as_view(), name="me"),
]
