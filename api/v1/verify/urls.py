"""
URL configuration for the public verification endpoint.
"""

from django.urls import path

from api.v1.verify import views

urlpatterns = [
    path("verify", views.VerifyKeyView.as_view(), name="verify-key"),
]
