from django.urls import path

from modules.core.views import CapabilitiesView, health_check

urlpatterns = [
    path("health", health_check, name="health_check"),
    path("api/v1/me", CapabilitiesView.as_view(), name="capabilities"),
]
