"""
URL configuration for the Tivander IT site.
"""

from django.urls import include, path

urlpatterns = [
    path("", include("apps.web.contact.urls")),
]
