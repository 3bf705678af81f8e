"""
Contact URL routes.
"""

from django.urls import path

from . import views

app_name = "contact"

urlpatterns = [
    path("", views.contact_page, name="page"),
    path("api/contact/", views.submit_contact, name="submit"),
]
