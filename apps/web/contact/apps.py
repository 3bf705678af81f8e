"""Django app configuration for contact module."""

from django.apps import AppConfig


class ContactConfig(AppConfig):
    """Contact app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.contact"
    label = "contact"
    verbose_name = "Contact"
