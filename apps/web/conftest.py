"""
Pytest configuration for Django app tests.
"""

from django.test import Client as DjangoTestClient

import pytest


@pytest.fixture
def http_client() -> DjangoTestClient:
    """Django test client for form and API requests."""
    return DjangoTestClient()


@pytest.fixture
def valid_form() -> dict[str, str]:
    """A contact form that passes every validation rule."""
    return {"message": "Hej!", "email": "a@b.se", "terms": "on"}
