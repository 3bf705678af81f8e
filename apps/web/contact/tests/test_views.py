"""
Tests for the contact page and submission endpoint.
"""

from unittest.mock import patch

from django.db import IntegrityError, OperationalError
from django.test import Client as DjangoTestClient
from django.test import override_settings
from django.urls import reverse

import pytest

from apps.web.contact.models import ContactSubmission

JSON = {"HTTP_ACCEPT": "application/json"}


@pytest.fixture
def submit_url() -> str:
    return reverse("contact:submit")


@pytest.mark.django_db
class TestSubmitContact:
    """Tests for POST /api/contact/."""

    def test_success_json(self, http_client, submit_url, valid_form) -> None:
        """Script clients get a JSON success and no redirect."""
        response = http_client.post(submit_url, valid_form, **JSON)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Ditt meddelande är mottaget. Vi återkopplar snart.",
        }
        assert "Location" not in response

        stored = ContactSubmission.objects.get()
        assert (stored.email, stored.message) == ("a@b.se", "Hej!")

    def test_success_redirect(self, http_client, submit_url, valid_form) -> None:
        """Script-disabled clients are redirected with a success marker."""
        response = http_client.post(submit_url, valid_form)

        assert response.status_code == 302
        assert response.url == "/?status=success#contact"
        assert ContactSubmission.objects.count() == 1

    def test_missing_message_json(self, http_client, submit_url, valid_form) -> None:
        valid_form["message"] = ""

        with patch("apps.web.contact.services.persist_contact") as mock_persist:
            response = http_client.post(submit_url, valid_form, **JSON)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "MissingMessage",
            "message": "Meddelandet får inte vara tomt.",
            "redirect": "/?error=MissingMessage#contact",
        }
        mock_persist.assert_not_called()

    def test_missing_message_redirect(self, http_client, submit_url, valid_form) -> None:
        valid_form["message"] = ""

        response = http_client.post(submit_url, valid_form)

        assert response.status_code == 302
        assert response.url == "/?error=MissingMessage#contact"
        assert ContactSubmission.objects.count() == 0

    def test_invalid_email_format(self, http_client, submit_url) -> None:
        response = http_client.post(
            submit_url,
            {"message": "hi", "email": "not-an-email", "terms": "on"},
            **JSON,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidEmailFormat"

    def test_terms_absent(self, http_client, submit_url) -> None:
        response = http_client.post(submit_url, {"message": "hi", "email": "a@b.se"})

        assert response.url == "/?error=TermsNotAccepted#contact"

    def test_database_unavailable_json(self, http_client, submit_url, valid_form) -> None:
        """Database details stay on the server."""
        with patch("apps.web.contact.services.connection") as mock_connection:
            mock_connection.ensure_connection.side_effect = OperationalError(
                "could not connect to server at 10.0.0.5"
            )
            response = http_client.post(submit_url, valid_form, **JSON)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "DatabaseError"
        assert body["message"] == "Ett serverfel uppstod: Okänt databasfel"
        assert body["redirect"] == "/?error=DatabaseError#contact"
        assert "10.0.0.5" not in response.content.decode()
        assert ContactSubmission.objects.count() == 0

    def test_database_unavailable_redirect(
        self, http_client, submit_url, valid_form
    ) -> None:
        with patch("apps.web.contact.services.connection") as mock_connection:
            mock_connection.ensure_connection.side_effect = OperationalError("down")
            response = http_client.post(submit_url, valid_form)

        assert response.status_code == 302
        assert response.url == "/?error=DatabaseError#contact"
        assert ContactSubmission.objects.count() == 0

    def test_json_body(self, http_client, submit_url) -> None:
        response = http_client.post(
            submit_url,
            {"message": "Hej!", "email": "a@b.se", "terms": True},
            content_type="application/json",
            **JSON,
        )

        assert response.status_code == 200
        assert ContactSubmission.objects.count() == 1

    def test_json_terms_false(self, http_client, submit_url) -> None:
        """An explicit false in a JSON body is not consent."""
        response = http_client.post(
            submit_url,
            {"message": "Hej!", "email": "a@b.se", "terms": False},
            content_type="application/json",
            **JSON,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "TermsNotAccepted"
        assert ContactSubmission.objects.count() == 0

    def test_json_without_csrf_token(self, submit_url) -> None:
        """Script clients post without a CSRF cookie."""
        client = DjangoTestClient(enforce_csrf_checks=True)

        response = client.post(
            submit_url,
            {"message": "Hej!", "email": "a@b.se", "terms": True},
            content_type="application/json",
            **JSON,
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert ContactSubmission.objects.count() == 1

    def test_form_without_csrf_token(self, submit_url, valid_form) -> None:
        client = DjangoTestClient(enforce_csrf_checks=True)

        response = client.post(submit_url, valid_form)

        assert response.status_code == 302
        assert response.url == "/?status=success#contact"

    def test_insert_failure_json(self, http_client, submit_url, valid_form) -> None:
        """A failed insert is a server error and its detail stays hidden."""
        with patch.object(
            ContactSubmission.objects,
            "create",
            side_effect=IntegrityError("duplicate key in table emails"),
        ):
            response = http_client.post(submit_url, valid_form, **JSON)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "DatabaseError"
        assert body["message"] == "Ett serverfel uppstod: Okänt databasfel"
        assert "duplicate key" not in response.content.decode()
        assert ContactSubmission.objects.count() == 0

    def test_blank_email_redirect(self, http_client, submit_url, valid_form) -> None:
        valid_form["email"] = "   "

        response = http_client.post(submit_url, valid_form)

        assert response.status_code == 302
        assert response.url == "/?error=MissingEmail#contact"
        assert ContactSubmission.objects.count() == 0

    def test_blank_terms_value_is_checked(
        self, http_client, submit_url, valid_form
    ) -> None:
        """A posted checkbox counts as checked whatever its value."""
        valid_form["terms"] = "  "

        response = http_client.post(submit_url, valid_form)

        assert response.url == "/?status=success#contact"
        assert ContactSubmission.objects.count() == 1

    def test_multibyte_message_too_long(
        self, http_client, submit_url, valid_form
    ) -> None:
        valid_form["message"] = "ö" * 5000

        response = http_client.post(submit_url, valid_form, **JSON)

        assert response.status_code == 400
        assert response.json()["error"] == "MessageTooLong"

    def test_invalid_json_body(self, http_client, submit_url) -> None:
        response = http_client.post(
            submit_url,
            "{not json",
            content_type="application/json",
            **JSON,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON in request body"}

    def test_get_not_allowed(self, http_client, submit_url) -> None:
        response = http_client.get(submit_url)
        assert response.status_code == 405

    def test_same_submission_twice(self, http_client, submit_url, valid_form) -> None:
        http_client.post(submit_url, valid_form, **JSON)
        http_client.post(submit_url, valid_form, **JSON)

        assert ContactSubmission.objects.count() == 2

    @override_settings(CONTACT_SUBMIT_DELAY=0.25)
    def test_configured_delay(self, http_client, submit_url, valid_form) -> None:
        with patch("apps.web.core.decorators.time.sleep") as mock_sleep:
            http_client.post(submit_url, valid_form, **JSON)

        mock_sleep.assert_called_once_with(0.25)

    def test_no_delay_by_default(self, http_client, submit_url, valid_form) -> None:
        with patch("apps.web.core.decorators.time.sleep") as mock_sleep:
            http_client.post(submit_url, valid_form, **JSON)

        mock_sleep.assert_not_called()


class TestContactPage:
    """Tests for GET / seeded from redirect parameters."""

    def test_renders_empty_form(self, http_client) -> None:
        response = http_client.get(reverse("contact:page"))

        assert response.status_code == 200
        content = response.content.decode()
        assert 'id="contact"' in content
        assert 'data-testid="contact-form"' in content
        assert 'value="Skicka"' in content
        assert "error-message" not in content
        assert "success-message" not in content

    def test_success_marker(self, http_client) -> None:
        response = http_client.get(reverse("contact:page"), {"status": "success"})

        content = response.content.decode()
        assert '<p class="success-message">' in content
        assert "Ditt meddelande är mottaget." in content

    def test_field_error(self, http_client) -> None:
        response = http_client.get(reverse("contact:page"), {"error": "EmailTooLong"})

        content = response.content.decode()
        assert 'id="email-error"' in content
        assert "E-postadressen är för lång (max 254 tecken)." in content
        assert "general-error" not in content

    def test_terms_error(self, http_client) -> None:
        response = http_client.get(
            reverse("contact:page"), {"error": "TermsNotAccepted"}
        )

        assert 'id="terms-error"' in response.content.decode()

    def test_database_error_is_general(self, http_client) -> None:
        response = http_client.get(reverse("contact:page"), {"error": "DatabaseError"})

        content = response.content.decode()
        assert "general-error" in content
        assert "Ett serverfel uppstod: Okänt databasfel" in content
        assert 'id="message-error"' not in content

    @override_settings(DEBUG=True)
    def test_error_wins_over_success(self, http_client) -> None:
        response = http_client.get(
            reverse("contact:page"), {"status": "success", "error": "MissingEmail"}
        )

        content = response.content.decode()
        assert response.status_code == 200
        assert 'id="email-error"' in content
        assert "Ange en email-adress." in content
        assert "Status: failed" in content
        assert "Displayed Error: MissingEmail" in content

    def test_unknown_error_ignored(self, http_client) -> None:
        response = http_client.get(reverse("contact:page"), {"error": "Bogus"})

        assert response.status_code == 200
        assert "error-message" not in response.content.decode()

    @override_settings(DEBUG=True)
    def test_debug_panel(self, http_client) -> None:
        response = http_client.get(reverse("contact:page"), {"error": "MissingEmail"})

        content = response.content.decode()
        assert "Displayed Error: MissingEmail" in content
