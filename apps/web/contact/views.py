"""
Contact views - the contact page and its submission endpoint.

The page is rendered from a FormUiState seeded by the query string, so a
redirect after a failed (or successful) submission shows the outcome without
any script.
"""

import json
import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.web.core.decorators import submit_delay

from .errors import ContactFormError
from .form_state import initial_state
from .negotiation import expects_structured_response, negotiate
from .serializers import SubmissionInput
from .services import store_contact_form

logger = logging.getLogger(__name__)


@require_GET
def contact_page(request: HttpRequest) -> HttpResponse:
    """
    GET /

    Renders the contact section. Reads ?status=success or ?error=<identifier>.
    """
    form = initial_state(request.GET)
    return render(
        request,
        "contact/page.html",
        {"form": form, "show_debug": settings.DEBUG},
    )


@csrf_exempt
@require_POST
@submit_delay
def submit_contact(request: HttpRequest) -> HttpResponse:
    """
    POST /api/contact/

    Accepts form-encoded (or JSON) message, email and optional terms.
    Responds with JSON when the client accepts it, otherwise redirects back
    to the contact section.

    Not CSRF protected: script clients without a CSRF cookie still get a JSON
    answer.
    """
    expects_structured = expects_structured_response(request)

    if request.content_type == "application/json":
        try:
            data = json.loads(request.body)
        except json.JSONDecodeError:
            return JsonResponse({"error": "Invalid JSON in request body"}, status=400)
        if not isinstance(data, dict):
            return JsonResponse({"error": "Expected a JSON object"}, status=400)
        submission = SubmissionInput.from_json(data)
    else:
        submission = SubmissionInput.from_form(request.POST)

    try:
        store_contact_form(submission)
    except ContactFormError as e:
        return negotiate(e, expects_structured)

    logger.info("Contact form submitted (json=%s)", expects_structured)
    return negotiate(None, expects_structured)
