"""
Response negotiation for contact submissions.

Script-enabled clients ask for JSON through the Accept header. Everyone else
gets a redirect back to the contact section of the page, with the outcome in
the query string:

    /?status=success#contact
    /?error=MissingMessage#contact

Errors always carry both: JSON clients receive the redirect URL inside the
error payload.
"""

from urllib.parse import urlencode

from django.http import HttpRequest, HttpResponse, HttpResponseRedirect, JsonResponse
from django.urls import reverse

from .errors import ContactFormError, ErrorKind
from .messages import SUCCESS_MESSAGE
from .serializers import ContactErrorResponse, ContactSuccessResponse

CONTACT_ANCHOR = "contact"


def expects_structured_response(request: HttpRequest) -> bool:
    """True when the client accepts JSON."""
    return "application/json" in request.headers.get("Accept", "")


def contact_redirect_url(**params: str) -> str:
    """URL of the contact section with params in the query string."""
    return f"{reverse('contact:page')}?{urlencode(params)}#{CONTACT_ANCHOR}"


def _error_response(error: ContactFormError, expects_structured: bool) -> HttpResponse:
    public = error.public()
    redirect_url = contact_redirect_url(error=public.identifier)

    if not expects_structured:
        return HttpResponseRedirect(redirect_url)

    body = ContactErrorResponse(
        error=public.identifier,
        message=public.user_message,
        redirect=redirect_url,
    )
    status = 500 if error.kind == ErrorKind.DATABASE_ERROR else 400
    return JsonResponse(body.model_dump(), status=status)


def _success_response(expects_structured: bool) -> HttpResponse:
    if not expects_structured:
        return HttpResponseRedirect(contact_redirect_url(status="success"))

    body = ContactSuccessResponse(message=str(SUCCESS_MESSAGE))
    return JsonResponse(body.model_dump())


def negotiate(error: ContactFormError | None, expects_structured: bool) -> HttpResponse:
    """
    Build the response for a finished submission.

    Args:
        error: The validation or storage error, or None on success
        expects_structured: Whether the client asked for JSON
    """
    if error is not None:
        return _error_response(error, expects_structured)
    return _success_response(expects_structured)
