"""
Contact form UI state.

The whole form state lives in one immutable FormUiState. Every change goes
through transition(state, event), so values, touched flags, the displayed
error and the derived validity always move together.

    Idle --submit--> Pending --ok--> Succeeded
      ^                 |
      |                 +--error--> Failed --edit--> Idle
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum

from django.utils.translation import gettext_lazy as _

from .errors import ContactFormError, ErrorKind, UnknownErrorIdentifier
from .messages import SUCCESS_MESSAGE
from .serializers import SubmissionInput
from .validation import client_failures

logger = logging.getLogger(__name__)

SUBMIT_LABEL = _("Skicka")
SUBMIT_LABEL_PENDING = _("Skickar...")

# Which server errors are shown next to which field. Anything else is shown
# as a page-level error.
FIELD_ERROR_KINDS: dict[str, frozenset[ErrorKind]] = {
    "message": frozenset({ErrorKind.MISSING_MESSAGE, ErrorKind.MESSAGE_TOO_LONG}),
    "email": frozenset(
        {
            ErrorKind.MISSING_EMAIL,
            ErrorKind.INVALID_EMAIL_FORMAT,
            ErrorKind.EMAIL_TOO_LONG,
        }
    ),
    "terms": frozenset({ErrorKind.TERMS_NOT_ACCEPTED}),
}


class FormStatus(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class FormUiState:
    message: str = ""
    email: str = ""
    terms_accepted: bool = False
    message_touched: bool = False
    email_touched: bool = False
    status: FormStatus = FormStatus.IDLE
    error: ContactFormError | None = None
    success_message: str = ""

    def as_input(self) -> SubmissionInput:
        return SubmissionInput(
            message=self.message,
            email=self.email,
            terms_accepted=self.terms_accepted,
        )

    @property
    def hints(self) -> frozenset[ErrorKind]:
        return client_failures(self.as_input())

    @property
    def is_valid(self) -> bool:
        return not self.hints

    @property
    def is_pending(self) -> bool:
        return self.status == FormStatus.PENDING

    @property
    def submit_label(self) -> str:
        return str(SUBMIT_LABEL_PENDING if self.is_pending else SUBMIT_LABEL)

    @property
    def submit_disabled(self) -> bool:
        return self.is_pending or not self.is_valid

    @property
    def show_message_hint(self) -> bool:
        return self.message_touched and ErrorKind.MISSING_MESSAGE in self.hints

    @property
    def show_email_hint(self) -> bool:
        return self.email_touched and bool(
            self.hints & {ErrorKind.MISSING_EMAIL, ErrorKind.INVALID_EMAIL_FORMAT}
        )

    def field_error(self, field: str) -> ContactFormError | None:
        """The displayed error, if it belongs to the given field."""
        if self.error is not None and self.error.kind in FIELD_ERROR_KINDS[field]:
            return self.error
        return None

    @property
    def general_error(self) -> ContactFormError | None:
        """The displayed error, if no field claims it."""
        if self.error is None:
            return None
        if any(self.error.kind in kinds for kinds in FIELD_ERROR_KINDS.values()):
            return None
        return self.error

    # Template accessors
    @property
    def message_error(self) -> ContactFormError | None:
        return self.field_error("message")

    @property
    def email_error(self) -> ContactFormError | None:
        return self.field_error("email")

    @property
    def terms_error(self) -> ContactFormError | None:
        return self.field_error("terms")


@dataclass(frozen=True)
class FieldEdited:
    field: str
    value: str | bool


@dataclass(frozen=True)
class FieldBlurred:
    field: str


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class SubmitFailed:
    error: ContactFormError


FormEvent = FieldEdited | FieldBlurred | SubmitRequested | SubmitSucceeded | SubmitFailed


def _edit(state: FormUiState, event: FieldEdited) -> FormUiState:
    if event.field == "terms":
        updated = replace(state, terms_accepted=bool(event.value))
    elif event.field in ("message", "email"):
        updated = replace(state, **{event.field: str(event.value)})
    else:
        raise ValueError(f"Unknown form field: {event.field}")

    if updated == state or state.error is None:
        return updated

    status = FormStatus.IDLE if state.status == FormStatus.FAILED else state.status
    return replace(updated, error=None, status=status)


def transition(state: FormUiState, event: FormEvent) -> FormUiState:
    """Apply one event to the form and return the new state."""
    if isinstance(event, FieldEdited):
        # Inputs are disabled while a submission is in flight
        if state.is_pending:
            return state
        return _edit(state, event)

    if isinstance(event, FieldBlurred):
        if event.field == "message":
            return replace(state, message_touched=True)
        if event.field == "email":
            return replace(state, email_touched=True)
        return state

    if isinstance(event, SubmitRequested):
        if state.submit_disabled:
            return state
        return replace(state, status=FormStatus.PENDING)

    if isinstance(event, SubmitSucceeded):
        if not state.is_pending:
            return state
        return FormUiState(
            status=FormStatus.SUCCEEDED,
            success_message=str(SUCCESS_MESSAGE),
        )

    if isinstance(event, SubmitFailed):
        if not state.is_pending:
            return state
        return replace(
            state,
            status=FormStatus.FAILED,
            error=event.error,
            success_message="",
        )

    raise TypeError(f"Unknown form event: {event!r}")


def initial_state(params: Mapping[str, str]) -> FormUiState:
    """
    Seed the form from the query parameters of a redirect.

    ?status=success shows the success message, ?error=<identifier> shows the
    matching error. Unknown identifiers are ignored.
    """
    state = FormUiState()

    if params.get("status") == "success":
        state = replace(
            state,
            status=FormStatus.SUCCEEDED,
            success_message=str(SUCCESS_MESSAGE),
        )

    identifier = params.get("error")
    if identifier:
        try:
            error = ContactFormError.parse(identifier)
        except UnknownErrorIdentifier as e:
            logger.info("Ignoring error parameter: %s", e)
        else:
            state = replace(state, status=FormStatus.FAILED, error=error)

    return state
