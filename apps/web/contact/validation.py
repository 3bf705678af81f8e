"""
Contact form validation.

One ordered rule table drives two passes:
- validate_submission(): the authoritative server pass. Reports the first
  failing rule, so the order of RULES decides which error wins when a
  submission breaks several constraints.
- client_failures() / is_client_valid(): the advisory pass used for inline
  hints. Runs the advisory subset of the same rules and never replaces the
  server pass. Its email check is stricter (exactly one '@').

Length limits count UTF-8 bytes of the trimmed value.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from .errors import ContactFormError, ErrorKind
from .serializers import SubmissionInput

MAX_EMAIL_LENGTH = 254
MAX_MESSAGE_LENGTH = 5000


def encoded_length(value: str) -> int:
    return len(value.encode("utf-8"))


def has_email_shape(email: str) -> bool:
    """Loose shape check: contains '@' but neither starts nor ends with it."""
    return "@" in email and not email.startswith("@") and not email.endswith("@")


def has_client_email_shape(email: str) -> bool:
    """Exactly one '@', not at either end."""
    return email.count("@") == 1 and has_email_shape(email)


@dataclass(frozen=True)
class ValidationRule:
    kind: ErrorKind
    fails: Callable[[SubmissionInput], bool]
    advisory: bool = False


RULES: tuple[ValidationRule, ...] = (
    ValidationRule(
        ErrorKind.MISSING_EMAIL,
        lambda s: not s.email.strip(),
        advisory=True,
    ),
    ValidationRule(
        ErrorKind.MISSING_MESSAGE,
        lambda s: not s.message.strip(),
        advisory=True,
    ),
    ValidationRule(
        ErrorKind.TERMS_NOT_ACCEPTED,
        lambda s: not s.terms_accepted,
        advisory=True,
    ),
    ValidationRule(
        ErrorKind.EMAIL_TOO_LONG,
        lambda s: encoded_length(s.email.strip()) > MAX_EMAIL_LENGTH,
    ),
    ValidationRule(
        ErrorKind.MESSAGE_TOO_LONG,
        lambda s: encoded_length(s.message.strip()) > MAX_MESSAGE_LENGTH,
    ),
    ValidationRule(
        ErrorKind.INVALID_EMAIL_FORMAT,
        lambda s: not has_email_shape(s.email.strip()),
        advisory=True,
    ),
)


def _client_rule(rule: ValidationRule) -> ValidationRule:
    if rule.kind == ErrorKind.INVALID_EMAIL_FORMAT:
        return replace(rule, fails=lambda s: not has_client_email_shape(s.email.strip()))
    return rule


CLIENT_RULES: tuple[ValidationRule, ...] = tuple(
    _client_rule(rule) for rule in RULES if rule.advisory
)


def validate_submission(submission: SubmissionInput) -> ContactFormError | None:
    """
    Authoritative check of a submission.

    Returns:
        The first failing rule's error, or None if the submission is valid
    """
    for rule in RULES:
        if rule.fails(submission):
            return ContactFormError(rule.kind)
    return None


def client_failures(submission: SubmissionInput) -> frozenset[ErrorKind]:
    """Every advisory rule the submission currently breaks."""
    return frozenset(rule.kind for rule in CLIENT_RULES if rule.fails(submission))


def is_client_valid(submission: SubmissionInput) -> bool:
    return not client_failures(submission)
