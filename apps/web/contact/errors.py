"""
Contact form error taxonomy.

Every rejected submission maps to exactly one ErrorKind. The kind's value is
its wire identifier: it travels in redirect URLs (?error=<identifier>) and
JSON payloads, and parses back into the same kind.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

# Detail used when a DatabaseError is rebuilt from its identifier alone.
DATABASE_ERROR_PLACEHOLDER = "Okänt databasfel"


class ErrorKind(models.TextChoices):
    MISSING_EMAIL = "MissingEmail", _("Ange en email-adress.")
    INVALID_EMAIL_FORMAT = "InvalidEmailFormat", _("Ange en giltig email-adress.")
    EMAIL_TOO_LONG = "EmailTooLong", _("E-postadressen är för lång (max 254 tecken).")
    MISSING_MESSAGE = "MissingMessage", _("Meddelandet får inte vara tomt.")
    MESSAGE_TOO_LONG = "MessageTooLong", _("Meddelandet är för långt (max 5000 tecken).")
    TERMS_NOT_ACCEPTED = "TermsNotAccepted", _(
        "Du måste acceptera villkoren för att skicka meddelandet."
    )
    DATABASE_ERROR = "DatabaseError", _("Ett serverfel uppstod: %(detail)s")


class UnknownErrorIdentifier(ValueError):
    """Raised when an identifier does not name any ErrorKind."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Okänt felvariantnamn kunde inte parsas: {identifier}")


class ContactFormError(Exception):
    """
    A rejected contact form submission.

    Only DATABASE_ERROR carries a detail. The detail never becomes part of the
    identifier, so it is lost when the error crosses a redirect.
    """

    def __init__(self, kind: ErrorKind | str, detail: str = "") -> None:
        self.kind = ErrorKind(kind)
        self.detail = detail
        super().__init__(self.identifier)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContactFormError):
            return NotImplemented
        return self.kind == other.kind and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))

    def __repr__(self) -> str:
        if self.detail:
            return f"ContactFormError({self.identifier}, {self.detail!r})"
        return f"ContactFormError({self.identifier})"

    @property
    def identifier(self) -> str:
        return str(self.kind.value)

    @property
    def user_message(self) -> str:
        """Localized message shown to the user."""
        if self.kind == ErrorKind.DATABASE_ERROR:
            return str(self.kind.label) % {"detail": self.detail}
        return str(self.kind.label)

    def public(self) -> "ContactFormError":
        """Copy that is safe to show a client: database details are replaced."""
        if self.kind == ErrorKind.DATABASE_ERROR:
            return ContactFormError(self.kind, DATABASE_ERROR_PLACEHOLDER)
        return self

    @classmethod
    def parse(cls, identifier: str) -> "ContactFormError":
        """
        Rebuild an error from its wire identifier.

        Raises:
            UnknownErrorIdentifier: If identifier is not one of the ErrorKind values
        """
        if identifier not in ErrorKind.values:
            raise UnknownErrorIdentifier(identifier)
        kind = ErrorKind(identifier)
        if kind == ErrorKind.DATABASE_ERROR:
            return cls(kind, DATABASE_ERROR_PLACEHOLDER)
        return cls(kind)
