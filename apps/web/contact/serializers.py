"""
Pydantic schemas for contact form input and JSON responses.

These schemas define the contract with script-enabled clients.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class SubmissionInput(BaseModel):
    """Raw contact form fields, before validation."""

    model_config = ConfigDict(frozen=True)

    message: str = ""
    email: str = ""
    terms_accepted: bool = False

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "SubmissionInput":
        """
        Build input from posted form fields.

        Checkboxes are only posted when checked, so the presence of "terms"
        means accepted, whatever its value.
        """
        return cls(
            message=str(data.get("message") or ""),
            email=str(data.get("email") or ""),
            terms_accepted=data.get("terms") is not None,
        )

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "SubmissionInput":
        """
        Build input from a JSON body.

        JSON clients send an explicit value, so "terms" must be true or a
        non-empty string; false, null and "" mean not accepted.
        """
        terms = data.get("terms")
        if isinstance(terms, str):
            accepted = bool(terms.strip())
        else:
            accepted = terms is True

        return cls(
            message=str(data.get("message") or ""),
            email=str(data.get("email") or ""),
            terms_accepted=accepted,
        )


class ContactSuccessResponse(BaseModel):
    success: Literal[True] = True
    message: str


class ContactErrorResponse(BaseModel):
    """Error payload; redirect is the URL a script-disabled client is sent to."""

    success: Literal[False] = False
    error: str
    message: str
    redirect: str
