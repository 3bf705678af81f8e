"""
Contact services - validation and storage of submissions.

This is the only module that writes contact submissions to the database.
"""

import logging

from django.db import DatabaseError, connection, transaction

from .errors import ContactFormError, ErrorKind
from .models import ContactSubmission
from .serializers import SubmissionInput
from .validation import validate_submission

logger = logging.getLogger(__name__)

CONNECTION_FAILED_DETAIL = "Kunde inte ansluta till databasen."


def persist_contact(email: str, message: str) -> ContactSubmission:
    """
    Insert one contact submission.

    Args:
        email: Validated, trimmed email address
        message: Validated, trimmed message

    Returns:
        The stored ContactSubmission

    Raises:
        ContactFormError: DATABASE_ERROR if the database is unreachable or the
            insert fails
    """
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        logger.exception("Could not connect to the database: %s", e)
        raise ContactFormError(ErrorKind.DATABASE_ERROR, CONNECTION_FAILED_DETAIL) from e

    try:
        with transaction.atomic():
            submission = ContactSubmission.objects.create(email=email, message=message)
    except DatabaseError as e:
        logger.exception("Database execution error: %s", e)
        raise ContactFormError(ErrorKind.DATABASE_ERROR, str(e)) from e

    logger.info("Stored contact submission %s", submission.pk)
    return submission


def store_contact_form(submission: SubmissionInput) -> ContactSubmission:
    """
    Validate a submission and store it.

    Raises:
        ContactFormError: The first validation failure, or DATABASE_ERROR
    """
    error = validate_submission(submission)
    if error is not None:
        logger.info("Validation failed: %s", error.identifier)
        raise error

    return persist_contact(submission.email.strip(), submission.message.strip())
