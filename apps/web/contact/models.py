"""
Contact models.

Only validated, trimmed values are stored. Table name matches the existing
schema ("emails").
"""

from django.db import models


class ContactSubmission(models.Model):
    """A message left through the contact form."""

    email = models.EmailField(max_length=254)
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "emails"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Contact from {self.email}"
