"""
Factory classes for contact models.
"""

import factory

from apps.web.contact.models import ContactSubmission


class ContactSubmissionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ContactSubmission

    email = factory.Faker("email")
    message = factory.Faker("paragraph")
