"""User-facing texts shared by the server responses and the form."""

from django.utils.translation import gettext_lazy as _

SUCCESS_MESSAGE = _("Ditt meddelande är mottaget. Vi återkopplar snart.")
