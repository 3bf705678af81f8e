"""
Decorators for request handling.
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.conf import settings
from django.http import HttpRequest

logger = logging.getLogger(__name__)


def submit_delay(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that sleeps CONTACT_SUBMIT_DELAY seconds before running the view.

    Keeps end-to-end tests stable in development. Production leaves the
    setting at 0, which skips the sleep.

    Usage:
        @submit_delay
        def submit_contact(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        delay = float(getattr(settings, "CONTACT_SUBMIT_DELAY", 0) or 0)
        if delay > 0:
            logger.debug("Delaying %s by %.2fs", request.path, delay)
            time.sleep(delay)

        return view_func(request, *args, **kwargs)

    return wrapper
