"""
Rate limiting error handler for core app.
"""

from django.shortcuts import render

from core.utils.logging_utils import log_security_event


def ratelimit_error(request, exception=None):
    """Renders the 429 page when django-ratelimit blocks a request."""
    log_security_event(
        'RATE_LIMIT_EXCEEDED',
        path=request.path,
        ip=request.META.get('REMOTE_ADDR'),
    )
    return render(
        request,
        'core/ratelimit_error.html',
        {
            'message': 'You have sent too many requests. Please wait a minute and try again.',
        },
        status=429
    )
