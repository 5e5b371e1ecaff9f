"""
Reusable access checks for admin pages.
The logged-in admin lives in the session as the profile returned by the API.
"""
import functools
import logging

from django.contrib.auth import REDIRECT_FIELD_NAME
from django.conf import settings
from django.http import QueryDict
from django.shortcuts import redirect, resolve_url

from core.services import api_client

logger = logging.getLogger(__name__)

SESSION_ADMIN_KEY = 'admin'


def get_session_admin(request):
    """The admin profile stored at login, or None."""
    admin = request.session.get(SESSION_ADMIN_KEY)
    return admin if isinstance(admin, dict) and admin else None


def admin_id(admin):
    if not admin:
        return None
    return admin.get('id') or admin.get('_id')


def _redirect_to_login(request):
    logger.info(
        "Anonymous access to %s from IP %s redirected to login",
        request.path,
        request.META.get('REMOTE_ADDR'),
    )
    query = QueryDict(mutable=True)
    query[REDIRECT_FIELD_NAME] = request.get_full_path()
    return redirect(f"{resolve_url(settings.LOGIN_URL)}?{query.urlencode(safe='/')}")


def admin_required(view_func):
    """Function-view decorator: redirect to the login page when no admin is in session."""
    @functools.wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        request.admin = get_session_admin(request)
        if request.admin is None:
            return _redirect_to_login(request)
        return view_func(request, *args, **kwargs)
    return _wrapped


class AdminRequiredMixin:
    """Class-view counterpart of ``admin_required``."""

    def dispatch(self, request, *args, **kwargs):
        request.admin = get_session_admin(request)
        if request.admin is None:
            return _redirect_to_login(request)
        return super().dispatch(request, *args, **kwargs)


class ApiClientMixin:
    """Gives class views a per-request survey API client."""

    def get_api_client(self):
        if not hasattr(self, '_api_client'):
            self._api_client = api_client.get_api_client(self.request)
        return self._api_client
