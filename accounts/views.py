from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.cache import never_cache
from django.views.decorators.csrf import csrf_protect
from django.views.decorators.http import require_http_methods
from django_ratelimit.decorators import ratelimit

from core.exceptions import SurveyApiError, SurveyApiRejected
from core.mixins import SESSION_ADMIN_KEY, admin_id, get_session_admin
from core.services import api_client
from core.services.api_client import SESSION_TOKEN_KEY
from core.utils.logging_utils import StructuredLogger, log_security_event, log_user_action

from .forms import AdminLoginForm

logger = StructuredLogger('accounts')


def _safe_next(request):
    target = request.POST.get('next') or request.GET.get('next')
    if target and url_has_allowed_host_and_scheme(
        target, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return target
    return None


@never_cache
@csrf_protect
@require_http_methods(['GET', 'POST'])
@ratelimit(key='ip', rate='10/m', method='POST', block=True)
def login_view(request):
    if get_session_admin(request):
        return redirect('core:dashboard')

    form = AdminLoginForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        username = form.cleaned_data['username']
        client = api_client.get_api_client(request)
        try:
            admin, token = client.login(username, form.cleaned_data['password'])
        except SurveyApiRejected as exc:
            log_security_event(
                'LOGIN_FAILED', username=username, ip=request.META.get('REMOTE_ADDR'), status=exc.status_code,
            )
            messages.error(request, exc.message)
        except SurveyApiError:
            logger.exception("Login request failed", username=username)
            messages.error(request, "Something went wrong. Try again.")
        else:
            request.session.cycle_key()
            request.session[SESSION_ADMIN_KEY] = admin or {'username': username}
            if token:
                request.session[SESSION_TOKEN_KEY] = token
            log_user_action('login', admin_id=admin_id(admin), username=username)
            return redirect(_safe_next(request) or 'core:dashboard')

    return render(request, 'accounts/login.html', {
        'form': form,
        'next': _safe_next(request) or '',
    })


@require_http_methods(['GET', 'POST'])
def logout_view(request):
    admin = get_session_admin(request)
    if admin:
        log_user_action('logout', admin_id=admin_id(admin))
    request.session.flush()
    return redirect('accounts:login')
