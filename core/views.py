"""
core/views.py
Dashboard and admin profile pages.
"""
from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods

from core.exceptions import SurveyApiError
from core.forms import PasswordChangeForm
from core.mixins import SESSION_ADMIN_KEY, admin_id, admin_required
from core.services import api_client
from core.services.dashboard_service import PERIODS, DashboardStats
from core.utils.charts import ChartGenerator
from core.utils.logging_utils import StructuredLogger, log_security_event, log_user_action
from core.validators import QueryValidator

logger = StructuredLogger('core.views')


@admin_required
@require_GET
def dashboard_view(request):
    period = QueryValidator.validate_period(request.GET.get('filter'))

    stats = DashboardStats()
    try:
        stats = api_client.get_api_client(request).dashboard(period)
    except SurveyApiError as exc:
        logger.error("Could not load dashboard figures", period=period, error=exc.message)
        messages.error(request, exc.message)

    distribution = stats.distribution()
    return render(request, 'core/dashboard.html', {
        'stats': stats,
        'period': period,
        'periods': PERIODS,
        'distribution': distribution,
        'chart_image': ChartGenerator.generate_outcome_chart(distribution),
    })


@admin_required
@require_http_methods(['GET', 'POST'])
def profile_view(request):
    """Admin profile, refreshed from the API when it answers, plus the password change form."""
    admin = request.admin
    current_id = admin_id(admin)

    if current_id:
        try:
            fresh = api_client.get_api_client(request).get_admin(current_id)
        except SurveyApiError as exc:
            logger.warning("Could not refresh admin profile", admin_id=current_id, error=exc.message)
        else:
            if fresh:
                admin = {**admin, **fresh}
                request.session[SESSION_ADMIN_KEY] = admin

    form = PasswordChangeForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            message = api_client.get_api_client(request).change_password(
                current_id,
                form.cleaned_data['current_password'],
                form.cleaned_data['new_password'],
            )
        except SurveyApiError as exc:
            log_security_event('PASSWORD_CHANGE_FAILED', admin_id=current_id, status=exc.status_code)
            messages.error(request, exc.message)
        else:
            log_user_action('change_password', admin_id=current_id)
            messages.success(request, message or "Password successfully changed!")
            return redirect('core:profile')

    return render(request, 'core/profile.html', {
        'admin': admin,
        'form': form,
        'show_password_form': request.method == 'POST',
    })
