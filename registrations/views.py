import time

from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from django.views.generic import TemplateView
from django_ratelimit.decorators import ratelimit

from core.exceptions import SurveyApiError, SurveyApiUnavailable
from core.mixins import AdminRequiredMixin, ApiClientMixin, admin_id, admin_required
from core.reports.exporters import EXPORTERS, TabularReport, export_report
from core.services import api_client
from core.services.api_client import Pagination
from core.utils.helpers import querystring, row_offset, sort_querystrings
from core.utils.logging_utils import StructuredLogger, log_security_event, log_user_action
from core.validators import ContactValidator, IdentifierValidator, QueryValidator
from registrations.domain import API_FIELDS
from registrations.forms import RegistrationForm

logger = StructuredLogger('registrations')

SORT_FIELDS = ('createdAt', '_id', 'fullName', 'email', 'gender')
EXPORT_HEADERS = [
    'Sr No', 'Full Name', 'Email', 'Age', 'Gender', 'Location', 'Designation', 'Industry', 'Registered On',
]

# Session keys for the OTP flow
OTP_SENT_EMAIL = 'otp_sent_email'
OTP_SENT_AT = 'otp_sent_at'
OTP_VERIFIED_EMAIL = 'otp_verified_email'


def answer_rows(registration):
    """``(question, answer)`` pairs in form order, labelled like the sign-up form."""
    return [
        (form_field.label, getattr(registration, name))
        for name, form_field in RegistrationForm.base_fields.items()
        if name in API_FIELDS
    ]


def _otp_error(message, status=400):
    return JsonResponse({'success': False, 'message': message}, status=status)


def _otp_rate_limited(request):
    """JSON counterpart of the 429 page, for the OTP endpoints called from the sign-up script."""
    log_security_event('RATE_LIMIT_EXCEEDED', path=request.path, ip=request.META.get('REMOTE_ADDR'))
    return _otp_error("Too many requests. Please wait a minute and try again.", status=429)


def resend_wait_seconds(session, email, now=None):
    """Seconds left before another code may be sent to ``email``; 0 when allowed."""
    if session.get(OTP_SENT_EMAIL) != email:
        return 0
    sent_at = session.get(OTP_SENT_AT)
    if not sent_at:
        return 0
    now = now if now is not None else time.time()
    remaining = settings.OTP_RESEND_COOLDOWN - (now - sent_at)
    return max(int(remaining + 0.999), 0)


@require_POST
@ratelimit(key='ip', rate='5/m', method='POST', block=False)
def otp_send_view(request):
    if getattr(request, 'limited', False):
        return _otp_rate_limited(request)

    try:
        email = ContactValidator.validate_email_address(request.POST.get('email'))
    except ValidationError as e:
        return _otp_error(e.messages[0])

    wait = resend_wait_seconds(request.session, email)
    if wait:
        return _otp_error(f"Please wait {wait} seconds before resending OTP", status=429)

    try:
        message = api_client.get_api_client(request).send_otp(email)
    except SurveyApiUnavailable:
        logger.exception("OTP send failed", email=email)
        return _otp_error("Failed to send OTP", status=502)
    except SurveyApiError as exc:
        logger.warning("OTP send rejected", email=email, error=exc.message)
        return _otp_error(exc.message)

    # A new code for another address drops any earlier verification
    if request.session.get(OTP_VERIFIED_EMAIL) != email:
        request.session.pop(OTP_VERIFIED_EMAIL, None)
    request.session[OTP_SENT_EMAIL] = email
    request.session[OTP_SENT_AT] = time.time()
    logger.info("OTP sent", email=email)
    return JsonResponse({
        'success': True,
        'message': message or f"OTP sent to {email}",
        'cooldown': settings.OTP_RESEND_COOLDOWN,
    })


@require_POST
@ratelimit(key='ip', rate='10/m', method='POST', block=False)
def otp_verify_view(request):
    if getattr(request, 'limited', False):
        return _otp_rate_limited(request)

    try:
        email = ContactValidator.validate_email_address(request.POST.get('email'))
        code = ContactValidator.validate_otp(request.POST.get('otp'))
    except ValidationError as e:
        return _otp_error(e.messages[0])

    try:
        message = api_client.get_api_client(request).verify_otp(email, code)
    except SurveyApiUnavailable:
        logger.exception("OTP verification failed", email=email)
        return _otp_error("OTP verification failed", status=502)
    except SurveyApiError as exc:
        logger.warning("OTP rejected", email=email, error=exc.message)
        return _otp_error(exc.message)

    request.session[OTP_VERIFIED_EMAIL] = email
    logger.info("Email verified", email=email)
    return JsonResponse({'success': True, 'message': message or "Email verified", 'email': email})


@require_http_methods(['GET', 'POST'])
def register_view(request):
    """Public panelist registration form."""
    verified_email = request.session.get(OTP_VERIFIED_EMAIL)
    form = RegistrationForm(request.POST or None, verified_email=verified_email)

    if request.method == 'POST':
        if form.is_valid():
            registration = form.to_registration()
            try:
                api_client.get_api_client(request).add_registration(registration.to_api())
            except SurveyApiError as exc:
                logger.error("Registration submission failed", email=registration.email, error=exc.message)
                messages.error(request, exc.message)
            else:
                logger.info("Registration submitted", email=registration.email)
                for key in (OTP_VERIFIED_EMAIL, OTP_SENT_EMAIL, OTP_SENT_AT):
                    request.session.pop(key, None)
                return render(request, 'registrations/success.html', {'registration': registration})
        elif form.email_not_verified:
            messages.error(request, "Please verify your email before submitting")

    return render(request, 'registrations/register.html', {
        'form': form,
        'verified_email': verified_email or '',
        'otp_cooldown': settings.OTP_RESEND_COOLDOWN,
    })


class RegistrationListView(AdminRequiredMixin, ApiClientMixin, TemplateView):
    template_name = 'registrations/list.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        params = self.request.GET

        try:
            search = QueryValidator.validate_search(params.get('search'))
        except ValidationError as e:
            messages.error(self.request, e.messages[0])
            search = ''
        sort_by, sort_order = QueryValidator.validate_sort(
            params.get('sortBy'), params.get('sortOrder'), SORT_FIELDS
        )
        page = QueryValidator.validate_page(params.get('page'))
        limit = settings.REGISTRATION_PAGE_SIZE

        registrations, pagination = [], Pagination(page=page, limit=limit)
        try:
            registrations, pagination = self.get_api_client().list_registrations(
                page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order,
            )
        except SurveyApiError as exc:
            logger.error("Could not load registrations", error=exc.message)
            messages.error(self.request, exc.message)

        offset = row_offset(page, limit)
        context.update({
            'rows': [(offset + index, r) for index, r in enumerate(registrations, start=1)],
            'pagination': pagination,
            'search': search,
            'sort_by': sort_by,
            'sort_order': sort_order,
            'sort_links': sort_querystrings(SORT_FIELDS, sort_by, sort_order, search=search),
            'page_query': querystring(search=search, sortBy=sort_by, sortOrder=sort_order),
            'export_formats': list(EXPORTERS),
        })
        return context


@admin_required
@require_GET
def registration_detail_view(request, registration_id):
    try:
        registration_id = IdentifierValidator.validate_id(registration_id, label="registration ID")
        registration = api_client.get_api_client(request).get_registration(registration_id)
    except ValidationError as e:
        messages.error(request, e.messages[0])
        return redirect('registrations:list')
    except SurveyApiError as exc:
        logger.warning("Registration not available", registration_id=registration_id, error=exc.message)
        messages.error(request, exc.message)
        return redirect('registrations:list')
    return render(request, 'registrations/detail.html', {
        'registration': registration,
        'fields': answer_rows(registration),
    })


def build_registration_table(registrations):
    return TabularReport.numbered(
        'Registration Report',
        EXPORT_HEADERS,
        registrations,
        lambda r: [r.full_name, r.email, r.age, r.gender, r.location, r.designation, r.industry, r.created_at],
        filename_prefix='registrations',
        sheet_name='Registrations',
        total_label='Total Registrations',
    )


@admin_required
@require_GET
def export_registrations_view(request, fmt):
    if fmt not in EXPORTERS:
        raise Http404("Unknown export format")

    try:
        registrations, _ = api_client.get_api_client(request).list_registrations(
            page=1, limit=settings.REGISTRATION_EXPORT_LIMIT,
        )
    except SurveyApiError as exc:
        logger.error("Registration export failed", error=exc.message)
        messages.error(request, exc.message)
        return redirect('registrations:list')

    if not registrations:
        messages.warning(request, "No registrations to export.")
        return redirect('registrations:list')

    log_user_action('export_registrations', admin_id=admin_id(request.admin), format=fmt, rows=len(registrations))
    return export_report(build_registration_table(registrations), fmt, request=request)
