"""
Outcome lists recorded by the redirect endpoint: completed, terminated,
quota full and every click. All four share these views.
"""
from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.core.paginator import Paginator
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET

from core.exceptions import SurveyApiError
from core.mixins import admin_id, admin_required
from core.reports.exporters import EXPORTERS, export_report
from core.services import api_client
from core.utils.helpers import querystring, status_color
from core.utils.logging_utils import StructuredLogger, log_user_action
from core.validators import QueryValidator
from surveys.outcomes import OUTCOME_REPORTS, raw_data_rows, status_summary

logger = StructuredLogger('surveys')


def _get_report(kind):
    try:
        return OUTCOME_REPORTS[kind]
    except KeyError:
        raise Http404("Unknown outcome report") from None


def _search_term(request):
    try:
        return QueryValidator.validate_search(request.GET.get('search'))
    except ValidationError as e:
        messages.error(request, e.messages[0])
        return ''


@admin_required
@require_GET
def outcome_list_view(request, kind):
    report = _get_report(kind)
    search = _search_term(request)

    records = []
    try:
        records = api_client.get_api_client(request).list_outcomes(kind, search=search)
    except SurveyApiError as exc:
        logger.error("Could not load outcome list", kind=kind, error=exc.message)
        messages.error(request, exc.message)

    paginator = Paginator(records, settings.OUTCOME_PAGE_SIZE)
    page_obj = paginator.get_page(request.GET.get('page'))
    offset = page_obj.start_index() - 1 if records else 0
    rows = [
        {'number': offset + index, 'record': record, 'color': status_color(record.status)}
        for index, record in enumerate(page_obj.object_list, start=1)
    ]

    return render(request, 'surveys/outcomes.html', {
        'report': report,
        'rows': rows,
        'page_obj': page_obj,
        'total': len(records),
        'search': search,
        'page_query': querystring(search=search),
        'status_counts': status_summary(records) if report.shows_status_counts else None,
        'export_formats': list(EXPORTERS),
    })


@admin_required
@require_GET
def outcome_raw_data_view(request, kind, record_id):
    """Every field of one record except the storage internals."""
    report = _get_report(kind)
    search = _search_term(request)
    try:
        records = api_client.get_api_client(request).list_outcomes(kind, search=search)
    except SurveyApiError as exc:
        messages.error(request, exc.message)
        return redirect('surveys:outcomes', kind=kind)

    record = next((r for r in records if r.id == record_id), None)
    if record is None:
        messages.error(request, "That record no longer exists.")
        return redirect('surveys:outcomes', kind=kind)

    return render(request, 'surveys/raw_data.html', {
        'report': report,
        'record': record,
        'fields': raw_data_rows(record),
    })


@admin_required
@require_GET
def export_outcomes_view(request, kind, fmt):
    report = _get_report(kind)
    if fmt not in EXPORTERS:
        raise Http404("Unknown export format")
    search = _search_term(request)

    try:
        records = api_client.get_api_client(request).list_outcomes(kind, search=search)
    except SurveyApiError as exc:
        logger.error("Outcome export failed", kind=kind, error=exc.message)
        messages.error(request, exc.message)
        return redirect('surveys:outcomes', kind=kind)

    if not records:
        messages.warning(request, "No records to export.")
        return redirect('surveys:outcomes', kind=kind)

    log_user_action('export_outcomes', admin_id=admin_id(request.admin), kind=kind, format=fmt, rows=len(records))
    return export_report(report.build_table(records), fmt, request=request)
