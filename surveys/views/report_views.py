from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET

from core.exceptions import SurveyApiError
from core.mixins import admin_id, admin_required
from core.reports.exporters import EXPORTERS, TabularReport, export_report
from core.services import api_client
from core.utils.logging_utils import StructuredLogger, log_user_action
from surveys.views.crud_views import validated_survey_id

logger = StructuredLogger('surveys')


def build_submission_table(survey, submissions):
    """One column per question, missing answers shown as '-'."""
    headers = ['Sr No.', *[q.question_text for q in survey.questions], 'Submitted At']
    return TabularReport.numbered(
        f"{survey.name} Responses",
        headers,
        submissions,
        lambda s: [*[s.answer_for(q) for q in survey.questions], s.submitted_at],
        filename_prefix=f"survey_responses_{survey.id}",
        sheet_name='Responses',
        total_label='Total Responses',
    )


def _load_submissions(request, survey_id):
    client = api_client.get_api_client(request)
    survey = client.get_survey(survey_id)
    submissions = client.list_submissions(survey_id)
    return survey, submissions


@admin_required
@require_GET
def survey_submissions_view(request, survey_id):
    survey_id = validated_survey_id(request, survey_id)
    if survey_id is None:
        return redirect('surveys:list')

    try:
        survey, submissions = _load_submissions(request, survey_id)
    except SurveyApiError as exc:
        logger.error("Could not load submissions", survey_id=survey_id, error=exc.message)
        messages.error(request, exc.message)
        return redirect('surveys:list')

    table = build_submission_table(survey, submissions)
    return render(request, 'surveys/submissions.html', {
        'survey': survey,
        'table': table,
        'export_formats': list(EXPORTERS),
    })


@admin_required
@require_GET
def export_submissions_view(request, survey_id, fmt):
    if fmt not in EXPORTERS:
        raise Http404("Unknown export format")
    survey_id = validated_survey_id(request, survey_id)
    if survey_id is None:
        return redirect('surveys:list')

    try:
        survey, submissions = _load_submissions(request, survey_id)
    except SurveyApiError as exc:
        logger.error("Submission export failed", survey_id=survey_id, error=exc.message)
        messages.error(request, exc.message)
        return redirect('surveys:submissions', survey_id=survey_id)

    if not submissions:
        messages.warning(request, "No responses to export.")
        return redirect('surveys:submissions', survey_id=survey_id)

    log_user_action(
        'export_submissions', admin_id=admin_id(request.admin), survey_id=survey_id, format=fmt,
        rows=len(submissions),
    )
    return export_report(build_submission_table(survey, submissions), fmt, request=request)
