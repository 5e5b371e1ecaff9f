from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST
from django.views.generic import TemplateView

from core.exceptions import SurveyApiError
from core.mixins import AdminRequiredMixin, ApiClientMixin, admin_id, admin_required
from core.services import api_client
from core.services.api_client import Pagination
from core.utils.helpers import querystring, row_offset, sort_querystrings
from core.utils.logging_utils import StructuredLogger, log_user_action
from core.validators import IdentifierValidator, QueryValidator
from surveys.forms import SurveyForm
from surveys.domain import QuestionStats

logger = StructuredLogger('surveys')

SORT_FIELDS = ('createdAt', '_id', 'surveyName')


def _back_to_list(request):
    """Redirect to ``next`` when it points inside the panel, else to the survey list."""
    target = request.POST.get('next') or request.GET.get('next')
    if target and url_has_allowed_host_and_scheme(target, allowed_hosts={request.get_host()}):
        return redirect(target)
    return redirect('surveys:list')


def validated_survey_id(request, survey_id):
    try:
        return IdentifierValidator.validate_id(survey_id, label="survey ID")
    except ValidationError as e:
        messages.error(request, e.messages[0])
        return None


class SurveyListView(AdminRequiredMixin, ApiClientMixin, TemplateView):
    template_name = 'surveys/list.html'

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
        limit = settings.SURVEY_LIST_PAGE_SIZE

        surveys, pagination = [], Pagination(page=page, limit=limit)
        try:
            surveys, pagination = self.get_api_client().list_surveys(
                page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order,
            )
        except SurveyApiError as exc:
            logger.error("Could not load surveys", error=exc.message, status=exc.status_code)
            messages.error(self.request, exc.message)

        offset = row_offset(page, limit)
        context.update({
            'rows': [(offset + index, survey) for index, survey in enumerate(surveys, start=1)],
            'pagination': pagination,
            'page': page,
            'search': search,
            'sort_by': sort_by,
            'sort_order': sort_order,
            'sort_links': sort_querystrings(SORT_FIELDS, sort_by, sort_order, search=search),
            'page_query': querystring(search=search, sortBy=sort_by, sortOrder=sort_order),
            'current_url': self.request.get_full_path(),
        })
        return context


@admin_required
def survey_create_view(request):
    form = SurveyForm(request.POST or None)

    if request.method == 'POST' and form.is_valid():
        client = api_client.get_api_client(request)
        try:
            survey, generated_link = client.create_survey(form.to_survey())
        except SurveyApiError as exc:
            logger.error("Survey creation failed", error=exc.message, status=exc.status_code)
            log_user_action('create_survey', success=False, admin_id=admin_id(request.admin))
            messages.error(request, exc.message)
        else:
            log_user_action(
                'create_survey', admin_id=admin_id(request.admin), survey_id=survey.id, survey_name=survey.name,
            )
            messages.success(request, "Survey created successfully.")
            return render(request, 'surveys/created.html', {
                'survey': survey,
                'generated_link': generated_link,
            })

    return render(request, 'surveys/form.html', {
        'form': form,
        'page_title': "Create Survey",
        'submit_label': "Create Survey",
    })


@admin_required
def survey_detail_view(request, survey_id):
    """Shows a survey and saves edits through PUT."""
    survey_id = validated_survey_id(request, survey_id)
    if survey_id is None:
        return redirect('surveys:list')

    client = api_client.get_api_client(request)
    try:
        survey = client.get_survey(survey_id)
    except SurveyApiError as exc:
        logger.warning("Survey not available", survey_id=survey_id, error=exc.message)
        messages.error(request, exc.message)
        return redirect('surveys:list')

    if request.method == 'POST':
        form = SurveyForm(request.POST)
        if form.is_valid():
            try:
                client.update_survey(survey_id, form.to_survey(survey_id))
            except SurveyApiError as exc:
                logger.error("Survey update failed", survey_id=survey_id, error=exc.message)
                messages.error(request, exc.message)
            else:
                log_user_action('update_survey', admin_id=admin_id(request.admin), survey_id=survey_id)
                messages.success(request, "Survey updated successfully.")
                return redirect('surveys:detail', survey_id=survey_id)
    else:
        form = SurveyForm(initial=SurveyForm.initial_for(survey))

    return render(request, 'surveys/detail.html', {
        'survey': survey,
        'question_stats': survey.question_stats or QuestionStats.from_questions(survey.questions),
        'form': form,
        'page_title': survey.name or "Survey",
        'submit_label': "Save Changes",
    })


@admin_required
def survey_delete_view(request, survey_id):
    """GET asks for confirmation, POST deletes."""
    survey_id = validated_survey_id(request, survey_id)
    if survey_id is None:
        return redirect('surveys:list')

    client = api_client.get_api_client(request)
    if request.method == 'POST':
        try:
            message = client.delete_survey(survey_id)
        except SurveyApiError as exc:
            logger.error("Survey deletion failed", survey_id=survey_id, error=exc.message)
            log_user_action('delete_survey', success=False, admin_id=admin_id(request.admin), survey_id=survey_id)
            messages.error(request, exc.message)
        else:
            log_user_action('delete_survey', admin_id=admin_id(request.admin), survey_id=survey_id)
            messages.success(request, message or "Survey deleted.")
        return _back_to_list(request)

    try:
        survey = client.get_survey(survey_id)
    except SurveyApiError as exc:
        messages.error(request, exc.message)
        return redirect('surveys:list')
    return render(request, 'surveys/confirm_delete.html', {
        'survey': survey,
        'next': request.GET.get('next', reverse('surveys:list')),
    })


@admin_required
@require_POST
def survey_toggle_view(request, survey_id):
    """
    Flip a survey's active flag.
    Surveys whose response count matches the quota stay inactive; the toggle is refused before reaching the API.
    """
    survey_id = validated_survey_id(request, survey_id)
    if survey_id is None:
        return _back_to_list(request)

    client = api_client.get_api_client(request)
    try:
        survey = client.get_survey(survey_id)
        if survey.is_full:
            logger.info("Toggle refused for full survey", survey_id=survey_id)
            messages.error(request, "Max submission full: this survey cannot be activated.")
            return _back_to_list(request)
        is_active, message = client.toggle_survey(survey_id)
    except SurveyApiError as exc:
        logger.error("Survey toggle failed", survey_id=survey_id, error=exc.message)
        messages.error(request, exc.message)
        return _back_to_list(request)

    log_user_action('toggle_survey', admin_id=admin_id(request.admin), survey_id=survey_id, is_active=is_active)
    messages.success(request, message or ("Survey activated." if is_active else "Survey deactivated."))
    return _back_to_list(request)


def survey_not_live_view(request):
    """Public page shown to respondents when a survey is switched off."""
    return render(request, 'surveys/not_live.html', {
        'support_email': settings.SUPPORT_EMAIL,
    })
