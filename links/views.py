from django.conf import settings
from django.contrib import messages
from django.core.exceptions import ValidationError
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from core.exceptions import SurveyApiError
from core.mixins import admin_id, admin_required
from core.services import api_client
from core.utils.logging_utils import StructuredLogger, log_user_action
from core.validators import IdentifierValidator
from links.domain import DEFAULT_PARAMETERS, build_click_url
from links.forms import LinkForm, ParameterFormSet, default_parameter_initial, parameter_pairs
from surveys.domain import Outcome

logger = StructuredLogger('links')

PARAMS_PREFIX = 'params'


def validated_link_id(request, link_id):
    try:
        return IdentifierValidator.validate_id(link_id, label="link ID")
    except ValidationError as e:
        messages.error(request, e.messages[0])
        return None


@admin_required
@require_GET
def link_list_view(request):
    links = []
    try:
        links = api_client.get_api_client(request).list_links()
    except SurveyApiError as exc:
        logger.error("Could not load redirect links", error=exc.message)
        messages.error(request, "Failed to load links")
    return render(request, 'links/list.html', {'links': links})


@admin_required
@require_http_methods(['GET', 'POST'])
def link_create_view(request):
    """
    Builds a redirect link.
    Every POST recomputes the preview; only the save action sends it to the API.
    """
    base_url = settings.SURVEY_API_URL

    if request.method == 'GET':
        form = LinkForm()
        formset = ParameterFormSet(prefix=PARAMS_PREFIX, initial=default_parameter_initial())
        preview = build_click_url(base_url, DEFAULT_PARAMETERS, Outcome.COMPLETE)
        return render(request, 'links/create.html', {'form': form, 'formset': formset, 'preview': preview})

    form = LinkForm(request.POST)
    formset = ParameterFormSet(request.POST, prefix=PARAMS_PREFIX)
    preview = None

    if form.is_valid() and formset.is_valid():
        pairs = parameter_pairs(formset)
        status = form.cleaned_data['status']
        preview = build_click_url(base_url, pairs, status)

        if request.POST.get('action') == 'save':
            name = form.cleaned_data['name']
            if not name:
                form.add_error('name', "Please give this link a name!")
            else:
                try:
                    link = api_client.get_api_client(request).create_link(name, preview, status, dict(pairs))
                except SurveyApiError as exc:
                    logger.error("Link creation failed", name=name, error=exc.message)
                    messages.error(request, exc.message or "Failed to save link")
                else:
                    log_user_action('create_link', admin_id=admin_id(request.admin), link_id=link.id, status=status)
                    messages.success(request, "Link saved successfully!")
                    return redirect('links:list')
        else:
            # Fresh blank row for the next parameter, keeping the current ones
            formset = ParameterFormSet(
                prefix=PARAMS_PREFIX, initial=[{'key': k, 'value': v} for k, v in pairs],
            )

    return render(request, 'links/create.html', {'form': form, 'formset': formset, 'preview': preview})


@admin_required
@require_POST
def link_delete_view(request, link_id):
    link_id = validated_link_id(request, link_id)
    if link_id is None:
        return redirect('links:list')
    try:
        message = api_client.get_api_client(request).delete_link(link_id)
    except SurveyApiError as exc:
        logger.error("Link deletion failed", link_id=link_id, error=exc.message)
        messages.error(request, exc.message or "Failed to delete link")
    else:
        log_user_action('delete_link', admin_id=admin_id(request.admin), link_id=link_id)
        messages.success(request, message or "Link deleted successfully!")
    return redirect('links:list')


@admin_required
@require_POST
def link_toggle_view(request, link_id):
    """Sends the opposite of the state shown on the page; a missing flag reads as active."""
    link_id = validated_link_id(request, link_id)
    if link_id is None:
        return redirect('links:list')
    currently_active = request.POST.get('is_active', 'true').lower() != 'false'
    try:
        message = api_client.get_api_client(request).set_link_active(link_id, not currently_active)
    except SurveyApiError as exc:
        logger.error("Link status update failed", link_id=link_id, error=exc.message)
        messages.error(request, exc.message or "Failed to update status")
    else:
        log_user_action(
            'toggle_link', admin_id=admin_id(request.admin), link_id=link_id, is_active=not currently_active,
        )
        messages.success(request, message or f"Link {'deactivated' if currently_active else 'activated'}")
    return redirect('links:list')
