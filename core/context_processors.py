"""
Template context shared by every page.
"""
from django.conf import settings

from core.mixins import get_session_admin


def admin_session(request):
    admin = get_session_admin(request) if hasattr(request, 'session') else None
    return {
        'current_admin': admin,
        'company_name': getattr(settings, 'COMPANY_NAME', 'SurveyDesk'),
        'survey_api_url': settings.SURVEY_API_URL,
    }
