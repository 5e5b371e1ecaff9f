"""
Client for the external survey API.

Every page of the panel reads and writes through this module. Responses use
the envelope ``{success, data, message?, pagination?}``; the client unwraps it
into domain objects and turns failures into ``SurveyApiError`` subclasses so
views only deal with one exception family.
"""
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from django.conf import settings

from core.exceptions import SurveyApiRejected, SurveyApiUnavailable
from core.services.dashboard_service import DashboardStats
from core.utils.helpers import to_int
from core.utils.logging_utils import StructuredLogger, log_performance
from links.domain import RedirectLink
from registrations.domain import Registration
from surveys.domain import ClickRecord, QuestionStats, Submission, Survey, annotate_quota

logger = StructuredLogger(__name__)

# Session key holding the bearer token, when the API issues one at login
SESSION_TOKEN_KEY = 'survey_api_token'

# Outcome list endpoints keyed by report kind
OUTCOME_PATHS = {
    'complete': '/api/survey/complete-survey',
    'terminate': '/api/survey/terminate-survey',
    'quota_full': '/api/survey/quota-full-surveys',
    'clicks': '/api/survey/get-clicks',
}


@dataclass
class Pagination:
    page: int = 1
    limit: int = 0
    total: int = 0
    total_pages: int = 1

    @classmethod
    def from_api(cls, payload, fallback_total=0):
        payload = payload or {}
        return cls(
            page=max(to_int(payload.get('page'), 1), 1),
            limit=to_int(payload.get('limit')),
            total=to_int(payload.get('total'), fallback_total),
            total_pages=max(to_int(payload.get('totalPages'), 1), 1),
        )

    @property
    def has_previous(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.total_pages


@dataclass
class ApiEnvelope:
    """Decoded response body. ``body`` keeps the raw JSON for endpoints with extra keys."""

    success: bool
    data: Any = None
    message: str = ''
    pagination: dict | None = None
    body: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, body):
        if not isinstance(body, dict):
            # Some list endpoints answer with a bare array
            return cls(success=True, data=body, body={'data': body})
        return cls(
            success=bool(body.get('success', True)),
            data=body.get('data'),
            message=body.get('message') or '',
            pagination=body.get('pagination'),
            body=body,
        )

    def items(self, *fallback_keys):
        """The list payload, looking into alternative keys when ``data`` is not a list."""
        if isinstance(self.data, list):
            return self.data
        for key in fallback_keys:
            value = self.body.get(key)
            if isinstance(value, list):
                return value
        return []


class SurveyApiClient:
    """Thin synchronous wrapper around the survey REST API."""

    def __init__(self, base_url, timeout=10, session=None, token=None):
        self.base_url = (base_url or '').rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if token:
            self.session.headers['Authorization'] = f'Bearer {token}'

    def url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    @log_performance()
    def _request(self, method, path, params=None, payload=None) -> ApiEnvelope:
        url = self.url(path)
        if params:
            params = {k: v for k, v in params.items() if v not in (None, '')}
        start = time.time()
        try:
            response = self.session.request(
                method, url, params=params or None, json=payload, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.error("Survey API unreachable", method=method, path=path, error=str(exc))
            raise SurveyApiUnavailable() from exc

        elapsed_ms = (time.time() - start) * 1000
        logger.debug(
            "Survey API call",
            method=method, path=path, status=response.status_code, elapsed_ms=f"{elapsed_ms:.1f}",
        )

        try:
            body = response.json()
        except ValueError as exc:
            logger.error(
                "Survey API returned a non-JSON body",
                method=method, path=path, status=response.status_code,
            )
            if response.status_code >= 400:
                raise SurveyApiRejected(status_code=response.status_code) from exc
            raise SurveyApiUnavailable(status_code=response.status_code) from exc

        envelope = ApiEnvelope.from_json(body)
        if response.status_code >= 400 or not envelope.success:
            logger.warning(
                "Survey API rejected request",
                method=method, path=path, status=response.status_code, message=envelope.message,
            )
            raise SurveyApiRejected(
                message=envelope.message or None,
                status_code=response.status_code,
                payload=envelope.body,
            )
        return envelope

    # Admin

    def login(self, username, password):
        """Returns ``(admin, token)``; token is None when the API issues none."""
        envelope = self._request('POST', '/api/admin/login', payload={
            'username': username,
            'password': password,
        })
        admin = envelope.body.get('admin') or envelope.data or {}
        return admin, envelope.body.get('token')

    def get_admin(self, admin_id):
        envelope = self._request('GET', f'/api/admin/getAdmin/{admin_id}')
        return envelope.body.get('admin') or envelope.data or {}

    def change_password(self, admin_id, current_password, new_password):
        envelope = self._request('POST', '/api/admin/changePassword', payload={
            'adminId': admin_id,
            'currentPassword': current_password,
            'newPassword': new_password,
        })
        return envelope.message

    # Surveys

    def list_surveys(self, page=1, limit=100, search='', sort_by='createdAt', sort_order='desc'):
        envelope = self._request('GET', '/api/survey', params={
            'page': page,
            'limit': limit,
            'search': search,
            'sortBy': sort_by,
            'sortOrder': sort_order,
        })
        rows = envelope.items()
        surveys = [annotate_quota(Survey.from_api(row)) for row in rows]
        return surveys, Pagination.from_api(envelope.pagination, fallback_total=len(rows))

    def create_survey(self, survey):
        """Returns the created survey and the redirect link generated for it."""
        envelope = self._request('POST', '/api/survey', payload=survey.to_api())
        created = Survey.from_api(envelope.data or {})
        link = envelope.body.get('generatedLink') or created.generated_link
        return created, link

    def get_survey(self, survey_id):
        envelope = self._request('GET', f'/api/survey/getServey/{survey_id}')
        survey = annotate_quota(Survey.from_api(envelope.data or {}))
        survey.question_stats = QuestionStats.from_api(envelope.body.get('stats'), survey.questions)
        return survey

    def update_survey(self, survey_id, survey):
        envelope = self._request('PUT', f'/api/survey/update/{survey_id}', payload=survey.to_api())
        return Survey.from_api(envelope.data or {}) if envelope.data else survey

    def delete_survey(self, survey_id):
        return self._request('DELETE', f'/api/survey/surveys/{survey_id}').message

    def toggle_survey(self, survey_id):
        """Flip the active flag. Returns ``(is_active, message)`` as reported by the API."""
        envelope = self._request('PATCH', f'/api/survey/survey/toggle/{survey_id}')
        data = envelope.data or {}
        return bool(data.get('isActive')), envelope.message

    def list_outcomes(self, kind, search=''):
        try:
            path = OUTCOME_PATHS[kind]
        except KeyError:
            raise ValueError(f"Unknown outcome kind: {kind}") from None
        envelope = self._request('GET', path, params={'search': search})
        return [ClickRecord.from_api(row) for row in envelope.items()]

    def list_submissions(self, survey_id):
        envelope = self._request('GET', f'/api/submission/survey/{survey_id}')
        return [Submission.from_api(row) for row in envelope.items()]

    # Redirect links

    def list_links(self):
        envelope = self._request('GET', '/api/surveylink/get-links')
        return [RedirectLink.from_api(row) for row in envelope.items()]

    def create_link(self, name, url, status, parameters):
        envelope = self._request('POST', '/api/surveylink/links', payload={
            'name': name,
            'url': url,
            'status': status,
            'parameters': parameters,
        })
        return RedirectLink.from_api(envelope.data or {})

    def delete_link(self, link_id):
        return self._request('DELETE', f'/api/surveylink/links/{link_id}').message

    def set_link_active(self, link_id, is_active):
        envelope = self._request('PUT', f'/api/surveylink/links/{link_id}/toggle-status', payload={
            'isActive': bool(is_active),
        })
        return envelope.message

    # Registrations

    def list_registrations(self, page=1, limit=100, search='', sort_by='createdAt', sort_order='desc'):
        envelope = self._request('GET', '/api/registration/get', params={
            'page': page,
            'limit': limit,
            'search': search,
            'sortBy': sort_by,
            'sortOrder': sort_order,
        })
        rows = envelope.items('registrations')
        registrations = [Registration.from_api(row) for row in rows]
        return registrations, Pagination.from_api(envelope.pagination, fallback_total=len(rows))

    def get_registration(self, registration_id):
        envelope = self._request('GET', f'/api/registration/getbyid/{registration_id}')
        return Registration.from_api(envelope.data or {})

    def add_registration(self, payload):
        return self._request('POST', '/api/registration/add', payload=payload).message

    def send_otp(self, email):
        return self._request('POST', '/api/otp/send', payload={'email': email}).message

    def verify_otp(self, email, otp):
        return self._request('POST', '/api/otp/verify', payload={'email': email, 'otp': otp}).message

    # Dashboard

    def dashboard(self, period='monthly'):
        envelope = self._request('GET', '/api/dashboard/dashboard', params={'filter': period})
        return DashboardStats.from_api(envelope.data or {})


def get_api_client(request=None):
    """Client configured from settings, carrying the session's bearer token if any."""
    token = None
    if request is not None and hasattr(request, 'session'):
        token = request.session.get(SESSION_TOKEN_KEY)
    return SurveyApiClient(
        base_url=settings.SURVEY_API_URL,
        timeout=getattr(settings, 'SURVEY_API_TIMEOUT', 10),
        token=token,
    )
