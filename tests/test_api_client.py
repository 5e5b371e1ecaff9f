"""
Tests for core/services/api_client.py
The HTTP layer is a mocked requests.Session; nothing leaves the process.
"""
from unittest.mock import MagicMock

import pytest
import requests

from core.exceptions import SurveyApiError, SurveyApiRejected, SurveyApiUnavailable
from core.services.api_client import ApiEnvelope, Pagination, SurveyApiClient, get_api_client
from surveys.domain import Question, Survey


def _response(status=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = body if body is not None else {'success': True}
    return response


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return SurveyApiClient('http://api.test/', timeout=3, session=session)


def _last_call(session):
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs


class TestEnvelope:

    def test_missing_success_flag_counts_as_success(self):
        envelope = ApiEnvelope.from_json({'data': [1, 2]})
        assert envelope.success is True
        assert envelope.items() == [1, 2]

    def test_bare_list_body(self):
        envelope = ApiEnvelope.from_json([{'_id': 'x'}])
        assert envelope.success is True
        assert envelope.items() == [{'_id': 'x'}]

    def test_items_uses_fallback_key(self):
        envelope = ApiEnvelope.from_json({'success': True, 'registrations': [{'a': 1}]})
        assert envelope.items('registrations') == [{'a': 1}]
        assert envelope.items() == []

    def test_pagination_defaults(self):
        pagination = Pagination.from_api(None, fallback_total=7)
        assert pagination.total == 7
        assert pagination.total_pages == 1
        assert not pagination.has_previous
        assert not pagination.has_next

    def test_pagination_navigation(self):
        pagination = Pagination.from_api({'page': 2, 'limit': 100, 'total': 250, 'totalPages': 3})
        assert pagination.has_previous
        assert pagination.has_next


class TestRequests:

    def test_base_url_trailing_slash_is_dropped(self, client):
        assert client.url('/api/survey') == 'http://api.test/api/survey'

    def test_token_becomes_bearer_header(self, session):
        SurveyApiClient('http://api.test', session=session, token='tok-1')
        assert session.headers['Authorization'] == 'Bearer tok-1'

    def test_blank_params_are_not_sent(self, client, session):
        session.request.return_value = _response(body={'success': True, 'data': []})
        client.list_surveys(page=1, limit=100, search='')
        method, url, kwargs = _last_call(session)
        assert method == 'GET'
        assert url == 'http://api.test/api/survey'
        assert 'search' not in kwargs['params']
        assert kwargs['params']['sortBy'] == 'createdAt'
        assert kwargs['timeout'] == 3

    def test_connection_error_is_unavailable(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(SurveyApiUnavailable) as excinfo:
            client.list_links()
        assert excinfo.value.message == "The survey service is unreachable. Try again later."

    def test_success_false_is_rejected_with_api_message(self, client, session):
        session.request.return_value = _response(body={'success': False, 'message': 'Invalid credentials'})
        with pytest.raises(SurveyApiRejected) as excinfo:
            client.login('root', 'bad')
        assert excinfo.value.message == 'Invalid credentials'

    def test_http_error_status_is_rejected(self, client, session):
        session.request.return_value = _response(status=404, body={'message': 'Survey not found'})
        with pytest.raises(SurveyApiRejected) as excinfo:
            client.get_survey('abc')
        assert excinfo.value.status_code == 404
        assert isinstance(excinfo.value, SurveyApiError)

    def test_non_json_body(self, client, session):
        session.request.return_value = _response(status=200, json_error=True)
        with pytest.raises(SurveyApiUnavailable):
            client.list_links()
        session.request.return_value = _response(status=502, json_error=True)
        with pytest.raises(SurveyApiRejected):
            client.list_links()


class TestEndpoints:

    def test_login_returns_admin_and_token(self, client, session):
        session.request.return_value = _response(body={
            'success': True, 'admin': {'_id': 'a1', 'username': 'root'}, 'token': 'jwt',
        })
        admin, token = client.login('root', 'secret')
        assert admin['username'] == 'root'
        assert token == 'jwt'
        method, url, kwargs = _last_call(session)
        assert (method, url) == ('POST', 'http://api.test/api/admin/login')
        assert kwargs['json'] == {'username': 'root', 'password': 'secret'}

    def test_list_surveys_annotates_quota(self, client, session):
        session.request.return_value = _response(body={
            'success': True,
            'data': [
                {'_id': 's1', 'surveyName': 'Full', 'maxResponses': 5, 'responseCount': 5, 'isActive': True},
                {'_id': 's2', 'surveyName': 'Open', 'maxResponses': 0, 'responseCount': 900, 'isActive': True},
            ],
            'pagination': {'page': 1, 'limit': 100, 'total': 2, 'totalPages': 1},
        })
        surveys, pagination = client.list_surveys()
        full, unlimited = surveys
        assert full.is_full and not full.is_active
        assert not unlimited.is_full and unlimited.is_active
        assert pagination.total == 2

    def test_get_survey_reads_question_stats(self, client, session):
        session.request.return_value = _response(body={
            'success': True,
            'data': {'_id': 's1', 'surveyName': 'A', 'questions': []},
            'stats': {'totalQuestions': 4, 'questionTypes': {'text': 1, 'mcq': 3}},
        })
        survey = client.get_survey('s1')
        assert (survey.question_stats.total, survey.question_stats.text, survey.question_stats.mcq) == (4, 1, 3)
        _, url, _ = _last_call(session)
        assert url == 'http://api.test/api/survey/getServey/s1'

    def test_get_survey_counts_questions_without_stats(self, client, session):
        session.request.return_value = _response(body={
            'success': True,
            'data': {'_id': 's1', 'surveyName': 'A', 'questions': [
                {'questionText': 'Why?', 'answerType': 'text'},
                {'questionText': 'Pick', 'answerType': 'mcq', 'options': ['A', 'B']},
            ]},
        })
        stats = client.get_survey('s1').question_stats
        assert (stats.total, stats.text, stats.mcq) == (2, 1, 1)

    def test_create_survey_returns_generated_link(self, client, session):
        session.request.return_value = _response(status=201, body={
            'success': True,
            'data': {'_id': 's9', 'surveyName': 'New'},
            'generatedLink': 'http://front.test/survey/s9',
        })
        survey = Survey(id='', name='New', questions=[Question('Why?')], redirect_url='https://x.test')
        created, link = client.create_survey(survey)
        assert created.id == 's9'
        assert link == 'http://front.test/survey/s9'
        _, url, kwargs = _last_call(session)
        assert url == 'http://api.test/api/survey'
        assert kwargs['json']['surveyName'] == 'New'
        assert kwargs['json']['questions'] == [{'questionText': 'Why?', 'answerType': 'text', 'options': []}]

    def test_toggle_survey_uses_patch(self, client, session):
        session.request.return_value = _response(body={
            'success': True, 'data': {'isActive': False}, 'message': 'Survey deactivated',
        })
        assert client.toggle_survey('s1') == (False, 'Survey deactivated')
        method, url, _ = _last_call(session)
        assert (method, url) == ('PATCH', 'http://api.test/api/survey/survey/toggle/s1')

    def test_list_outcomes_paths(self, client, session):
        session.request.return_value = _response(body={'success': True, 'data': [
            {'_id': 'c1', 'userId': 'u1', 'projectId': 'p1', 'ipaddress': '1.2.3.4', 'status': 'complete'},
        ]})
        records = client.list_outcomes('quota_full', search='u1')
        assert records[0].ip_address == '1.2.3.4'
        _, url, kwargs = _last_call(session)
        assert url == 'http://api.test/api/survey/quota-full-surveys'
        assert kwargs['params'] == {'search': 'u1'}

    def test_list_outcomes_unknown_kind(self, client):
        with pytest.raises(ValueError):
            client.list_outcomes('bogus')

    def test_set_link_active_sends_flag(self, client, session):
        session.request.return_value = _response(body={'success': True, 'message': 'Updated'})
        assert client.set_link_active('l1', False) == 'Updated'
        method, url, kwargs = _last_call(session)
        assert (method, url) == ('PUT', 'http://api.test/api/surveylink/links/l1/toggle-status')
        assert kwargs['json'] == {'isActive': False}

    def test_list_registrations_fallback_key(self, client, session):
        session.request.return_value = _response(body={
            'success': True,
            'registrations': [{'_id': 'r1', 'fullName': 'Ada', 'email': 'ada@example.com'}],
        })
        registrations, pagination = client.list_registrations()
        assert registrations[0].full_name == 'Ada'
        assert pagination.total == 1

    def test_dashboard_period_param(self, client, session):
        session.request.return_value = _response(body={'success': True, 'data': {
            'totalSurveys': 4, 'completedCount': 3, 'today': {'todayClicks': 2},
        }})
        stats = client.dashboard('weekly')
        assert stats.total_surveys == 4
        assert stats.today.clicks == 2
        _, url, kwargs = _last_call(session)
        assert url == 'http://api.test/api/dashboard/dashboard'
        assert kwargs['params'] == {'filter': 'weekly'}


def test_get_api_client_reads_session_token(rf, settings):
    settings.SURVEY_API_URL = 'http://configured.test'
    request = rf.get('/')
    request.session = {'survey_api_token': 'abc'}
    api = get_api_client(request)
    assert api.base_url == 'http://configured.test'
    assert api.session.headers['Authorization'] == 'Bearer abc'
