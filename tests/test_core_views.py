from unittest.mock import patch

from django.urls import reverse

from core.exceptions import SurveyApiRejected, SurveyApiUnavailable
from core.services.dashboard_service import DashboardStats, TodayStats


@patch('core.views.ChartGenerator.generate_outcome_chart', return_value='iVBOR')
def test_dashboard(chart, panel_client, api):
    api.dashboard.return_value = DashboardStats(
        total_surveys=12, completed_count=6, terminated_count=2, quota_full_count=0,
        today=TodayStats(clicks=4),
    )
    response = panel_client.get(reverse('core:dashboard'), {'filter': 'weekly'})
    assert response.status_code == 200
    api.dashboard.assert_called_once_with('weekly')
    assert response.context['period'] == 'weekly'
    assert [row['width'] for row in response.context['distribution']] == [75.0, 25.0, 0.0]
    assert response.context['chart_image'] == 'iVBOR'


@patch('core.views.ChartGenerator.generate_outcome_chart', return_value=None)
def test_dashboard_unknown_period_falls_back(chart, panel_client, api):
    api.dashboard.return_value = DashboardStats()
    panel_client.get(reverse('core:dashboard'), {'filter': 'hourly'})
    api.dashboard.assert_called_once_with('monthly')


@patch('core.views.ChartGenerator.generate_outcome_chart', return_value=None)
def test_dashboard_api_down_shows_zeroes(chart, panel_client, api):
    api.dashboard.side_effect = SurveyApiUnavailable()
    response = panel_client.get(reverse('core:dashboard'))
    assert response.status_code == 200
    assert response.context['stats'].total_surveys == 0


def test_profile_refreshes_admin(panel_client, api):
    api.get_admin.return_value = {'_id': 'a1b2c3', 'username': 'root', 'email': 'new@example.com'}
    response = panel_client.get(reverse('core:profile'))
    assert response.status_code == 200
    assert response.context['admin']['email'] == 'new@example.com'
    assert panel_client.session['admin']['email'] == 'new@example.com'


def test_password_mismatch_never_calls_api(panel_client, api):
    api.get_admin.return_value = {}
    response = panel_client.post(reverse('core:profile'), {
        'current_password': 'old-pass', 'new_password': 'abcdef', 'confirm_password': 'abcdeg',
    })
    assert response.status_code == 200
    assert b'New password and confirm password do not match!' in response.content
    api.change_password.assert_not_called()


def test_password_change(panel_client, api):
    api.get_admin.return_value = {}
    api.change_password.return_value = 'Password successfully changed!'
    response = panel_client.post(reverse('core:profile'), {
        'current_password': 'old-pass', 'new_password': 'abcdef', 'confirm_password': 'abcdef',
    })
    assert response.status_code == 302
    api.change_password.assert_called_once_with('a1b2c3', 'old-pass', 'abcdef')


def test_password_change_rejected(panel_client, api):
    api.get_admin.return_value = {}
    api.change_password.side_effect = SurveyApiRejected('Current password is incorrect')
    response = panel_client.post(reverse('core:profile'), {
        'current_password': 'wrong', 'new_password': 'abcdef', 'confirm_password': 'abcdef',
    })
    assert response.status_code == 200
    assert b'Current password is incorrect' in response.content
