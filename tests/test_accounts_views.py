from django.urls import reverse

from core.exceptions import SurveyApiRejected, SurveyApiUnavailable


def test_login_page_renders(client):
    response = client.get(reverse('accounts:login'))
    assert response.status_code == 200
    assert 'form' in response.context


def test_pages_require_login(client):
    response = client.get(reverse('surveys:list'))
    assert response.status_code == 302
    assert response.url.startswith(reverse('accounts:login'))


def test_login_stores_admin_and_token(client, api):
    api.login.return_value = ({'_id': 'a1', 'username': 'root'}, 'jwt-token')
    response = client.post(reverse('accounts:login'), {'username': 'root', 'password': 'secret'})
    assert response.status_code == 302
    assert response.url == reverse('core:dashboard')
    assert client.session['admin']['username'] == 'root'
    assert client.session['survey_api_token'] == 'jwt-token'
    api.login.assert_called_once_with('root', 'secret')


def test_login_follows_safe_next(client, api):
    api.login.return_value = ({'_id': 'a1'}, None)
    response = client.post(
        reverse('accounts:login') + '?next=/links/', {'username': 'root', 'password': 'secret'},
    )
    assert response.url == '/links/'


def test_login_ignores_external_next(client, api):
    api.login.return_value = ({'_id': 'a1'}, None)
    response = client.post(
        reverse('accounts:login') + '?next=https://evil.example/', {'username': 'root', 'password': 'secret'},
    )
    assert response.url == reverse('core:dashboard')


def test_login_rejected_shows_api_message(client, api):
    api.login.side_effect = SurveyApiRejected('Invalid username or password', status_code=401)
    response = client.post(reverse('accounts:login'), {'username': 'root', 'password': 'bad'})
    assert response.status_code == 200
    assert b'Invalid username or password' in response.content
    assert 'admin' not in client.session


def test_login_api_down(client, api):
    api.login.side_effect = SurveyApiUnavailable()
    response = client.post(reverse('accounts:login'), {'username': 'root', 'password': 'x'})
    assert b'Something went wrong. Try again.' in response.content


def test_login_redirects_when_already_signed_in(panel_client):
    response = panel_client.get(reverse('accounts:login'))
    assert response.status_code == 302


def test_logout_clears_session(panel_client):
    response = panel_client.post(reverse('accounts:logout'))
    assert response.status_code == 302
    assert response.url == reverse('accounts:login')
    assert 'admin' not in panel_client.session
