"""
Tests for redirect links: URL building and the link pages.
"""
from django.urls import reverse

from core.exceptions import SurveyApiUnavailable
from links.domain import RedirectLink, build_click_url, clean_parameters, encode_component


class TestClickUrl:

    def test_default_parameters(self):
        url = build_click_url('http://api.test/', [('pid', '1123'), ('uid', '12134')], 'complete')
        assert url == 'http://api.test/api/survey/click?pid=1123&uid=12134&status=complete'

    def test_status_is_always_last(self):
        url = build_click_url('http://api.test', [('status', 'x'), ('a', '1')], 'terminate')
        assert url.endswith('&a=1&status=terminate')

    def test_blank_pairs_are_dropped(self):
        assert clean_parameters([('a', '1'), ('', '2'), ('b', ' '), ('c', '3')]) == [('a', '1'), ('c', '3')]
        url = build_click_url('http://api.test', [('', 'x'), ('k', '')], 'quota_full')
        assert url == 'http://api.test/api/survey/click?status=quota_full'

    def test_encoding_matches_encode_uri_component(self):
        assert encode_component('a b&c/d') == 'a%20b%26c%2Fd'
        assert encode_component("it's(ok)!*") == "it's(ok)!*"
        assert encode_component('é') == '%C3%A9'


def test_link_without_flag_counts_as_active():
    assert RedirectLink.from_api({'_id': 'l1'}).is_active is True
    assert RedirectLink.from_api({'_id': 'l1', 'isActive': False}).is_active is False
    assert RedirectLink.from_api({'_id': 'l1'}).display_name == 'Unnamed Link'


def test_link_list(panel_client, api):
    api.list_links.return_value = [RedirectLink(id='l1', name='Vendor A', url='http://x', status='complete')]
    response = panel_client.get(reverse('links:list'))
    assert response.status_code == 200
    assert b'Vendor A' in response.content


def test_link_list_api_down(panel_client, api):
    api.list_links.side_effect = SurveyApiUnavailable()
    response = panel_client.get(reverse('links:list'))
    assert response.status_code == 200
    assert b'Failed to load links' in response.content


def test_link_create_get_shows_default_preview(panel_client, api):
    response = panel_client.get(reverse('links:create'))
    assert response.status_code == 200
    assert response.context['preview'] == 'http://api.test/api/survey/click?pid=1123&uid=12134&status=complete'
    api.create_link.assert_not_called()


def _link_post(action, name='', status='terminate', pairs=(('pid', '7'), ('uid', '8'))):
    data = {
        'name': name,
        'status': status,
        'action': action,
        'params-TOTAL_FORMS': str(len(pairs)),
        'params-INITIAL_FORMS': '0',
        'params-MIN_NUM_FORMS': '0',
        'params-MAX_NUM_FORMS': '1000',
    }
    for index, (key, value) in enumerate(pairs):
        data[f'params-{index}-key'] = key
        data[f'params-{index}-value'] = value
    return data


def test_link_preview_post_does_not_save(panel_client, api):
    response = panel_client.post(reverse('links:create'), _link_post('preview'))
    assert response.status_code == 200
    assert response.context['preview'] == 'http://api.test/api/survey/click?pid=7&uid=8&status=terminate'
    api.create_link.assert_not_called()


def test_link_save_requires_name(panel_client, api):
    response = panel_client.post(reverse('links:create'), _link_post('save'))
    assert response.status_code == 200
    assert b'Please give this link a name!' in response.content
    api.create_link.assert_not_called()


def test_link_save(panel_client, api):
    api.create_link.return_value = RedirectLink(id='l9', name='Vendor A')
    response = panel_client.post(reverse('links:create'), _link_post('save', name='  Vendor A '))
    assert response.status_code == 302
    assert response.url == reverse('links:list')
    api.create_link.assert_called_once_with(
        'Vendor A',
        'http://api.test/api/survey/click?pid=7&uid=8&status=terminate',
        'terminate',
        {'pid': '7', 'uid': '8'},
    )


def test_link_toggle_sends_opposite_state(panel_client, api):
    api.set_link_active.return_value = 'Status updated'
    panel_client.post(reverse('links:toggle', args=['l1']), {'is_active': 'true'})
    api.set_link_active.assert_called_with('l1', False)
    panel_client.post(reverse('links:toggle', args=['l1']), {'is_active': 'false'})
    api.set_link_active.assert_called_with('l1', True)


def test_link_toggle_missing_flag_reads_active(panel_client, api):
    panel_client.post(reverse('links:toggle', args=['l1']))
    api.set_link_active.assert_called_with('l1', False)


def test_link_delete(panel_client, api):
    api.delete_link.return_value = 'Deleted'
    response = panel_client.post(reverse('links:delete', args=['l1']))
    assert response.status_code == 302
    api.delete_link.assert_called_once_with('l1')


def test_link_delete_rejects_path_segments(panel_client, api):
    response = panel_client.post(reverse('links:delete', args=['..']))
    assert response.status_code == 302
    assert response.url == reverse('links:list')
    api.delete_link.assert_not_called()


def test_link_toggle_rejects_malformed_id(panel_client, api):
    api.list_links.return_value = []
    response = panel_client.post('/links/bad$id/toggle/', {'is_active': 'true'}, follow=True)
    api.set_link_active.assert_not_called()
    assert "Invalid link ID" in response.content.decode()
