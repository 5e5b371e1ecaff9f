from datetime import datetime, timezone

from core.utils.helpers import (
    format_field_name,
    format_timestamp,
    next_sort,
    parse_api_datetime,
    querystring,
    row_offset,
    sort_querystrings,
    status_color,
    to_int,
)


def test_parse_api_datetime():
    parsed = parse_api_datetime('2025-03-04T05:06:07.000Z')
    assert parsed == datetime(2025, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    assert parse_api_datetime('2025-03-04T05:06:07').tzinfo is not None
    assert parse_api_datetime('') is None
    assert parse_api_datetime('not a date') is None


def test_to_int():
    assert to_int('12') == 12
    assert to_int(None) == 0
    assert to_int('x', 5) == 5


def test_format_field_name():
    assert format_field_name('ipAddress') == 'Ip Address'
    assert format_field_name('userId') == 'User Id'
    assert format_field_name('status') == 'Status'
    assert format_field_name('quota_full') == 'Quota full'
    assert format_field_name('') == ''


def test_status_color():
    assert status_color('Complete') == '#059669'
    assert status_color('terminate') == '#dc2626'
    assert status_color('quota_full') == '#f59e0b'
    assert status_color('something') == '#6b7280'
    assert status_color(None) == '#6b7280'


def test_next_sort():
    assert next_sort('createdAt', 'desc', 'createdAt') == ('createdAt', 'asc')
    assert next_sort('createdAt', 'asc', 'createdAt') == ('createdAt', 'desc')
    assert next_sort('createdAt', 'desc', 'surveyName') == ('surveyName', 'asc')


def test_row_offset():
    assert row_offset(1, 100) == 0
    assert row_offset(3, 100) == 200
    assert row_offset(0, 100) == 0


def test_querystring_drops_blanks():
    assert querystring(search='', sortBy='_id', page=None) == 'sortBy=_id'


def test_sort_querystrings_keep_search():
    links = sort_querystrings(('_id', 'surveyName'), '_id', 'asc', search='brand')
    assert links['_id'] == 'sortBy=_id&sortOrder=desc&search=brand'
    assert links['surveyName'] == 'sortBy=surveyName&sortOrder=asc&search=brand'


def test_format_timestamp_naive():
    assert format_timestamp(datetime(2025, 1, 2, 3, 4, 5)) == '2025-01-02 03:04:05'
    assert format_timestamp(None) == ''
