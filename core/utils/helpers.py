"""
Common helpers shared by the views.
Parsing of API values, sorting state, row numbering and display helpers.
"""
import re
from datetime import datetime, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.utils.http import urlencode

# Badge colours per outcome status
STATUS_COLORS = {
    'terminate': '#dc2626',
    'complete': '#059669',
    'quota_full': '#f59e0b',
}
DEFAULT_STATUS_COLOR = '#6b7280'


def parse_api_datetime(value):
    """Parse an ISO timestamp sent by the API. Returns None when absent or malformed."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        parsed = parse_datetime(str(value))
    except ValueError:
        return None
    if parsed is not None and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def to_int(value, default=0):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def format_field_name(field):
    """
    Turn an API key into a readable label.
    'ipAddress' -> 'Ip Address', 'quota_full' -> 'Quota full'.
    """
    if not field:
        return ''
    spaced = re.sub(r'([A-Z])', r' \1', str(field))
    spaced = spaced[:1].upper() + spaced[1:]
    return spaced.replace('_', ' ')


def status_color(status):
    return STATUS_COLORS.get((status or '').lower(), DEFAULT_STATUS_COLOR)


def next_sort(current_field, current_order, field):
    """
    Sorting state after clicking a column header.
    Same column flips the order, another column starts ascending.
    """
    if current_field == field:
        return field, 'asc' if current_order == 'desc' else 'desc'
    return field, 'asc'


def row_offset(page, limit):
    """Serial number of the first row on a page, minus one."""
    return (max(page, 1) - 1) * limit


def format_timestamp(value, fmt='%Y-%m-%d %H:%M:%S'):
    if not value:
        return ''
    return timezone.localtime(value).strftime(fmt) if timezone.is_aware(value) else value.strftime(fmt)


def querystring(**params):
    """URL query for the given params, blank values dropped."""
    return urlencode({k: v for k, v in params.items() if v not in (None, '')})


def sort_querystrings(fields, current_field, current_order, **keep):
    """Query string per sortable column. Any sort change goes back to page 1."""
    links = {}
    for field in fields:
        sort_by, sort_order = next_sort(current_field, current_order, field)
        links[field] = querystring(sortBy=sort_by, sortOrder=sort_order, **keep)
    return links
