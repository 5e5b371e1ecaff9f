from django import template

from core.utils.helpers import format_field_name, format_timestamp, status_color

register = template.Library()


@register.filter
def field_label(value):
    return format_field_name(value)


@register.filter
def badge_color(status):
    return status_color(status)


@register.filter
def timestamp(value, fmt='%Y-%m-%d %H:%M'):
    return format_timestamp(value, fmt) or '-'


@register.simple_tag
def sort_arrow(field, sort_by, sort_order):
    if field != sort_by:
        return '↕'
    return '↑' if sort_order == 'asc' else '↓'


@register.filter
def get_item(mapping, key):
    return mapping.get(key, '') if mapping else ''
