# jobs/templatetags/job_filters.py
from datetime import date, datetime

from django import template
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

register = template.Library()


def _to_datetime(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            parsed = datetime(day.year, day.month, day.day) if day else None
    except (TypeError, ValueError):
        return None
    return parsed


def _local(value):
    if timezone.is_aware(value):
        return timezone.localtime(value)
    return value


@register.filter
def format_date(value):
    """dd/mm/yyyy; anything unparseable is shown as given."""
    if not value:
        return ''
    parsed = _to_datetime(value)
    if parsed is None:
        return value
    return _local(parsed).strftime('%d/%m/%Y')


@register.filter
def format_datetime(value):
    if not value:
        return ''
    parsed = _to_datetime(value)
    if parsed is None:
        return value
    return _local(parsed).strftime('%d/%m/%Y %H:%M:%S')


@register.filter
def format_band(band):
    if not band:
        return ''
    return f"{band} Level"
