from django import template             # type:ignore
from django.conf import settings        # type:ignore

from core.constants import PERCENT_FIELDS, PERCENT_FIELDS_PREFIXES

register = template.Library()

_WORDS = {'usa': 'USA', 'rd': 'R&D', 'ebitda': 'EBITDA', 'ebit': 'EBIT'}


@register.filter
def field_label(name):
    """'tech1_share_usa' -> 'Tech 1 Share USA'"""
    words = []
    for part in str(name).split('_'):
        if part in _WORDS:
            words.append(_WORDS[part])
        elif part.startswith('tech') and part[4:].isdigit():
            words.append(f"Tech {part[4:]}")
        else:
            words.append(part.capitalize())
    return ' '.join(words)


def is_percent_field(name):
    return name in PERCENT_FIELDS or str(name).startswith(PERCENT_FIELDS_PREFIXES)


@register.filter
def money(value):
    if value is None or value == '':
        return 'N/A'
    amount = f"{value:,.0f}".replace(',', '\u202f')
    currency = getattr(settings, 'CESIM_CURRENCY', '')
    return f"{amount} {currency}" if currency else amount


@register.filter
def percent(value):
    if value is None or value == '':
        return 'N/A'
    return f"{value:.2f}%"


@register.filter
def metric_value(value, field_name):
    """Format a value the way its metric is usually read."""
    if value is None or value == '':
        return 'N/A'
    if is_percent_field(field_name):
        return percent(value)
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.2f}".replace(',', ' ')
    return f"{value:,.0f}".replace(',', ' ')
