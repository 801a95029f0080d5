"""
Display formatting for amounts and periods.

Amounts are shown in the fr-FR style: no decimals, half-up rounding,
digits grouped by three with a narrow no-break space, and the currency
code after a no-break space (``"1 234 KMF"``).
"""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.utils import numberformat, translation
from django.utils.dates import MONTHS

THOUSANDS_SEPARATOR = '\u202f'
CURRENCY_SEPARATOR = '\u00a0'

# Month names and period labels are always French
REPORT_LANGUAGE = 'fr'


def currency_code() -> str:
    return getattr(settings, 'CURRENCY_CODE', 'KMF')


def _round_to_unit(value) -> Decimal:
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    amount = amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    # Avoid rendering "-0"
    return amount if amount else Decimal('0')


def format_number(value) -> str:
    """Group digits fr-FR style, without decimals: ``1234.5`` -> ``"1 235"``."""
    return numberformat.format(
        _round_to_unit(value),
        decimal_sep=',',
        decimal_pos=0,
        grouping=3,
        thousand_sep=THOUSANDS_SEPARATOR,
        force_grouping=True,
    )


def format_currency(value) -> str:
    """``1234`` -> ``"1 234 KMF"``; negatives keep a leading minus sign."""
    return f"{format_number(value)}{CURRENCY_SEPARATOR}{currency_code()}"


def format_signed_gap(gap) -> str:
    """
    Gap as shown in store comparisons.

    A deficit (positive gap) is a loss and gets ``-``, a surplus gets ``+``,
    a balanced day gets no sign.
    """
    amount = _round_to_unit(gap)
    if amount > 0:
        return f"-{format_currency(amount)}"
    if amount < 0:
        return f"+{format_currency(-amount)}"
    return format_currency(amount)


def format_month_label(year: int, month: int) -> str:
    """``(2024, 1)`` -> ``"janvier 2024"``."""
    with translation.override(REPORT_LANGUAGE):
        return f"{MONTHS[month]} {year}"


def format_month_key(month_key: str) -> str:
    """``"2024-01"`` -> ``"janvier 2024"``."""
    year, month = month_key.split('-')
    return format_month_label(int(year), int(month))
