"""
Pure aggregation over daily recovery records.

Every function here takes an in-memory sequence of records and returns a
value; nothing touches the database. Records may be ``DailyRecovery``
instances or mappings such as ``QuerySet.values()`` rows or serializer
output. Mapping rows carry the store join as ``store_name``/``store_code``
(or ``store__name``/``store__code``).

Data-integrity rules:
    * A missing amount (``None`` or ``""``) counts as zero and is logged.
    * A non-numeric, NaN or infinite amount raises ``InvalidAmountError``.
    * A record without a store join is skipped by ``get_store_stats`` but
      still counted by ``get_totals``; the archive files it under
      ``UNKNOWN_STORE_NAME``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, List, Optional

from django.db import models

from .exceptions import InvalidAmountError, InvalidPeriodError
from .formatting import format_currency, format_month_key, format_signed_gap

logger = logging.getLogger(__name__)

ZERO = Decimal('0')
UNKNOWN_STORE_NAME = 'Inconnu'
UNKNOWN_STORE_CODE = '???'

AMOUNT_FIELDS = ('expected_amount', 'recovered_amount', 'expenses')


class GapTrend(models.TextChoices):
    DEFICIT = 'deficit', 'Déficit'
    SURPLUS = 'surplus', 'Excédent'
    BALANCED = 'balanced', 'Équilibré'


# =============================================================================
# Record access
# =============================================================================

def record_field(record, name, default=None):
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _record_id(record):
    return record_field(record, 'id')


def to_amount(value, *, record_id=None, field_name=None) -> Decimal:
    """
    Convert a raw amount to ``Decimal``.

    Accepts Decimal, int, finite float and numeric strings. ``None`` and
    blank strings are treated as a missing value and become zero.

    Raises:
        InvalidAmountError: For anything else, including NaN and infinity.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        logger.warning(
            "Missing %s on recovery %s, counted as 0", field_name or 'amount', record_id
        )
        return ZERO

    if isinstance(value, bool):
        amount = None
    elif isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            amount = None
    else:
        amount = None

    if amount is None or not amount.is_finite():
        raise InvalidAmountError(
            f"Invalid {field_name or 'amount'} on recovery {record_id}: {value!r}",
            record_id=record_id,
            field=field_name,
            value=value,
        )
    return amount


def to_date(value) -> date:
    """Normalize a record date (date, datetime or ISO string) to ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def record_amounts(record):
    """Return ``(expected, recovered, expenses, gap)`` for one record."""
    record_id = _record_id(record)
    expected, recovered, expenses = (
        to_amount(record_field(record, name), record_id=record_id, field_name=name)
        for name in AMOUNT_FIELDS
    )
    raw_gap = record_field(record, 'gap')
    if raw_gap is None or raw_gap == '':
        gap = expected - recovered
    else:
        gap = to_amount(raw_gap, record_id=record_id, field_name='gap')
    return expected, recovered, expenses, gap


def record_store(record):
    """
    Return ``(store_id, name, code)`` for the record's store join, or None.
    """
    if isinstance(record, Mapping):
        name = record.get('store_name', record.get('store__name'))
        if name is None:
            return None
        code = record.get('store_code', record.get('store__code'))
        store_id = record.get('store_id', record.get('store'))
        return store_id, name, code

    store = getattr(record, 'store', None)
    if store is None:
        return None
    return store.id, store.name, store.code


# =============================================================================
# Aggregate types
# =============================================================================

def classify_gap(gap) -> GapTrend:
    """Positive gap is a deficit, negative a surplus, zero balanced."""
    amount = to_amount(gap, field_name='gap')
    if amount > 0:
        return GapTrend.DEFICIT
    if amount < 0:
        return GapTrend.SURPLUS
    return GapTrend.BALANCED


def recovery_rate(expected, recovered) -> Decimal:
    """Recovered share of expected in percent, one decimal; 0 when nothing was expected."""
    expected = to_amount(expected, field_name='expected')
    recovered = to_amount(recovered, field_name='recovered')
    if expected <= 0:
        return ZERO
    rate = recovered / expected * 100
    return rate.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)


@dataclass
class PeriodTotals:
    """Sums of the four monetary fields over a record set."""

    expected: Decimal = ZERO
    recovered: Decimal = ZERO
    expenses: Decimal = ZERO
    gap: Decimal = ZERO

    def add(self, expected, recovered, expenses, gap):
        self.expected += expected
        self.recovered += recovered
        self.expenses += expenses
        self.gap += gap

    @property
    def trend(self) -> GapTrend:
        return classify_gap(self.gap)

    def to_dict(self) -> dict:
        return {
            'expected': self.expected,
            'recovered': self.recovered,
            'expenses': self.expenses,
            'gap': self.gap,
            'trend': self.trend.value,
            'display': {
                'expected': format_currency(self.expected),
                'recovered': format_currency(self.recovered),
                'expenses': format_currency(self.expenses),
                'gap': format_signed_gap(self.gap),
            },
        }


@dataclass
class StoreStats:
    """Today and month-to-date totals of one store."""

    store_id: object
    store_name: str
    store_code: Optional[str]
    today: PeriodTotals = field(default_factory=PeriodTotals)
    month: PeriodTotals = field(default_factory=PeriodTotals)

    def to_dict(self) -> dict:
        return {
            'store_id': self.store_id,
            'store_name': self.store_name,
            'store_code': self.store_code,
            'today': self.today.to_dict(),
            'month': self.month.to_dict(),
        }


@dataclass
class StoreBucket:
    """One store's share of a monthly bucket."""

    store_name: str
    store_code: Optional[str]
    totals: PeriodTotals = field(default_factory=PeriodTotals)
    record_count: int = 0

    @property
    def recovery_rate(self) -> Decimal:
        return recovery_rate(self.totals.expected, self.totals.recovered)

    def to_dict(self) -> dict:
        return {
            'store_name': self.store_name,
            'store_code': self.store_code,
            'totals': self.totals.to_dict(),
            'record_count': self.record_count,
            'recovery_rate': self.recovery_rate,
        }


@dataclass
class MonthlyBucket:
    """All records of one calendar month, with a per-store breakdown."""

    month: str
    totals: PeriodTotals = field(default_factory=PeriodTotals)
    record_count: int = 0
    stores: Dict[str, StoreBucket] = field(default_factory=dict)

    @property
    def recovery_rate(self) -> Decimal:
        return recovery_rate(self.totals.expected, self.totals.recovered)

    @property
    def label(self) -> str:
        return format_month_key(self.month)

    def to_dict(self) -> dict:
        return {
            'month': self.month,
            'label': self.label,
            'totals': self.totals.to_dict(),
            'record_count': self.record_count,
            'recovery_rate': self.recovery_rate,
            'stores': {name: bucket.to_dict() for name, bucket in self.stores.items()},
        }


# =============================================================================
# Aggregators
# =============================================================================

def get_totals(records: Iterable) -> PeriodTotals:
    """
    Sum expected, recovered, expenses and gap independently.

    Records without a store join are counted. Empty input gives zeros.
    """
    totals = PeriodTotals()
    for record in records:
        totals.add(*record_amounts(record))
    return totals


def get_store_stats(records: Iterable, today) -> List[StoreStats]:
    """
    Group a month-to-date record set by store in a single pass.

    Every record feeds its store's month totals; records dated exactly
    ``today`` also feed the today totals. Only stores with at least one
    record appear, in first-seen order. Records without a store join are
    skipped.
    """
    today = to_date(today)
    stats: Dict[object, StoreStats] = {}

    for record in records:
        store = record_store(record)
        if store is None:
            logger.warning("Skipping recovery %s: no store join", _record_id(record))
            continue

        store_id, name, code = store
        entry = stats.get(store_id)
        if entry is None:
            entry = stats[store_id] = StoreStats(store_id=store_id, store_name=name, store_code=code)

        amounts = record_amounts(record)
        entry.month.add(*amounts)
        if to_date(record_field(record, 'date')) == today:
            entry.today.add(*amounts)

    return list(stats.values())


def get_monthly_archive(records: Iterable) -> List[MonthlyBucket]:
    """
    Bucket records by the calendar month of their own date.

    Buckets come back most recent month first. Within a bucket stores are
    keyed by name; a missing join falls under ``UNKNOWN_STORE_NAME``.
    """
    buckets: Dict[str, MonthlyBucket] = {}

    for record in records:
        record_date = to_date(record_field(record, 'date'))
        month_key = f"{record_date.year:04d}-{record_date.month:02d}"
        bucket = buckets.get(month_key)
        if bucket is None:
            bucket = buckets[month_key] = MonthlyBucket(month=month_key)

        amounts = record_amounts(record)
        bucket.totals.add(*amounts)
        bucket.record_count += 1

        store = record_store(record)
        if store is None:
            logger.warning("Recovery %s has no store join, archived as unknown", _record_id(record))
            name, code = UNKNOWN_STORE_NAME, UNKNOWN_STORE_CODE
        else:
            _, name, code = store

        store_bucket = bucket.stores.get(name)
        if store_bucket is None:
            store_bucket = bucket.stores[name] = StoreBucket(store_name=name, store_code=code)
        store_bucket.totals.add(*amounts)
        store_bucket.record_count += 1

    return sorted(buckets.values(), key=lambda bucket: bucket.month, reverse=True)


def get_daily_series(records: Iterable, days: int = 14) -> List[dict]:
    """
    Per-day totals for charts: the last ``days`` dates that have records,
    oldest first.
    """
    by_date: Dict[date, PeriodTotals] = {}
    for record in records:
        record_date = to_date(record_field(record, 'date'))
        by_date.setdefault(record_date, PeriodTotals()).add(*record_amounts(record))

    recent = sorted(by_date)[-days:] if days > 0 else []
    return [
        {
            'date': day,
            'expected': by_date[day].expected,
            'recovered': by_date[day].recovered,
            'expenses': by_date[day].expenses,
            'gap': by_date[day].gap,
        }
        for day in recent
    ]


def month_bounds(period: str):
    """
    First and last day of a ``YYYY-MM`` period.

    Raises:
        InvalidPeriodError: If ``period`` is not a valid month.
    """
    try:
        year, month = (int(part) for part in period.split('-'))
        start = date(year, month, 1)
    except (ValueError, AttributeError, TypeError):
        raise InvalidPeriodError(f"Invalid period {period!r}. Use YYYY-MM")
    end = date(year, 12, 31) if month == 12 else date(year, month + 1, 1) - timedelta(days=1)
    return start, end
