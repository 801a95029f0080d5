"""
Report Queries
==============

Fetches recovery records scoped to the requesting user and runs them
through the pure aggregators in ``apps.reports.aggregation``.

Classes:
    ReportQueries: Static methods behind the reports endpoints.

Example:
    Dashboard figures for one store::

        from apps.reports.queries import ReportQueries

        stats = ReportQueries.dashboard_stats(user=request.user, store_id=store.id)
        print(stats['today']['recovered'], stats['month']['recovered'])

Note:
    This module is read-only. Aggregates are memoised in the stats cache
    per (kind, user, filters) and dropped whenever a recovery changes.
"""

from datetime import date
from typing import Optional

from django.utils import timezone

from apps.recoveries.services import list_recoveries

from .aggregation import (
    get_totals,
    get_store_stats,
    get_monthly_archive,
    get_daily_series,
    month_bounds,
    record_amounts,
    record_store,
)
from .cache import stats_cache


def month_window(day: date):
    """First and last day of the month containing ``day``."""
    return month_bounds(f"{day.year:04d}-{day.month:02d}")


def record_row(record) -> dict:
    """Plain dict for one recovery, store join flattened."""
    expected, recovered, expenses, gap = record_amounts(record)
    store = record_store(record)
    return {
        'id': record.id,
        'store_id': record.store_id,
        'store_name': store[1] if store else None,
        'store_code': store[2] if store else None,
        'date': record.date,
        'expected_amount': expected,
        'recovered_amount': recovered,
        'expenses': expenses,
        'gap': gap,
        'observations': record.observations,
    }


class ReportQueries:
    """
    Statistics for the dashboard, the monthly archive, period reports
    and charts.

    Methods:
        dashboard_stats: Today and month-to-date totals plus per-store stats.
        monthly_archive: Month buckets, most recent first.
        period_records: Rows and PeriodTotals of a date range (CSV export).
        period_report: Records and totals of a date range.
        recovery_timeseries: Per-day chart series.

    Note:
        All methods return plain dictionaries or lists, ready for
        ``Response``. Owners only ever see their assigned stores; the
        caller checks an explicit ``store_id`` before calling.
    """

    @staticmethod
    def dashboard_stats(user, store_id=None, today: Optional[date] = None):
        """
        Today and month-to-date figures.

        Totals honour ``store_id``; the per-store comparison always covers
        every store visible to the user, so a selected store can be
        compared with the others.

        Args:
            user: Requesting user, defines the visible stores.
            store_id (UUID, optional): Restrict the totals to one store.
            today (date, optional): Reference day, defaults to the local date.

        Returns:
            dict: ``date``, ``period_start``, ``period_end``, ``today`` and
            ``month`` totals, and ``store_stats``.
        """
        today = today or timezone.localdate()
        month_start, month_end = month_window(today)

        def compute():
            month_records = list(
                list_recoveries(user=user, start_date=month_start, end_date=month_end)
            )
            selected = [
                record for record in month_records
                if not store_id or record.store_id == store_id
            ]
            today_records = [record for record in selected if record.date == today]

            return {
                'date': today,
                'period_start': month_start,
                'period_end': month_end,
                'store_id': store_id,
                'today': get_totals(today_records).to_dict(),
                'month': get_totals(selected).to_dict(),
                'store_stats': [
                    stats.to_dict() for stats in get_store_stats(month_records, today)
                ],
            }

        return stats_cache.get_or_compute(
            'dashboard', compute, user=user.id, store=store_id, today=today
        )

    @staticmethod
    def monthly_archive(user, store_id=None):
        """
        Every visible record bucketed by calendar month.

        Returns:
            list[dict]: Buckets sorted by ``month`` descending, each with
            totals, record count, recovery rate and a per-store breakdown.
        """
        def compute():
            records = list_recoveries(user=user, store_id=store_id)
            return [bucket.to_dict() for bucket in get_monthly_archive(records)]

        return stats_cache.get_or_compute('archive', compute, user=user.id, store=store_id)

    @staticmethod
    def period_records(user, store_id=None, start_date=None, end_date=None):
        """
        Rows of a date range in chronological order, with their ``PeriodTotals``.

        Not cached: the record list is the payload.

        Returns:
            tuple: (list of row dicts, PeriodTotals)
        """
        records = list(
            list_recoveries(
                user=user,
                store_id=store_id,
                start_date=start_date,
                end_date=end_date,
            ).order_by('date', 'created_at')
        )
        return [record_row(record) for record in records], get_totals(records)

    @staticmethod
    def period_report(user, store_id=None, start_date=None, end_date=None):
        """Records of a date range in chronological order, with their totals."""
        rows, totals = ReportQueries.period_records(
            user=user,
            store_id=store_id,
            start_date=start_date,
            end_date=end_date,
        )
        return {
            'start_date': start_date,
            'end_date': end_date,
            'store_id': store_id,
            'count': len(rows),
            'totals': totals.to_dict(),
            'records': rows,
        }

    @staticmethod
    def recovery_timeseries(user, store_id=None, days: int = 14):
        """
        Chart series over the last ``days`` dates that have records,
        oldest first.
        """
        def compute():
            queryset = list_recoveries(user=user, store_id=store_id)
            recent_dates = list(
                queryset.order_by('-date').values_list('date', flat=True).distinct()[:days]
            )
            if not recent_dates:
                return []
            records = queryset.filter(date__gte=min(recent_dates))
            return get_daily_series(records, days=days)

        return stats_cache.get_or_compute(
            'timeseries', compute, user=user.id, store=store_id, days=days
        )
