"""
Serializers for reports app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation

Input Serializers:
    StoreFilterSerializer - Optional store filter shared by every report
    DashboardQuerySerializer - Store filter plus reference date
    PeriodQuerySerializer - Month period or date range
    ExportQuerySerializer - Period report with a mandatory month
    TimeseriesQuerySerializer - Chart window size
"""

from rest_framework import serializers

from .aggregation import GapTrend, month_bounds
from .exceptions import InvalidPeriodError


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class StoreFilterSerializer(serializers.Serializer):
    """Optional ``store_id`` query parameter."""

    store_id = serializers.UUIDField(required=False, allow_null=True)


class DashboardQuerySerializer(StoreFilterSerializer):
    """
    Validate dashboard query parameters.

    Query Parameters:
        store_id (UUID): Restrict totals to one store
        date (date): Reference day for "today", defaults to the local date
    """

    date = serializers.DateField(required=False)


class PeriodQuerySerializer(StoreFilterSerializer):
    """
    Validate period and date range query parameters.

    Query Parameters:
        period (str): Month period in YYYY-MM format (e.g., '2024-01')
        start_date (date): Start of date range
        end_date (date): End of date range

    Note:
        If 'period' is provided, it takes precedence and is converted
        to start_date and end_date for the full month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Parse period into date range if provided."""
        period = attrs.get('period')

        if period:
            try:
                attrs['start_date'], attrs['end_date'] = month_bounds(period)
            except InvalidPeriodError:
                raise serializers.ValidationError({
                    'period': 'Invalid period format. Use YYYY-MM'
                })

        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


class ExportQuerySerializer(PeriodQuerySerializer):
    """CSV export: the month is mandatory, it names the file."""

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=True,
        help_text='Month period in YYYY-MM format'
    )


class TimeseriesQuerySerializer(StoreFilterSerializer):
    """
    Validate query parameters for the chart series.

    Query Parameters:
        store_id (UUID): Restrict to one store
        days (int): Number of recorded days to return (1-366)
    """

    days = serializers.IntegerField(
        min_value=1,
        max_value=366,
        required=False,
        default=14,
        help_text='Number of recorded days (1-366)'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class AmountDisplaySerializer(serializers.Serializer):
    expected = serializers.CharField()
    recovered = serializers.CharField()
    expenses = serializers.CharField()
    gap = serializers.CharField()


class PeriodTotalsSerializer(serializers.Serializer):
    """Totals of a record set; gap > 0 is a deficit."""
    expected = serializers.DecimalField(max_digits=16, decimal_places=2)
    recovered = serializers.DecimalField(max_digits=16, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=16, decimal_places=2)
    gap = serializers.DecimalField(max_digits=16, decimal_places=2)
    trend = serializers.ChoiceField(choices=GapTrend.choices)
    display = AmountDisplaySerializer()


class StoreStatsSerializer(serializers.Serializer):
    store_id = serializers.UUIDField()
    store_name = serializers.CharField()
    store_code = serializers.CharField(allow_null=True)
    today = PeriodTotalsSerializer()
    month = PeriodTotalsSerializer()


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for dashboard statistics."""
    date = serializers.DateField()
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    store_id = serializers.UUIDField(allow_null=True)
    today = PeriodTotalsSerializer()
    month = PeriodTotalsSerializer()
    store_stats = StoreStatsSerializer(many=True)


class StoreBucketSerializer(serializers.Serializer):
    store_name = serializers.CharField()
    store_code = serializers.CharField(allow_null=True)
    totals = PeriodTotalsSerializer()
    record_count = serializers.IntegerField()
    recovery_rate = serializers.DecimalField(max_digits=7, decimal_places=1)


class MonthlyBucketSerializer(serializers.Serializer):
    """One month of the archive; ``stores`` is keyed by store name."""
    month = serializers.CharField()
    label = serializers.CharField()
    totals = PeriodTotalsSerializer()
    record_count = serializers.IntegerField()
    recovery_rate = serializers.DecimalField(max_digits=7, decimal_places=1)
    stores = serializers.DictField(child=StoreBucketSerializer())


class ReportRecordSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    store_id = serializers.UUIDField(allow_null=True)
    store_name = serializers.CharField(allow_null=True)
    store_code = serializers.CharField(allow_null=True)
    date = serializers.DateField()
    expected_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    recovered_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    gap = serializers.DecimalField(max_digits=14, decimal_places=2)
    observations = serializers.CharField(allow_blank=True)


class PeriodReportSerializer(serializers.Serializer):
    """Response serializer for a period report."""
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    store_id = serializers.UUIDField(allow_null=True)
    count = serializers.IntegerField()
    totals = PeriodTotalsSerializer()
    records = ReportRecordSerializer(many=True)


class TimeseriesPointSerializer(serializers.Serializer):
    """Nested serializer for a single chart point."""
    date = serializers.DateField()
    expected = serializers.DecimalField(max_digits=16, decimal_places=2)
    recovered = serializers.DecimalField(max_digits=16, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=16, decimal_places=2)
    gap = serializers.DecimalField(max_digits=16, decimal_places=2)


class TimeseriesResponseSerializer(serializers.Serializer):
    """Response serializer for the chart series."""
    days = serializers.IntegerField()
    data = TimeseriesPointSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
