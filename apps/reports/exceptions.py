"""
Domain exceptions for reports app.

This module defines domain-specific exceptions raised while turning
recovery records into statistics, archives and CSV exports. They are
separate from HTTP concerns; views translate them into responses.

Exception Hierarchy:
    ReportsServiceError (base)
    ├── InvalidAmountError
    ├── InvalidPeriodError
    └── EmptyExportError

Usage:
    from apps.reports.exceptions import InvalidAmountError

    try:
        totals = get_totals(records)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=422)
"""


class ReportsServiceError(Exception):
    """
    Base exception for all reports service errors.

    Catch this in views to handle any reporting failure at once.
    """

    pass


class InvalidAmountError(ReportsServiceError):
    """
    Raised when a record carries an amount that is not a finite number.

    Missing amounts are tolerated (they count as zero); values such as
    ``"abc"``, ``NaN`` or ``Infinity`` are corruption and must never be
    folded into a displayed total.

    Attributes:
        record_id: Identifier of the offending record, if known.
        field: Name of the offending field, if known.
        value: The raw value that failed conversion.
    """

    def __init__(self, message, *, record_id=None, field=None, value=None):
        super().__init__(message)
        self.record_id = record_id
        self.field = field
        self.value = value


class InvalidPeriodError(ReportsServiceError):
    """
    Raised when a month period is not in YYYY-MM format.

    Example:
        raise InvalidPeriodError("Invalid period format. Use YYYY-MM")
    """

    pass


class EmptyExportError(ReportsServiceError):
    """
    Raised when a CSV export is requested for an empty record set.

    An empty export is a no-op, not an empty file.
    """

    pass
