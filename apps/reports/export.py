"""
CSV export of daily recoveries.

Layout (``;``-delimited for spreadsheet locales that use ``,`` as the
decimal mark)::

    Date;Magasin;Attendu;Recouvré;Dépenses;Observations
    05/01/2024;Moroni Centre;1000;800;50;
    ...

    Total Attendu;1500
    Total Recouvré;1300
    Total Dépenses;50
    Total Écart;200
"""

import csv
import re
from io import StringIO
from typing import Optional, Sequence

from .aggregation import PeriodTotals, get_totals, record_amounts, record_store, to_date, record_field
from .exceptions import EmptyExportError

DELIMITER = ';'
HEADER = ['Date', 'Magasin', 'Attendu', 'Recouvré', 'Dépenses', 'Observations']
ALL_STORES_LABEL = 'Tous les magasins'

TOTAL_LABELS = (
    ('Total Attendu', 'expected'),
    ('Total Recouvré', 'recovered'),
    ('Total Dépenses', 'expenses'),
    ('Total Écart', 'gap'),
)

_FORMULA_PREFIXES = ('=', '+', '-', '@')
_UNSAFE_FILENAME_CHARS = re.compile(r'[^\w.-]+')


def _escape_text(value: Optional[str]) -> str:
    """Blank for None; text that spreadsheets would run as a formula gets a leading apostrophe."""
    if not value:
        return ''
    text = str(value)
    if text.startswith(_FORMULA_PREFIXES):
        return f"'{text}"
    return text


def format_csv_amount(value) -> str:
    """Plain numeric cell: ``Decimal('1500.00')`` -> ``"1500"``, ``Decimal('12.50')`` -> ``"12.5"``."""
    text = '{:f}'.format(value.normalize())
    return '0' if text in ('-0', '0') else text


def build_recovery_csv(records: Sequence, totals: Optional[PeriodTotals] = None) -> str:
    """
    Render records and their totals as CSV text.

    Args:
        records: Records in the order they should appear.
        totals: Precomputed totals for ``records``; computed when omitted.

    Raises:
        EmptyExportError: If there is nothing to export.
        InvalidAmountError: If a record holds a non-numeric amount.
    """
    records = list(records)
    if not records:
        raise EmptyExportError("No recoveries to export for this selection")

    if totals is None:
        totals = get_totals(records)

    output = StringIO()
    writer = csv.writer(output, delimiter=DELIMITER, lineterminator='\n')
    writer.writerow(HEADER)

    for record in records:
        expected, recovered, expenses, _ = record_amounts(record)
        store = record_store(record)
        writer.writerow([
            to_date(record_field(record, 'date')).strftime('%d/%m/%Y'),
            _escape_text(store[1] if store else ''),
            format_csv_amount(expected),
            format_csv_amount(recovered),
            format_csv_amount(expenses),
            _escape_text(record_field(record, 'observations')),
        ])

    writer.writerow([])
    for label, attribute in TOTAL_LABELS:
        writer.writerow([label, format_csv_amount(getattr(totals, attribute))])

    return output.getvalue()


def _filename_part(label: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub('_', label).strip('_')


def export_filename(store_label: str, period_label: str) -> str:
    """
    ``("Moroni Centre", "janvier 2024")`` -> ``"rapport_Moroni_Centre_janvier_2024.csv"``.

    Runs of whitespace and punctuation become a single ``_``; letters,
    accented ones included, digits, ``.`` and ``-`` are kept.
    """
    store_part = _filename_part(store_label)
    period_part = _filename_part(period_label)
    return f"rapport_{store_part}_{period_part}.csv"
