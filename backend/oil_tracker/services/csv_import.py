from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence
import csv
import io
import logging

from oil_tracker.services.snapshots import Delivery

logger = logging.getLogger(__name__)

# Define allowed aliases (compared lower-cased)
DATE_ALIASES = ['date', 'delivery date', 'delivery_date']
GALLON_ALIASES = ['gallons', 'quantity', 'gal']
PRICE_ALIASES = ['price per gallon', 'pricepergallon', 'price_per_gallon', '$/gal', 'price', 'ppg']
NOTES_ALIASES = ['notes', 'comment', 'comments']
FILLED_ALIASES = ['filled', 'filled_to_capacity', 'filled to capacity']

DATE_FORMATS = [
    '%Y-%m-%d',
    '%m/%d/%Y',
    '%m/%d/%y',
    '%Y/%m/%d',
]

FALSE_VALUES = {'false', 'no', 'n', '0', 'partial'}

EXPORT_COLUMNS = ['Date', 'Gallons', 'Price Per Gallon', 'Total Cost', 'Notes', 'Filled']


@dataclass
class CsvImportResult:
    total_rows: int = 0
    imported_count: int = 0
    skipped_count: int = 0
    errors: List[str] = field(default_factory=list)
    imported_deliveries: List[Delivery] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def _find_column(fieldnames: Iterable[str], aliases: List[str]) -> Optional[str]:
    lookup = {name.strip().lower(): name for name in fieldnames if name}
    return next((lookup[a] for a in aliases if a in lookup), None)


def parse_date(value: str) -> Optional[date]:
    value = (value or '').strip().strip('"')
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def _parse_number(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    cleaned = value.strip().replace('$', '').replace(',', '')
    try:
        return float(cleaned)
    except ValueError:
        return None


def import_deliveries_csv(file_content: str, existing_dates: Iterable[date] = ()) -> CsvImportResult:
    """
    Parse delivery rows from CSV text.

    Rows dated on a day that already has a delivery are skipped, including
    duplicates within the same file. Nothing is persisted here.
    """
    result = CsvImportResult()
    seen_dates = set(existing_dates)

    reader = csv.DictReader(io.StringIO(file_content))
    fieldnames = reader.fieldnames or []

    date_key = _find_column(fieldnames, DATE_ALIASES)
    gallons_key = _find_column(fieldnames, GALLON_ALIASES)
    price_key = _find_column(fieldnames, PRICE_ALIASES)
    notes_key = _find_column(fieldnames, NOTES_ALIASES)
    filled_key = _find_column(fieldnames, FILLED_ALIASES)

    if not date_key or not gallons_key or not price_key:
        result.errors.append("Missing required columns: Date, Gallons and Price Per Gallon")
        return result

    for row_number, row in enumerate(reader, start=1):
        result.total_rows += 1

        delivery_date = parse_date(row.get(date_key))
        gallons = _parse_number(row.get(gallons_key))
        price = _parse_number(row.get(price_key))

        if gallons is None or gallons <= 0:
            result.errors.append(f"Row {row_number}: Gallons must be greater than 0 (got {row.get(gallons_key)})")
            continue

        if price is None or price <= 0:
            result.errors.append(f"Row {row_number}: Price per gallon must be greater than 0 (got {row.get(price_key)})")
            continue

        if delivery_date is None:
            result.errors.append(f"Row {row_number}: Invalid or missing date")
            continue

        if delivery_date in seen_dates:
            result.skipped_count += 1
            continue

        filled = True
        if filled_key and (row.get(filled_key) or '').strip().lower() in FALSE_VALUES:
            filled = False

        result.imported_deliveries.append(Delivery(
            id=None,
            date=delivery_date,
            gallons=gallons,
            price_per_gallon=price,
            notes=(row.get(notes_key) or '').strip() if notes_key else '',
            filled_to_capacity=filled,
        ))
        seen_dates.add(delivery_date)
        result.imported_count += 1

    logger.info(
        f"CSV import: {result.imported_count} imported, {result.skipped_count} skipped, "
        f"{len(result.errors)} errors out of {result.total_rows} rows"
    )
    return result


def export_deliveries_csv(deliveries: Sequence[Delivery]) -> str:
    """CSV text of all deliveries, oldest first, readable by import_deliveries_csv."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(EXPORT_COLUMNS)
    for d in sorted(deliveries, key=lambda d: d.date):
        writer.writerow([
            d.date.isoformat(),
            f"{d.gallons:.2f}",
            f"{d.price_per_gallon:.4f}",
            f"{d.total_cost:.2f}",
            d.notes,
            'yes' if d.filled_to_capacity else 'no',
        ])
    return output.getvalue()
