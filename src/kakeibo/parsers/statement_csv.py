"""Parser for card statement CSV exports.

The export starts with a few summary lines, then a header row containing
the marker ``ご利用先など`` ("where used, etc."), then one quoted row per
usage. Columns are positional:

    [1] category label   [2] usage date   [3] merchant
    [4] amount (falls back to [8] when empty)

Trailing summary rows do not start with a quote and are ignored.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from kakeibo.parsers.tokenizer import CsvTokenizeError, tokenize_csv_line
from kakeibo.schemas.internal import ParsedRow

logger = logging.getLogger(__name__)

HEADER_MARKER = "ご利用先など"

CATEGORY_COLUMN = 1
DATE_COLUMN = 2
MERCHANT_COLUMN = 3
AMOUNT_COLUMN = 4
AMOUNT_FALLBACK_COLUMN = 8
MIN_COLUMNS = 5

DATE_FORMATS = ("%Y/%m/%d", "%Y-%m-%d", "%Y.%m.%d", "%Y%m%d")
FILENAME_YEAR_MONTH = re.compile(r"(20\d{2})(\d{2})")

# Encodings tried in order when decoding an uploaded file.
ENCODINGS = ("utf-8-sig", "cp932")


def decode_statement_bytes(data: bytes) -> str:
    """Decode an uploaded statement file.

    Raises:
        UnicodeDecodeError: If none of the supported encodings fit.
    """
    last_error: UnicodeDecodeError | None = None
    for encoding in ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            last_error = e
    raise last_error


def detect_year_month(filename: str | None) -> tuple[int, int] | None:
    """Find a ``YYYYMM`` statement month in a filename such as ``202501meisai.csv``."""
    if not filename:
        return None
    match = FILENAME_YEAR_MONTH.search(filename)
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return year, month


def _parse_date(value: str) -> date | None:
    value = value.strip().strip('"')
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def _parse_amount(value: str) -> Decimal | None:
    cleaned = value.replace(",", "").strip()
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def _column(cols: list[str], index: int) -> str:
    return cols[index].strip() if index < len(cols) else ""


def _row_from_columns(cols: list[str]) -> ParsedRow | None:
    if len(cols) < MIN_COLUMNS:
        return None

    merchant = _column(cols, MERCHANT_COLUMN)
    amount_str = _column(cols, AMOUNT_COLUMN) or _column(cols, AMOUNT_FALLBACK_COLUMN)
    usage_date = _parse_date(_column(cols, DATE_COLUMN))
    amount = _parse_amount(amount_str)

    # Zero-amount rows are dropped.
    if usage_date is None or not merchant or amount is None or amount == 0:
        return None

    return ParsedRow(
        date=usage_date,
        merchant=merchant,
        amount=amount,
        category_raw=cols[CATEGORY_COLUMN] if len(cols) > CATEGORY_COLUMN else "",
    )


def parse_statement_csv(text: str) -> list[ParsedRow]:
    """Parse a statement export into rows.

    Args:
        text: Decoded file content.

    Returns:
        One ParsedRow per valid data line, in file order. Empty when the
        header marker is missing.
    """
    lines = [line.strip() for line in re.split(r"\r?\n", text)]
    lines = [line for line in lines if line]

    header_index = next(
        (i for i, line in enumerate(lines) if HEADER_MARKER in line), None
    )
    if header_index is None:
        logger.info("Statement header not found")
        return []

    rows: list[ParsedRow] = []
    skipped = 0
    for line in lines[header_index + 1 :]:
        if not line.startswith('"'):
            continue
        try:
            cols = tokenize_csv_line(line)
        except CsvTokenizeError:
            skipped += 1
            continue
        row = _row_from_columns(cols)
        if row is None:
            skipped += 1
            continue
        rows.append(row)

    logger.info("Parsed statement CSV", extra={"rows": len(rows), "skipped": skipped})
    return rows
