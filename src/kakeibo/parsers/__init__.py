"""Statement CSV parsing.

Usage:
    from kakeibo.parsers import decode_statement_bytes, parse_statement_csv

    text = decode_statement_bytes(raw_bytes)
    rows = parse_statement_csv(text)
"""

from kakeibo.parsers.statement_csv import (
    HEADER_MARKER,
    decode_statement_bytes,
    detect_year_month,
    parse_statement_csv,
)
from kakeibo.parsers.tokenizer import CsvTokenizeError, tokenize_csv_line

__all__ = [
    "HEADER_MARKER",
    "CsvTokenizeError",
    "decode_statement_bytes",
    "detect_year_month",
    "parse_statement_csv",
    "tokenize_csv_line",
]
