"""Unit tests for the quoted-CSV line tokenizer."""

import pytest

from kakeibo.parsers import CsvTokenizeError, tokenize_csv_line


class TestTokenizeCsvLine:
    def test_quoted_fields(self):
        assert tokenize_csv_line('"a","b","c"') == ["a", "b", "c"]

    def test_unquoted_fields(self):
        assert tokenize_csv_line("a,b,c") == ["a", "b", "c"]

    def test_mixed_quoted_and_unquoted(self):
        assert tokenize_csv_line('"a",b,"c"') == ["a", "b", "c"]

    def test_comma_inside_quotes(self):
        """Thousands separators stay inside the field."""
        assert tokenize_csv_line('"2025/01/05","3,210"') == ["2025/01/05", "3,210"]

    def test_escaped_quote(self):
        assert tokenize_csv_line('"ラーメン ""一番""","980"') == ['ラーメン "一番"', "980"]

    def test_empty_fields(self):
        assert tokenize_csv_line('"a","",,"d"') == ["a", "", "", "d"]

    def test_trailing_delimiter_yields_empty_field(self):
        assert tokenize_csv_line('"a",') == ["a", ""]

    def test_empty_line(self):
        assert tokenize_csv_line("") == [""]

    def test_whitespace_around_quoted_field(self):
        assert tokenize_csv_line('"a" , "b"') == ["a", "b"]

    def test_unterminated_quote_raises(self):
        with pytest.raises(CsvTokenizeError):
            tokenize_csv_line('"a","b')

    def test_text_after_closing_quote_raises(self):
        with pytest.raises(CsvTokenizeError):
            tokenize_csv_line('"a"x,"b"')

    def test_quote_inside_unquoted_field_raises(self):
        with pytest.raises(CsvTokenizeError):
            tokenize_csv_line('ab"c,d')

    def test_error_is_value_error(self):
        assert issubclass(CsvTokenizeError, ValueError)
