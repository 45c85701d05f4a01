"""Quoted-CSV line tokenizer.

A small state machine over the characters of a single line. It accepts the
usual export dialect: fields separated by commas, optionally wrapped in double
quotes, with ``""`` standing for a literal quote inside a quoted field.
Anything else (an unterminated quote, text after a closing quote) is
rejected so the caller can skip the line.
"""

from enum import Enum, auto

QUOTE = '"'
DELIMITER = ","


class CsvTokenizeError(ValueError):
    """Raised when a line is not valid quoted CSV."""


class _State(Enum):
    FIELD_START = auto()
    UNQUOTED = auto()
    QUOTED = auto()
    QUOTE_IN_QUOTED = auto()


def tokenize_csv_line(line: str) -> list[str]:
    """Split one CSV line into its field values.

    Args:
        line: A single line without the trailing newline.

    Returns:
        Field values with quoting removed.

    Raises:
        CsvTokenizeError: If the quoting is malformed.
    """
    fields: list[str] = []
    buf: list[str] = []
    state = _State.FIELD_START

    for pos, ch in enumerate(line):
        if state is _State.FIELD_START:
            if ch == QUOTE:
                # Padding before an opening quote is not part of the value.
                buf = []
                state = _State.QUOTED
            elif ch == DELIMITER:
                fields.append("".join(buf))
                buf = []
            elif ch.isspace():
                buf.append(ch)
            else:
                buf.append(ch)
                state = _State.UNQUOTED

        elif state is _State.UNQUOTED:
            if ch == DELIMITER:
                fields.append("".join(buf))
                buf = []
                state = _State.FIELD_START
            elif ch == QUOTE:
                raise CsvTokenizeError(f"Unexpected quote at column {pos}")
            else:
                buf.append(ch)

        elif state is _State.QUOTED:
            if ch == QUOTE:
                state = _State.QUOTE_IN_QUOTED
            else:
                buf.append(ch)

        elif state is _State.QUOTE_IN_QUOTED:
            if ch == QUOTE:
                # Escaped quote
                buf.append(QUOTE)
                state = _State.QUOTED
            elif ch == DELIMITER:
                fields.append("".join(buf))
                buf = []
                state = _State.FIELD_START
            elif ch.isspace():
                # Whitespace between a closing quote and the next delimiter.
                continue
            else:
                raise CsvTokenizeError(f"Unexpected character after closing quote at column {pos}")

    if state is _State.QUOTED:
        raise CsvTokenizeError("Unterminated quoted field")

    fields.append("".join(buf))
    return fields
