import re
from dataclasses import dataclass

# Tab, ASCII comma and full-width comma; a run of them is a single split point
FIELD_DELIMITERS = re.compile(r"[\t,，]+")

# Whitespace trimmed from the ends of a line; tab is a delimiter and must survive
_EDGE_WHITESPACE = " \r\v\f　"


@dataclass(frozen=True, slots=True)
class ParsedRow:
    line: int
    fields: tuple[str, ...]

    def get(self, index: int) -> str:
        """Return the token at `index`, or an empty string when the row is shorter."""
        return self.fields[index] if index < len(self.fields) else ""


def split_fields(line: str) -> tuple[str, ...]:
    """Split one line into trimmed tokens.

    A leading delimiter (tab, comma or full-width comma alike) keeps an empty
    first token so an absent first field stays positionally absent. Any other
    empty token is dropped.
    """
    trimmed = line.strip(_EDGE_WHITESPACE)
    tokens = [token.strip() for token in FIELD_DELIMITERS.split(trimmed)]
    if not tokens:
        return ()
    head, rest = tokens[0], tokens[1:]
    return (head, *(token for token in rest if token))


def parse_rows(text: str) -> list[ParsedRow]:
    """Turn pasted multi-line text into numbered rows, skipping blank lines.

    Line numbers are 1-based and refer to the original input, blank lines included.
    """
    rows: list[ParsedRow] = []
    for line_no, raw_line in enumerate((text or "").split("\n"), start=1):
        if not raw_line.strip():
            continue
        rows.append(ParsedRow(line=line_no, fields=split_fields(raw_line)))
    return rows
