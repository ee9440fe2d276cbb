"""Parameter sets that control how a CSV document is labelled, split and converted."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

PLATFORM_HAS_CR = sys.platform == "win32"
"""Whether new documents use CR/LF line endings by default on this platform."""


@dataclass
class LabelParams:
    """Which row holds the column labels and which column holds the row labels.

    An index of -1 disables lookup by label on that axis and makes the whole
    axis available as document data.
    """

    column_name_idx: int = 0
    row_name_idx: int = -1

    def __post_init__(self) -> None:
        if self.column_name_idx < -1:
            raise ValueError(f"invalid column name index {self.column_name_idx} < -1")
        if self.row_name_idx < -1:
            raise ValueError(f"invalid row name index {self.row_name_idx} < -1")


@dataclass
class SeparatorParams:
    """How fields and lines are separated, trimmed and quoted."""

    separator: str = ","
    trim: bool = False
    has_cr: bool = PLATFORM_HAS_CR
    quoted_linebreaks: bool = False
    auto_quote: bool = True
    quote_char: str = '"'


@dataclass
class ConverterParams:
    """How text that is not a valid number is converted.

    With ``has_default_converter`` set, invalid numbers become
    ``default_float`` or ``default_integer`` instead of raising.
    ``numeric_locale`` selects whether the decimal point of the current
    LC_NUMERIC locale is honoured.
    """

    has_default_converter: bool = False
    default_float: float = field(default=math.nan)
    default_integer: int = 0
    numeric_locale: bool = True


@dataclass
class LineReaderParams:
    """How comment lines and empty lines are treated while reading."""

    skip_comment_lines: bool = False
    comment_prefix: str = "#"
    skip_empty_lines: bool = False