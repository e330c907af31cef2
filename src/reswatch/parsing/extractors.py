"""
Numeric field extraction from the text reports of external tools.

Two strategies are provided because the tools lay out their reports
differently:

- FixedColumnExtractor: the report is a single row of equal-width blocks,
  each a short header followed by a right-justified number (``free -L``).
- HeaderSearchExtractor: the report is a table whose first line holds
  column headers; the value is found below a given header (``sar``).

Both share the same failure policy: a field that cannot be located or parsed
is logged together with the whole report. ``try_extract`` then returns None
and ``extract`` returns 0. Extraction never raises on malformed input.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .integers import parse_int

logger = logging.getLogger(__name__)


class ColumnExtractor(ABC):
    """
    Base class for the extraction strategies.

    Subclasses implement ``locate`` to find the substring holding the value;
    ``extract`` turns it into an integer.
    """

    def __init__(self, source: str):
        """
        Args:
            source: Name of the command that produced the report, used in
                    log messages (e.g. "free -L").
        """
        self.source = source

    def try_extract(self, buffer: str, field: int) -> Optional[int]:
        """
        Extract the integer held by ``field`` in ``buffer``.

        Returns:
            The parsed value, or None (after logging the offending substring
            and the whole buffer) if the field could not be located or parsed.
        """
        number_part = self.locate(buffer, field)
        if number_part is None:
            return None

        try:
            return parse_int(number_part)
        except ValueError:
            logger.warning(
                f"Failed to parse number '{number_part}' from '{self.source}' output '{buffer}'"
            )
            return None

    def extract(self, buffer: str, field: int) -> int:
        """Like ``try_extract``, but a failed extraction yields 0."""
        value = self.try_extract(buffer, field)
        return 0 if value is None else value

    @abstractmethod
    def locate(self, buffer: str, field: int) -> Optional[str]:
        """
        Return the raw substring holding the value of ``field``.

        Returns None (after logging the reason) when the field cannot be
        located at all.
        """
        pass


class FixedColumnExtractor(ColumnExtractor):
    """
    Extracts values from a one-row report made of equal-width blocks.

    Each block is a header token padded to ``header_width`` characters,
    followed by a right-justified number and one separator character. The
    report ends with a line terminator, so the block width is
    ``(len(buffer) - 1) // block_count``.
    """

    def __init__(self, source: str, block_count: int = 4, header_width: int = 9):
        super().__init__(source)
        self.block_count = block_count
        # longest header (8 characters) plus one space
        self.header_width = header_width

    def locate(self, buffer: str, field: int) -> Optional[str]:
        if not 0 <= field < self.block_count:
            raise ValueError(
                f"Block index must be in [0, {self.block_count}), got {field}"
            )

        block_width = (len(buffer) - 1) // self.block_count
        start_offset = block_width * field + self.header_width
        max_number_len = max(block_width - self.header_width, 0)

        end = min(start_offset + max_number_len, len(buffer))
        number_start = start_offset
        number_len = max_number_len
        for i in range(start_offset, end):
            number_len -= 1
            if buffer[i] != " ":
                number_start = i
                break

        # The last character of the block is the separator and is not part
        # of the number. A field with no digits yields an empty string.
        return buffer[number_start:number_start + number_len]


class HeaderSearchExtractor(ColumnExtractor):
    """
    Extracts a value found below a column header.

    The header line is searched for ``marker``. The value lies ``field``
    lines below it, starting ``value_offset`` characters after the marker's
    column and spanning ``value_width`` characters.
    """

    def __init__(
        self,
        source: str,
        marker: str,
        value_offset: int = 2,
        value_width: int = 3,
    ):
        super().__init__(source)
        self.marker = marker
        self.value_offset = value_offset
        self.value_width = value_width

    def try_extract(self, buffer: str, field: int = 1) -> Optional[int]:
        return super().try_extract(buffer, field)

    def extract(self, buffer: str, field: int = 1) -> int:
        return super().extract(buffer, field)

    def locate(self, buffer: str, field: int = 1) -> Optional[str]:
        if field < 1:
            raise ValueError(f"Data line index must be >= 1, got {field}")

        header_end = buffer.find("\n")
        if header_end == -1:
            header_end = len(buffer)

        marker_offset = buffer.rfind(self.marker, 0, header_end)
        if marker_offset == -1:
            logger.warning(
                f"Could not find '{self.marker}' column in '{self.source}' output '{buffer}'"
            )
            return None

        # Walk down to the start of the requested data line.
        line_start = header_end + 1
        for _ in range(field - 1):
            next_end = buffer.find("\n", line_start)
            if next_end == -1:
                line_start = len(buffer)
                break
            line_start = next_end + 1

        line_end = buffer.find("\n", line_start)
        if line_end == -1:
            line_end = len(buffer)

        value_start = line_start + marker_offset + self.value_offset
        return buffer[value_start:min(value_start + self.value_width, line_end)]
