"""Numbering service for generating sequential project codes.
Handles code parsing and next-number computation.
"""

from typing import Iterable, Optional
import re

from app.domain.models.project import PROJECT_CODE_PREFIX, PROJECT_CODE_MIN_DIGITS


class NumberingService:
    """
    Domain service for the sequential project numbering scheme.
    Codes look like PRJ-001; the numeric part grows past three digits as needed.
    """

    def __init__(
        self,
        prefix: str = PROJECT_CODE_PREFIX,
        min_digits: int = PROJECT_CODE_MIN_DIGITS
    ):
        self.prefix = prefix
        self.min_digits = min_digits
        self._pattern = re.compile(re.escape(prefix) + r"(\d+)")

    def parse_number(self, code: Optional[str]) -> Optional[int]:
        """
        Extract the numeric part of a code.
        Returns None for empty or non-matching codes.
        """
        if not code:
            return None

        match = self._pattern.search(code)
        if not match:
            return None

        return int(match.group(1))

    def highest_number(self, existing_codes: Iterable[Optional[str]]) -> int:
        """
        Find the highest numeric suffix among existing codes.
        Comparison is numeric: PRJ-1000 is above PRJ-999 even though it sorts lower as text.
        """
        highest = 0
        for code in existing_codes:
            number = self.parse_number(code)
            if number is not None and number > highest:
                highest = number
        return highest

    def format_code(self, number: int) -> str:
        """Format a number as a project code, zero-padded to the minimum width."""
        return f"{self.prefix}{number:0{self.min_digits}d}"

    def next_project_code(self, existing_codes: Iterable[Optional[str]]) -> str:
        """
        Generate the code following the highest existing one.
        """
        return self.format_code(self.highest_number(existing_codes) + 1)
