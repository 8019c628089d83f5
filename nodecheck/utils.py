"""
Small helpers shared by the analyzers.
"""

import re
import time
from typing import Optional, Pattern, Union

from nodecheck.exceptions import ValidationTimeout


class Deadline:
    """
    Wall-clock budget for one validation call.

    Analyzers call check() from their inner loops; once the budget is
    exhausted it raises ValidationTimeout, which the validator turns into
    a single finding.
    """

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        self._expires_at = time.monotonic() + timeout_ms / 1000.0

    def check(self) -> None:
        if time.monotonic() > self._expires_at:
            raise ValidationTimeout(self.timeout_ms)


def check_deadline(deadline: Optional[Deadline]) -> None:
    if deadline is not None:
        deadline.check()


def find_line_number(code: str, pattern: Union[str, Pattern]) -> int:
    """Return the 1-based number of the first line matching pattern (1 if none)"""
    rx = re.compile(pattern, re.ASCII) if isinstance(pattern, str) else pattern
    for line_num, line in enumerate(code.split('\n'), start=1):
        if rx.search(line):
            return line_num
    return 1
