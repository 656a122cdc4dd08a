"""Cursor-based anchored matching over a single line of text."""

import re


class Scanner:
    def __init__(self, text: str = "") -> None:
        self._text = text
        self._pos = 0

    @property
    def pos(self) -> int:
        return self._pos

    def rebind(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def match(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        """Match ``pattern`` at the cursor and advance past it.

        On failure the cursor does not move and ``None`` is returned.
        """
        m = pattern.match(self._text, self._pos)
        if m is None:
            return None
        self._pos = m.end()
        return m

    def skip(self, pattern: re.Pattern[str]) -> bool:
        return self.match(pattern) is not None

    def remainder(self) -> str:
        return self._text[self._pos :]

    def at_end(self) -> bool:
        return self._pos >= len(self._text)
