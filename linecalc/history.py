from typing import Optional


class History:
    """Accepted input lines, oldest first, with a cursor for walking back and forth"""

    def __init__(self) -> None:
        self.entries: list[str] = []
        self._cursor: Optional[int] = None

    def add_entry(self, entry: str) -> None:
        if not self.entries or self.entries[-1] != entry:
            self.entries.append(entry)

    def older(self) -> Optional[str]:
        if not self.entries:
            return None
        if self._cursor is None:
            self._cursor = len(self.entries) - 1
        elif self._cursor > 0:
            self._cursor -= 1
        else:
            return None
        return self.entries[self._cursor]

    def newer(self) -> Optional[str]:
        if self._cursor is None:
            return None
        if self._cursor < len(self.entries) - 1:
            self._cursor += 1
            return self.entries[self._cursor]
        self._cursor = None
        return None

    def reset(self) -> None:
        self._cursor = None
