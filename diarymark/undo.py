from typing import Optional


class HistoryStack:
    """Linear snapshot history with a cursor.

    The snapshot under the cursor is always the last committed document.
    Committing after an undo discards everything past the cursor.
    """

    def __init__(self, initial: str = "", max_entries: Optional[int] = None):
        self._snapshots: list[str] = [initial]
        self._index = 0
        self._max_entries = max_entries

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> str:
        return self._snapshots[self._index]

    @property
    def snapshots(self) -> list[str]:
        return list(self._snapshots)

    def __len__(self):
        return len(self._snapshots)

    def clear(self, snapshot: str = ""):
        self._snapshots = [snapshot]
        self._index = 0

    def commit(self, snapshot: str):
        # Any new edit invalidates redo history
        del self._snapshots[self._index + 1:]
        self._snapshots.append(snapshot)
        # Cap history
        if self._max_entries is not None and len(self._snapshots) > self._max_entries:
            del self._snapshots[0]
        self._index = len(self._snapshots) - 1

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def undo(self) -> Optional[str]:
        if not self.can_undo():
            return None
        self._index -= 1
        return self._snapshots[self._index]

    def redo(self) -> Optional[str]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._snapshots[self._index]
