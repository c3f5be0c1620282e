from dataclasses import dataclass


@dataclass(frozen=True)
class Selection:
    """Half-open character range ``[start, end)`` within the document."""

    start: int = 0
    end: int = 0

    @classmethod
    def caret(cls, position: int) -> "Selection":
        return cls(position, position)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __len__(self):
        return self.end - self.start

    def clamp(self, length: int) -> "Selection":
        """Return a selection that fits a document of ``length`` characters.

        Out-of-range offsets are pulled back into ``[0, length]`` and a
        reversed range is normalized so that ``start <= end``.
        """
        start = min(max(self.start, 0), length)
        end = min(max(self.end, 0), length)
        if start > end:
            start, end = end, start
        return Selection(start, end)
