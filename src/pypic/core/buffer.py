"""Append-only line buffer for generated assembly.

The buffer is the program: insertion order is program order, and lines are
never reordered or deduplicated. Reads hand out immutable snapshots.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pyrsistent import PVector, pvector


class LineBuffer:
    """Ordered sequence of emitted assembly lines.

    Owned by a Program. Scoped builders (the constant block) receive the same
    instance and append into it while their scope is open.
    """

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines: PVector = pvector(lines)
        self._closed = False

    def append(self, line: str) -> None:
        """Append one line. Raises once the buffer has been closed."""
        if self._closed:
            raise RuntimeError(f"Cannot emit {line!r}: program already finalized")
        self._lines = self._lines.append(line)

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.append(line)

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def lines(self) -> PVector:
        """Immutable snapshot of every line emitted so far."""
        return self._lines

    def text(self) -> str:
        """Join the lines into program source."""
        return "\n".join(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def __repr__(self) -> str:
        return f"LineBuffer({len(self._lines)} lines)"
