"""Type aliases used across the ShiftDesk import core."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

Row = list[str]

# (processed, total); may be sync or async
ProgressCallback = Callable[[int, int], Awaitable[None] | None]
