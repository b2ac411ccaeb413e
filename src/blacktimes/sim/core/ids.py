"""Per-session entity identifier generator."""

from __future__ import annotations

from pydantic import BaseModel

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    out: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


class IdGenerator(BaseModel):
    """Monotonic id source owned by a single world state.

    Ids look like ``star_1a`` -- a kind prefix plus a base-36 counter.
    The counter is part of the snapshot, so a restored session keeps
    issuing fresh ids, and two sessions in one process never share one.
    """

    counter: int = 0

    def next_id(self, prefix: str) -> str:
        self.counter += 1
        return f"{prefix}_{_to_base36(self.counter)}"

    def reset(self) -> None:
        self.counter = 0
