from __future__ import annotations
import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def sequential_ids(prefix: str = "item") -> IdFactory:
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def random_ids(prefix: str = "item") -> IdFactory:
    """Short random ids, never repeated by the same factory."""
    seen: set[str] = set()

    def new_id() -> str:
        while True:
            candidate = f"{prefix}-{uuid.uuid4().hex[:9]}"
            if candidate not in seen:
                seen.add(candidate)
                return candidate

    return new_id


ID_STRATEGIES: dict[str, Callable[[], IdFactory]] = {
    "sequential": sequential_ids,
    "random": random_ids,
}
