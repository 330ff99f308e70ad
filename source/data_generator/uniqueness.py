"""Draw random values that are not yet in a rejection set."""

from typing import Callable, Hashable, Set, TypeVar

from utilities.errors import UniqueValueExhaustedError

T = TypeVar("T", bound=Hashable)

DEFAULT_MAX_ATTEMPTS = 1000


def draw_unique(
    candidate: Callable[[], T],
    used: Set[T],
    label: str = "value",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> T:
    """Draw candidates until one is absent from used, then record and return it.

    Mutates used. Raises UniqueValueExhaustedError when max_attempts draws
    all collide.
    """
    for _ in range(max_attempts):
        value = candidate()
        if value not in used:
            used.add(value)
            return value

    raise UniqueValueExhaustedError(label, max_attempts)
