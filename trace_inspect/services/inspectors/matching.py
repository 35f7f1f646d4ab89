"""
Directional match scanner.

Bounded search over an action list, used to pair a swap with the transfers
around it.
"""

from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .base import Classification, Transfer

T = TypeVar('T')


class Direction(Enum):
    BACKWARD = -1  # toward index 0
    FORWARD = 1    # toward the end


def find_matching(
    actions: Sequence[Classification],
    start: int,
    direction: Direction,
    extract: Callable[[Classification], Optional[T]],
    accept: Callable[[T], bool] = lambda _: True,
    tolerant: bool = False,
) -> Optional[Tuple[int, T]]:
    """
    Walk from `start` (inclusive) in `direction` and return the first element
    whose extracted value passes `accept`.

    In tolerant mode non-matching elements are skipped. In strict mode the
    first element examined must match, anything else ends the search.

    Args:
        actions: Snapshot of the action list
        start: First index examined
        direction: Direction.BACKWARD or Direction.FORWARD
        extract: Maps an action to a value (e.g. Classification.transfer)
        accept: Filter over extracted values
        tolerant: Skip non-matching elements instead of stopping

    Returns:
        (index, value) of the match, or None
    """
    step = direction.value
    i = start
    while 0 <= i < len(actions):
        value = extract(actions[i])
        if value is not None and accept(value):
            return i, value
        if not tolerant:
            return None
        i += step
    return None


def find_transfer(actions: List[Classification], start: int, direction: Direction,
                  tolerant: bool) -> Optional[Tuple[int, Transfer]]:
    """Nearest Transfer from `start` in `direction`."""
    return find_matching(actions, start, direction, lambda a: a.transfer(), tolerant=tolerant)
