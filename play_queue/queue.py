"""Playback queue: ordered items with a current head and repeat modes (no I/O)."""

import logging
import math
import numbers
import random
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

_log = logging.getLogger(__name__)

# Largest integer a double represents exactly; indices beyond it are rejected.
MAX_SAFE_INTEGER = 2**53 - 1
# Upper clamp for remove_range bounds.
MAX_RANGE_BOUND = 4_294_967_295


class InvalidArgument(ValueError):
    """Raised for malformed shift counts and remove_range bounds."""


class RepeatMode(Enum):
    """What happens to items passed over when the queue advances."""

    NO_REPEAT = "NO-REPEAT"
    REPEAT_ONE = "REPEAT-ONE"
    REPEAT_ALL = "REPEAT-ALL"
    REPEAT_ALL_INDEX = "REPEAT-ALL-INDEX"


def _as_safe_integer(value: Any) -> int | None:
    """Return value as int if it is an integer of safe magnitude, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if abs(value) <= MAX_SAFE_INTEGER else None
    if isinstance(value, float) and value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
        return int(value)
    return None


def _clamp_bound(value: float) -> int:
    """Clamp a range bound to 1..MAX_RANGE_BOUND, rounding fractions up."""
    if value < 1:
        return 1
    if value > MAX_RANGE_BOUND:
        return MAX_RANGE_BOUND
    return math.ceil(value)


class Queue(Generic[T]):
    """
    Ordered items where index 0 is the current one.

    Advancing removes or rotates the front according to the repeat mode;
    index-based removal never touches the current item.
    """

    __slots__ = (
        "__items",
        "__repeat_mode",
        "__anchor",
        "__cycles",
    )

    def __init__(self) -> None:
        self.__items: list[T] = []
        self.__repeat_mode = RepeatMode.NO_REPEAT
        # Position of the item that started the current cycle (REPEAT_ALL_INDEX).
        self.__anchor = 0
        self.__cycles = 0

    def __len__(self) -> int:
        return len(self.__items)

    def __bool__(self) -> bool:
        return len(self.__items) > 0

    def __iter__(self) -> Iterator[T]:
        return iter(self.__items[:])

    def __str__(self) -> str:
        return f"Queue({len(self.__items)})"

    def __repr__(self) -> str:
        return f"Queue(size={len(self.__items)}, repeat_mode={self.__repeat_mode})"

    @property
    def size(self) -> int:
        return len(self.__items)

    @property
    def current(self) -> T | None:
        return self.__items[0] if self.__items else None

    @property
    def current_index(self) -> int:
        """
        Position of the current item within the cycle.

        Only REPEAT_ALL_INDEX tracks it: the number of positions rotated past
        the anchor item, modulo size. Every other mode reports 0.
        """
        size = len(self.__items)
        if self.__repeat_mode is not RepeatMode.REPEAT_ALL_INDEX or not size:
            return 0
        return (size - self.__anchor) % size

    @property
    def cycles(self) -> int:
        """Full passes back to the anchor item under REPEAT_ALL_INDEX; 0 otherwise."""
        if self.__repeat_mode is not RepeatMode.REPEAT_ALL_INDEX:
            return 0
        return self.__cycles

    @property
    def repeat_mode(self) -> RepeatMode:
        return self.__repeat_mode

    @repeat_mode.setter
    def repeat_mode(self, mode: RepeatMode | str) -> None:
        try:
            mode = RepeatMode(mode)
        except (ValueError, TypeError):
            _log.debug("Ignoring invalid repeat mode %r", mode)
            return
        if mode is RepeatMode.REPEAT_ALL_INDEX and self.__repeat_mode is not mode:
            self.__restart_cycle()
        self.__repeat_mode = mode

    def at(self, index: Any) -> T | None:
        """Item at index (negative counts from the end), or None."""
        index = _as_safe_integer(index)
        if index is None:
            return None
        size = len(self.__items)
        if not -size <= index < size:
            return None
        return self.__items[index]

    def append(self, item: T) -> None:
        self.__items.append(item)

    def prepend(self, item: T) -> None:
        if self.__items:
            self.__anchor += 1
        self.__items.insert(0, item)

    def clear(self) -> None:
        self.__items.clear()
        self.__restart_cycle()

    def shift(self, *, times: Any = 1, ignore_repetition: bool = True) -> None:
        """
        Advance past `times` front items.

        NO_REPEAT (and REPEAT_ONE when forced) discards them; REPEAT_ALL and
        REPEAT_ALL_INDEX rotate them to the tail, with `times` taken modulo
        size. REPEAT_ONE without ignore_repetition stays on the current item.

        Raises InvalidArgument if times is not a positive safe integer.
        """
        if self.__repeat_mode is RepeatMode.REPEAT_ONE and not ignore_repetition:
            return
        count = _as_safe_integer(times)
        if count is None or count < 1:
            raise InvalidArgument(f'Invalid Argument. "times" must be a positive integer, got {times!r}')
        items = self.__items
        size = len(items)
        if not size:
            return
        if self.__repeat_mode in (RepeatMode.REPEAT_ALL, RepeatMode.REPEAT_ALL_INDEX):
            self.__cycles += ((size - self.__anchor) % size + count) // size
            count %= size
            if count:
                items[:] = items[count:] + items[:count]
                self.__anchor = (self.__anchor - count) % size
            _log.debug("Rotated %d item(s); %d in queue", count, size)
            return
        count = min(count, size)
        del items[:count]
        self.__reanchor(range(count))
        _log.debug("Dropped %d item(s); %d left in queue", count, len(items))

    def remove_at(self, index: Any) -> T | None:
        """Remove and return the item at index; the current item (0) is never removed."""
        index = _as_safe_integer(index)
        if index is None or not 0 < index < len(self.__items):
            return None
        item = self.__items.pop(index)
        self.__reanchor((index,))
        return item

    def remove_multi(self, *indices: Any) -> list[T]:
        """
        Remove several positions at once.

        Indices refer to the positions before the call; invalid, duplicate and
        head (0) indices are skipped. Removed items come back in ascending
        position order.
        """
        size = len(self.__items)
        positions = sorted({
            i for i in (_as_safe_integer(index) for index in indices)
            if i is not None and 0 < i < size
        })
        removed: list[T] = []
        for offset, position in enumerate(positions):
            removed.append(self.__items.pop(position - offset))
        self.__reanchor(positions)
        return removed

    def remove_range(self, begin: Any, end: Any) -> list[T]:
        """
        Remove the items between two positions and return them in order.

        Bounds are clamped to 1..MAX_RANGE_BOUND and rounded up, so the current
        item is never included. Reversed bounds remove [end, begin).

        Raises InvalidArgument if either bound is not a real number (bool and
        decimal.Decimal included) or is NaN.
        """
        for name, value in (("begin", begin), ("end", end)):
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or math.isnan(value):
                _log.debug("Rejected remove_range %s=%r", name, value)
                raise InvalidArgument(f'Invalid Argument. "{name}" must be a number')
        begin = _clamp_bound(begin)
        end = _clamp_bound(end)
        if begin == end:
            return []
        low, high = (end, begin) if end < begin else (begin, end)
        removed = self.__items[low:high]
        if removed:
            del self.__items[low:high]
            self.__reanchor(range(low, low + len(removed)))
        return removed

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Shuffle every item except the current one; starts a new cycle."""
        items = self.__items
        if len(items) > 2:
            rest = items[1:]
            (rng or random).shuffle(rest)
            items[1:] = rest
        self.__restart_cycle()

    def to_list(self) -> list[T]:
        return self.__items[:]

    def remove(self, predicate: Callable[[T], bool]) -> list[T]:
        """Remove every item matching predicate; returns them in original order."""
        kept: list[T] = []
        removed: list[T] = []
        positions: list[int] = []
        for i, item in enumerate(self.__items):
            if predicate(item):
                removed.append(item)
                positions.append(i)
            else:
                kept.append(item)
        if removed:
            self.__items[:] = kept
            self.__reanchor(positions)
        return removed

    def __restart_cycle(self) -> None:
        self.__anchor = 0
        self.__cycles = 0

    def __reanchor(self, positions: Iterable[int]) -> None:
        # positions: ascending indices removed, relative to the previous list.
        anchor = self.__anchor - sum(1 for p in positions if p < self.__anchor)
        self.__anchor = anchor if anchor < len(self.__items) else 0
