# ABOUTME: Deterministic daily selection seeded from the UTC calendar date
# ABOUTME: Xorshift mixer over unsigned 32-bit seeds; not cryptographically secure

from collections.abc import Sequence
from datetime import UTC, date, datetime

MASK_32 = 0xFFFFFFFF


def xorshift(seed: int) -> int:
    """Advance a 32-bit seed with one xorshift round (13, 17, 5)."""
    seed &= MASK_32
    seed ^= (seed << 13) & MASK_32
    seed ^= seed >> 17
    seed ^= (seed << 5) & MASK_32
    return seed


def seed_for_date(day: date) -> int:
    """Seed for a calendar date: day + month_index * 12 + year * 384 (January is month 0)."""
    return day.day + (day.month - 1) * 12 + day.year * 12 * 32


def seed_for_today(now: datetime | None = None) -> int:
    """Seed for the current UTC calendar day; changes at UTC midnight."""
    current = now.astimezone(UTC) if now else datetime.now(UTC)
    return seed_for_date(current.date())


def int_range(seed: int, low: int, high: int) -> int:
    """Map a mixed seed into ``[low, high)``."""
    if high <= low:
        raise ValueError(f"empty range [{low}, {high})")
    return xorshift(seed) % (high - low) + low


def pick[T](seed: int, items: Sequence[T]) -> T | None:
    """Pick one item for ``seed``; None for an empty sequence."""
    if not items:
        return None
    return items[int_range(seed, 0, len(items))]


class DailyRandom:
    """Stateful draw sequence seeded from today's UTC date.

    Each draw advances the seed, so successive picks within a day differ but the whole
    sequence is identical for every caller on the same day.
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed_for_today() if seed is None else seed

    @property
    def seed(self) -> int:
        return self._seed

    def next(self, low: int, high: int) -> int:
        self._seed = xorshift(self._seed)
        return int_range(self._seed, low, high)

    def pick[T](self, items: Sequence[T]) -> T | None:
        if not items:
            return None
        return items[self.next(0, len(items))]
