from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple


def merge_levels(*level_sets: Iterable[int]) -> Tuple[int, ...]:
    """Sorted, duplicate-free union of any number of level collections."""
    merged = set()
    for levels in level_sets:
        merged.update(int(level) for level in levels)
    return tuple(sorted(merged))


def clamp(value: int, lower: int, upper: Optional[int] = None) -> int:
    value = max(lower, value)
    if upper is not None:
        value = min(upper, value)
    return value


def adjust(current: int, delta: int, lower: int, upper: Optional[int] = None) -> int:
    """Relative change of a counter, clamped into [lower, upper]."""
    return clamp(current + delta, lower, upper)


@dataclass(frozen=True)
class PlayerProgress:
    """Snapshot of a player's synced game data."""
    currency: int = 0
    lives: int = 0
    unlocked_levels: Tuple[int, ...] = field(default=(1,))
    best_score: int = 0

    def __post_init__(self):
        # Keep the level list canonical so equal snapshots compare equal
        object.__setattr__(self, 'unlocked_levels', merge_levels(self.unlocked_levels or (1,)))

    @classmethod
    def from_user(cls, user) -> 'PlayerProgress':
        return cls(
            currency=user.currency or 0,
            lives=user.lives or 0,
            unlocked_levels=tuple(user.unlocked_levels),
            best_score=user.best_score or 0,
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'PlayerProgress':
        return cls(
            currency=data['currency'],
            lives=data['lives'],
            unlocked_levels=tuple(data['unlocked_levels']),
            best_score=data['best_score'],
        )

    def to_dict(self) -> dict:
        return {
            'currency': self.currency,
            'lives': self.lives,
            'unlocked_levels': list(self.unlocked_levels),
            'best_score': self.best_score,
        }

    def write_to(self, user) -> None:
        user.currency = self.currency
        user.lives = self.lives
        user.unlocked_levels = self.unlocked_levels
        user.best_score = self.best_score


def reconcile(local: PlayerProgress, server: PlayerProgress,
              max_lives: Optional[int] = None) -> PlayerProgress:
    """Merge a device snapshot with the stored one.

    Every counter takes the larger of the two values and unlocked levels are
    unioned, so the result never loses progress from either side. The merge
    is idempotent and does not depend on argument order.

    With ``max_lives`` set, merged lives are additionally clamped to
    ``[0, max_lives]``; ``None`` gives the plain max.
    """
    lives = max(local.lives, server.lives)
    if max_lives is not None:
        lives = clamp(lives, 0, max_lives)
    return replace(
        server,
        currency=max(local.currency, server.currency),
        lives=lives,
        unlocked_levels=merge_levels(local.unlocked_levels, server.unlocked_levels),
        best_score=max(local.best_score, server.best_score),
    )
