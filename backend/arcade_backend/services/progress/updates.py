"""Closed set of direct progress updates.

Unlike sync, these overwrite (or adjust) a single field instead of merging.
Each variant owns the bounds of the field it touches.
"""
from dataclasses import dataclass, replace
from typing import Tuple

from arcade_backend.services import INT_MAX, ValidationError
from .reconcile import PlayerProgress, adjust, merge_levels


def _reject(field_name, message):
    raise ValidationError(message, errors={field_name: [message]})


@dataclass(frozen=True)
class SetCurrency:
    value: int

    def apply(self, progress: PlayerProgress, max_lives: int) -> PlayerProgress:
        if self.value < 0:
            _reject('currency', 'Currency must be a non-negative integer')
        return replace(progress, currency=self.value)


@dataclass(frozen=True)
class SetLives:
    value: int

    def apply(self, progress: PlayerProgress, max_lives: int) -> PlayerProgress:
        if not 0 <= self.value <= max_lives:
            _reject('lives', f'Lives must be an integer between 0 and {max_lives}')
        return replace(progress, lives=self.value)


@dataclass(frozen=True)
class SetUnlockedLevels:
    levels: Tuple[int, ...]

    def apply(self, progress: PlayerProgress, max_lives: int) -> PlayerProgress:
        if any(level < 1 for level in self.levels):
            _reject('unlocked_levels', 'Levels must be positive integers')
        return replace(progress, unlocked_levels=merge_levels(self.levels))


@dataclass(frozen=True)
class SetBestScore:
    value: int

    def apply(self, progress: PlayerProgress, max_lives: int) -> PlayerProgress:
        if self.value < 0:
            _reject('best_score', 'Best score must be a non-negative integer')
        return replace(progress, best_score=self.value)


@dataclass(frozen=True)
class AdjustCurrency:
    delta: int

    def apply(self, progress: PlayerProgress, max_lives: int) -> PlayerProgress:
        return replace(progress, currency=adjust(progress.currency, self.delta, 0, INT_MAX))


@dataclass(frozen=True)
class AdjustLives:
    delta: int

    def apply(self, progress: PlayerProgress, max_lives: int) -> PlayerProgress:
        return replace(progress, lives=adjust(progress.lives, self.delta, 0, max_lives))


@dataclass(frozen=True)
class UnlockLevel:
    level: int

    def apply(self, progress: PlayerProgress, max_lives: int) -> PlayerProgress:
        if self.level < 1:
            _reject('level', 'Level must be a positive integer')
        if self.level in progress.unlocked_levels:
            return progress
        return replace(progress, unlocked_levels=merge_levels(progress.unlocked_levels, [self.level]))


# Absolute setters addressable by name through the single-field endpoint
FIELD_SETTERS = {
    'currency': SetCurrency,
    'lives': SetLives,
    'unlocked_levels': lambda levels: SetUnlockedLevels(tuple(levels)),
    'best_score': SetBestScore,
}


def field_update(field_name, value):
    try:
        factory = FIELD_SETTERS[field_name]
    except KeyError:
        _reject('field', f"Field must be one of: {', '.join(FIELD_SETTERS)}")
    return factory(value)


def apply_updates(progress: PlayerProgress, updates, max_lives: int) -> PlayerProgress:
    for update in updates:
        progress = update.apply(progress, max_lives)
    return progress
