import pytest

from arcade_backend.services import ValidationError
from arcade_backend.services.progress.reconcile import PlayerProgress, adjust, merge_levels, reconcile
from arcade_backend.services.progress.updates import (
    AdjustCurrency,
    AdjustLives,
    SetBestScore,
    SetCurrency,
    SetLives,
    SetUnlockedLevels,
    UnlockLevel,
    apply_updates,
    field_update,
)


def snap(currency=0, lives=0, levels=(1,), best=0):
    return PlayerProgress(currency=currency, lives=lives, unlocked_levels=levels, best_score=best)


def test_reconcile_takes_larger_counters():
    merged = reconcile(snap(currency=10, lives=2, best=300), snap(currency=4, lives=4, best=500))
    assert merged.currency == 10
    assert merged.lives == 4
    assert merged.best_score == 500


def test_reconcile_max_fields_ignore_argument_order():
    a = snap(currency=7, lives=1, levels=(1, 4), best=90)
    b = snap(currency=3, lives=5, levels=(2,), best=120)
    assert reconcile(a, b) == reconcile(b, a)


def test_reconcile_is_idempotent():
    x = snap(currency=42, lives=3, levels=(3, 1, 2), best=800)
    assert reconcile(x, x) == x
    once = reconcile(x, snap(currency=1, lives=5))
    assert reconcile(once, snap(currency=1, lives=5)) == once


def test_reconcile_never_decreases_either_side():
    local = snap(currency=5, lives=1, levels=(1, 2), best=10)
    server = snap(currency=2, lives=3, levels=(5,), best=20)
    merged = reconcile(local, server)
    for side in (local, server):
        assert merged.currency >= side.currency
        assert merged.lives >= side.lives
        assert merged.best_score >= side.best_score
        assert set(side.unlocked_levels) <= set(merged.unlocked_levels)


def test_reconcile_unions_levels_sorted_without_duplicates():
    merged = reconcile(snap(levels=(1, 3)), snap(levels=(2, 3)))
    assert merged.unlocked_levels == (1, 2, 3)
    assert merged.to_dict()['unlocked_levels'] == [1, 2, 3]


def test_reconcile_lives_clamp_is_optional():
    local, server = snap(lives=9), snap(lives=2)
    assert reconcile(local, server).lives == 9
    assert reconcile(local, server, max_lives=5).lives == 5


def test_empty_levels_default_to_first_level():
    assert PlayerProgress(unlocked_levels=()).unlocked_levels == (1,)
    assert merge_levels([3, 1], [1], []) == (1, 3)


@pytest.mark.parametrize('current, delta, lower, upper, expected', [
    (3, 4, 0, 5, 5),
    (3, -10, 0, 5, 0),
    (3, 1, 0, 5, 4),
    (10, 1000, 0, None, 1010),
    (10, -11, 0, None, 0),
])
def test_adjust_clamps_into_bounds(current, delta, lower, upper, expected):
    assert adjust(current, delta, lower, upper) == expected


def test_adjust_updates_respect_field_bounds():
    progress = snap(currency=5, lives=4)
    progress = apply_updates(progress, [AdjustLives(3), AdjustCurrency(-8)], max_lives=5)
    assert progress.lives == 5
    assert progress.currency == 0


def test_set_lives_rejects_out_of_range():
    with pytest.raises(ValidationError) as excinfo:
        SetLives(6).apply(snap(), max_lives=5)
    assert 'lives' in excinfo.value.errors
    assert SetLives(5).apply(snap(), max_lives=5).lives == 5


def test_set_currency_has_no_upper_bound():
    assert SetCurrency(10 ** 9).apply(snap(), max_lives=5).currency == 10 ** 9
    with pytest.raises(ValidationError):
        SetCurrency(-1).apply(snap(), max_lives=5)


def test_set_overwrites_instead_of_merging():
    progress = snap(currency=100, levels=(1, 2, 3), best=900)
    progress = apply_updates(progress, [SetCurrency(1), SetUnlockedLevels((4, 2, 2)), SetBestScore(5)], 5)
    assert progress.currency == 1
    assert progress.unlocked_levels == (2, 4)
    assert progress.best_score == 5


def test_unlock_level_adds_once():
    progress = snap(levels=(1, 2, 3))
    unlocked = UnlockLevel(5).apply(progress, max_lives=5)
    assert unlocked.unlocked_levels == (1, 2, 3, 5)
    assert UnlockLevel(5).apply(unlocked, max_lives=5) == unlocked


def test_field_update_only_knows_closed_set_of_fields():
    assert field_update('lives', 2) == SetLives(2)
    assert field_update('unlocked_levels', [3, 1]) == SetUnlockedLevels((3, 1))
    with pytest.raises(ValidationError):
        field_update('password_hash', 'x')
