from flask import current_app

from arcade_backend import db
from arcade_backend.models import User
from .reconcile import PlayerProgress, reconcile
from .updates import apply_updates


def _lock_user(user_id: int) -> User:
    # Row lock so concurrent syncs for one user serialize instead of losing updates
    return User.query.filter_by(id=user_id).with_for_update().one()


def _max_lives() -> int:
    return int(current_app.config.get('MAX_LIVES', 5))


def get_progress(user_id: int) -> PlayerProgress:
    return PlayerProgress.from_user(db.session.get(User, user_id))


def sync_progress(user_id: int, local: PlayerProgress) -> PlayerProgress:
    """Merge the device snapshot into the stored one and persist the result."""
    try:
        user = _lock_user(user_id)
        server = PlayerProgress.from_user(user)
        merged = reconcile(local, server, max_lives=_max_lives())
        merged.write_to(user)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(
        f"[sync] user={user_id} currency={server.currency}->{merged.currency} "
        f"lives={server.lives}->{merged.lives} levels={len(merged.unlocked_levels)} "
        f"best={server.best_score}->{merged.best_score}"
    )
    return merged


def update_progress(user_id: int, updates) -> PlayerProgress:
    """Apply direct field updates (overwrite or clamp-adjust) under a row lock."""
    try:
        user = _lock_user(user_id)
        updated = apply_updates(PlayerProgress.from_user(user), updates, _max_lives())
        updated.write_to(user)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(
        f"[progress-update] user={user_id} updates={[type(u).__name__ for u in updates]}"
    )
    return updated
