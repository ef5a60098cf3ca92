from arcade_backend import db, bcrypt
from flask_login import UserMixin
from datetime import datetime, timezone
import json

DIFFICULTIES = ('easy', 'normal', 'hard')
DEFAULT_UNLOCKED_LEVELS = [1]


def utcnow():
    """Naive UTC timestamp; all stored datetimes are naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value):
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).isoformat()


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=True)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    # Running totals, maintained by score submission
    total_games = db.Column(db.Integer, default=0, nullable=False)
    total_score = db.Column(db.Integer, default=0, nullable=False)
    best_score = db.Column(db.Integer, default=0, nullable=False, index=True)
    # Game data synced with the device
    currency = db.Column(db.Integer, default=0, nullable=False)
    lives = db.Column(db.Integer, default=0, nullable=False)
    unlocked_levels_json = db.Column('unlocked_levels', db.Text, nullable=True)  # JSON-encoded sorted list

    scores = db.relationship('Score', back_populates='user', lazy='dynamic', passive_deletes=True)

    @property
    def unlocked_levels(self):
        if not self.unlocked_levels_json:
            return list(DEFAULT_UNLOCKED_LEVELS)
        return json.loads(self.unlocked_levels_json)

    @unlocked_levels.setter
    def unlocked_levels(self, levels):
        self.unlocked_levels_json = json.dumps(sorted(set(int(level) for level in levels)))

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def game_data(self):
        return {
            'currency': self.currency or 0,
            'lives': self.lives or 0,
            'unlocked_levels': self.unlocked_levels,
            'best_score': self.best_score or 0,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'total_games': self.total_games or 0,
            'total_score': self.total_score or 0,
            'best_score': self.best_score or 0,
            'created_at': _isoformat(self.created_at),
        }


class Score(db.Model):
    __tablename__ = 'score'
    __table_args__ = (
        db.Index('ix_score_user_score', 'user_id', 'score'),
        db.Index('ix_score_score_created', 'score', 'created_at'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    level = db.Column(db.Integer, nullable=False)
    duration_seconds = db.Column(db.Integer, nullable=False)
    difficulty = db.Column(db.String(16), nullable=False, default='normal', index=True)
    stats_json = db.Column('stats', db.Text, nullable=True)  # opaque JSON mapping
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    user = db.relationship('User', back_populates='scores')

    @property
    def stats(self):
        if self.stats_json is None:
            return None
        return json.loads(self.stats_json)

    @stats.setter
    def stats(self, value):
        self.stats_json = json.dumps(value) if value is not None else None

    def to_dict(self, include_user=False):
        payload = {
            'id': self.id,
            'user_id': self.user_id,
            'score': self.score,
            'level': self.level,
            'duration_seconds': self.duration_seconds,
            'difficulty': self.difficulty,
            'stats': self.stats,
            'created_at': _isoformat(self.created_at),
        }
        if include_user and self.user is not None:
            payload['user'] = {'id': self.user.id, 'username': self.user.username}
        return payload
