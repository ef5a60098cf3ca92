from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from datetime import timedelta
import random
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=flask_app.config.get('CORS_ORIGINS', []))

    # Import and register blueprints here
    from arcade_backend.main import main
    flask_app.register_blueprint(main)

    from arcade_backend.auth import auth
    flask_app.register_blueprint(auth, url_prefix='/api/auth')

    from arcade_backend.api.game_data import game_data
    flask_app.register_blueprint(game_data, url_prefix='/api/game-data')

    from arcade_backend.api.scores import scores
    flask_app.register_blueprint(scores, url_prefix='/api/scores')

    from arcade_backend.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api')

    from arcade_backend.api.users import users
    flask_app.register_blueprint(users, url_prefix='/api/user')

    # Service errors carry their own status and JSON envelope
    from arcade_backend.services import ArcadeError

    @flask_app.errorhandler(ArcadeError)
    def handle_arcade_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    # Flask-Login user loader
    from arcade_backend.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Authentication required'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from arcade_backend.models import Score, DIFFICULTIES, utcnow
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users, each with a spread of past sessions
            seeds = [('testuser1', 2500), ('testuser2', 3200), ('testuser3', 1800)]
            for username, best in seeds:
                user = User(username=username, email=f'{username}@example.com')
                user.set_password('password')
                db.session.add(user)
                db.session.flush()
                for i, (fraction, level, duration) in enumerate(
                        [(1.0, 15, 450), (0.8, 12, 380), (0.6, 9, 280), (0.4, 6, 180), (0.2, 3, 90)]):
                    score = round(best * fraction)
                    entry = Score(
                        user_id=user.id,
                        score=score,
                        level=level,
                        duration_seconds=duration,
                        difficulty=DIFFICULTIES[i % len(DIFFICULTIES)],
                        created_at=utcnow() - timedelta(days=random.randint(1, 30)),
                    )
                    entry.stats = {'food_eaten': score // 10, 'power_ups_used': random.randint(2, 8)}
                    db.session.add(entry)
                    user.total_games = (user.total_games or 0) + 1
                    user.total_score = (user.total_score or 0) + score
                user.best_score = best

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
