from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import time
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config['CORS_ORIGINS']

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from arcade.services.games import GameEngine, GameError, SqlSessionStore, StoreConflict, StoreError, default_games
    flask_app.extensions['game_engine'] = GameEngine(SqlSessionStore(db), default_games())

    from arcade.routes import main
    flask_app.register_blueprint(main)

    from arcade.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Handlers bind to the module-level socketio instance
    from arcade.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @flask_app.errorhandler(GameError)
    def handle_game_error(exc):
        if isinstance(exc, StoreError) and not isinstance(exc, StoreConflict):
            flask_app.logger.exception(f"[games] {exc.kind}: {exc.message}")
        else:
            flask_app.logger.warning(f"[games] {exc.kind}: {exc.message}")
        return jsonify(exc.to_dict()), exc.status_code

    from arcade.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            for name in ['testuser1', 'testuser2', 'testuser3']:
                user = User(username=name)
                user.set_password('password')
                db.session.add(user)

            db.session.commit()
            print('Database has been reset and seeded!')

    @click.command('purge-sessions')
    @click.option('--days', type=click.IntRange(min=0), default=None,
                  help='Age in days; defaults to SESSION_RETENTION_DAYS.')
    def purge_sessions_command(days):
        """Deletes unfinished game sessions older than the retention window."""
        if days is None:
            days = flask_app.config['SESSION_RETENTION_DAYS']
        with flask_app.app_context():
            deleted = SqlSessionStore(db).purge_incomplete(time.time() - days * 86400)
        flask_app.logger.info(f"[purge] removed={deleted} days={days}")
        print(f'Purged {deleted} unfinished sessions older than {days} days.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(purge_sessions_command)

    return flask_app
