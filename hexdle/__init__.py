from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from hexdle.routes import main
    flask_app.register_blueprint(main)

    from hexdle.api.rooms import rooms_api
    flask_app.register_blueprint(rooms_api, url_prefix='/api')

    # Each app owns its room registry; socket handlers reach it through
    # flask_app.extensions['match_coordinator']
    from hexdle.services.rooms import MatchCoordinator, RoomRegistry
    from hexdle.socketio_events import SocketIONotifier, register_socketio_handlers
    flask_app.extensions['match_coordinator'] = MatchCoordinator(
        RoomRegistry(),
        SocketIONotifier(socketio),
        logger=flask_app.logger,
    )
    register_socketio_handlers()

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the match history tables."""
        from hexdle import models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
