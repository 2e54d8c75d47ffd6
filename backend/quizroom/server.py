from __future__ import annotations

import logging
import sys

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.engine import GameEngine
from .game.questions import default_questions, file_question_source
from .game.registry import RoomRegistry
from .realtime.handlers import register_socketio_handlers
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp

logger = logging.getLogger(__name__)


def create_engine(config) -> GameEngine:
    questions_file = getattr(config, "QUESTIONS_FILE", "")
    question_source = file_question_source(questions_file) if questions_file else default_questions

    registry = RoomRegistry(
        question_source=question_source,
        max_create_attempts=getattr(config, "MAX_CREATE_ATTEMPTS", 10),
    )
    return GameEngine(registry)


def create_app(config_class=Config) -> tuple[Flask, SocketIO]:
    app = Flask(__name__)
    app.config.from_object(config_class)

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    async_mode = app.config.get("SOCKETIO_ASYNC_MODE", "")
    if not async_mode:
        # Default choice:
        # - Windows: threading (eventlet has known compatibility issues on newer Python)
        # - Python >= 3.13: threading (safer default)
        # - Otherwise: eventlet
        if sys.platform.startswith("win") or sys.version_info >= (3, 13):
            async_mode = "threading"
        else:
            async_mode = "eventlet"

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=async_mode,
    )

    engine = create_engine(config_class)
    app.extensions["quizroom"] = engine

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")

    register_socketio_handlers(socketio, engine)

    logger.debug("App created (async_mode=%s)", async_mode)
    return app, socketio
