from pathlib import Path

from dotenv import load_dotenv

# Config reads the environment at import time, so load .env first.
load_dotenv(Path(__file__).resolve().parents[1] / ".env")

try:
    from backend.quizroom.config import Config, setup_logging
    from backend.quizroom.server import create_app
except ImportError:  # pragma: no cover
    from quizroom.config import Config, setup_logging
    from quizroom.server import create_app

setup_logging(Config)
app, socketio = create_app()
