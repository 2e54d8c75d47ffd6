import logging
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Honour X-Forwarded-Proto/Host/Port when served behind a reverse proxy
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "0") == "1"

    # Socket.IO worker model; empty picks a platform default in create_app
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()

    # Game
    QUESTIONS_FILE = os.environ.get("QUESTIONS_FILE", "").strip()
    MAX_CREATE_ATTEMPTS = int(os.environ.get("MAX_CREATE_ATTEMPTS", "10"))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.environ.get("LOG_FILE", "")  # empty = stdout only


def setup_logging(config=Config) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
