from __future__ import annotations

import logging
import threading

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from tableorder.infrastructure.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine shared by every repository.

    The pool never grows past ``pool_max_size``; a checkout waits at most
    ``pool_timeout_seconds`` before raising ``sqlalchemy.exc.TimeoutError``.
    """
    url = settings.sqlalchemy_url()
    connect_args: dict[str, object] = {}
    if url.get_backend_name() == "postgresql":
        connect_args["connect_timeout"] = settings.connect_timeout_seconds
        if settings.statement_timeout_ms:
            connect_args["options"] = f"-c statement_timeout={settings.statement_timeout_ms}"

    return create_engine(
        url,
        pool_size=settings.pool_max_size,
        max_overflow=0,
        pool_timeout=settings.pool_timeout_seconds,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


_engine: Engine | None = None
_engine_lock = threading.Lock()


def get_engine() -> Engine:
    """Return the process-wide engine, building it on first use."""
    global _engine
    if _engine is None:
        with _engine_lock:
            # Concurrent first requests must not each build their own pool.
            if _engine is None:
                _engine = build_engine(get_settings())
    return _engine


def dispose_engine() -> None:
    global _engine
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None


def ping_database() -> bool:
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("database_ping_failed", exc_info=True)
        return False
