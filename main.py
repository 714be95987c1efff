import logging
import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def run() -> None:
    """Serves the To-Do API with uvicorn, configured from the environment."""
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "5000"))
    reload = _as_bool(os.getenv("RELOAD", "false"))
    log_level = os.getenv("LOG_LEVEL", "info")

    logging.basicConfig(level=log_level.upper())
    logger.info(
        f"Starting To-Do API at http://{host}:{port} "
        f"(orm={os.getenv('ORM', 'peewee')}, auth={os.getenv('AUTH_MODE', 'firebase')}, reload={reload})"
    )

    uvicorn.run(
        "backend_fastapi.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    run()
