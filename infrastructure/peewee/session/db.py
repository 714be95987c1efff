import logging
import os

from playhouse.db_url import connect

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///todo.db")

# Only the scheme is logged; the URL may carry credentials.
logger.info(f"Task table backend: {DATABASE_URL.split(':', 1)[0]}")
db = connect(DATABASE_URL)


def get_db():
    return db
