import logging
import os
from functools import lru_cache

from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from core.domain.ports.token_verifier import TokenVerifier
from infrastructure.auth.jwt_verifier import FirebaseTokenVerifier, JwtTokenVerifier
from infrastructure.mongo.repository.task_repository import MongoTaskRepository
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository

logger = logging.getLogger(__name__)


def get_task_repository() -> TaskRepository:
    orm = os.getenv("ORM", "peewee").lower()

    if orm == "mongo":
        logger.debug("Task repository: mongo")
        return MongoTaskRepository()
    logger.debug("Task repository: peewee")
    return PeeweeTaskRepository()


@lru_cache(maxsize=1)
def get_token_verifier() -> TokenVerifier:
    # Cached so the JWKS client keeps its fetched signing keys between requests.
    mode = os.getenv("AUTH_MODE", "firebase").lower()
    logger.info(f"Auth mode: {mode}")

    if mode == "firebase":
        return FirebaseTokenVerifier(project_id=os.getenv("FIREBASE_PROJECT_ID", ""))
    return JwtTokenVerifier(
        secret=os.getenv("JWT_SECRET", ""),
        algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
    )


def get_create_task_use_case() -> CreateTaskUseCase:
    return CreateTaskUseCase(repository=get_task_repository())


def get_update_task_use_case() -> UpdateTaskUseCase:
    return UpdateTaskUseCase(repository=get_task_repository())


def get_delete_task_use_case() -> DeleteTaskUseCase:
    return DeleteTaskUseCase(repository=get_task_repository())


def get_list_tasks_use_case() -> ListTasksUseCase:
    return ListTasksUseCase(repository=get_task_repository())
