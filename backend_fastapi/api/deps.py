from core.application.create_task import CreateTaskUseCase
from infrastructure.container import get_create_task_use_case

from core.application.update_task import UpdateTaskUseCase
from infrastructure.container import get_update_task_use_case

from core.application.delete_task import DeleteTaskUseCase
from infrastructure.container import get_delete_task_use_case

from core.application.list_tasks import ListTasksUseCase
from infrastructure.container import get_list_tasks_use_case

from core.domain.ports.token_verifier import TokenVerifier
from infrastructure.container import get_token_verifier


def create_task_use_case() -> CreateTaskUseCase:
    return get_create_task_use_case()


def update_task_use_case() -> UpdateTaskUseCase:
    return get_update_task_use_case()


def delete_task_use_case() -> DeleteTaskUseCase:
    return get_delete_task_use_case()


def list_tasks_use_case() -> ListTasksUseCase:
    return get_list_tasks_use_case()


def token_verifier() -> TokenVerifier:
    return get_token_verifier()
