import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend_fastapi.api.auth import current_owner
from backend_fastapi.api.deps import (
    create_task_use_case,
    delete_task_use_case,
    list_tasks_use_case,
    update_task_use_case,
)
from backend_fastapi.api.schemas import (
    MessageResponse,
    TaskCreateRequest,
    TaskPatchRequest,
    TaskResponse,
)
from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.errors import TaskNotFoundError, TaskValidationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={
        401: {"model": MessageResponse},
        500: {"model": MessageResponse},
    },
)


@router.get(
    "",
    response_model=list[TaskResponse],
    summary="List the caller's tasks",
)
def list_tasks(
    owner_id: str = Depends(current_owner),
    use_case: ListTasksUseCase = Depends(list_tasks_use_case),
) -> list[TaskResponse]:
    """
    Returns every task owned by the authenticated caller.
    """
    try:
        tasks = use_case.execute(owner_id)
    except Exception:
        logger.exception(f"Failed to fetch tasks for {owner_id}")
        raise HTTPException(status_code=500, detail="Failed to fetch tasks")
    return [TaskResponse.from_domain(task) for task in tasks]


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={400: {"model": MessageResponse}},
)
def create_task(
    body: TaskCreateRequest,
    owner_id: str = Depends(current_owner),
    use_case: CreateTaskUseCase = Depends(create_task_use_case),
) -> TaskResponse:
    """
    Creates a task owned by the authenticated caller.

    - **title**: required, non-blank.
    - **description**: optional free text.
    - **deadline**: optional ISO-8601 date-time.
    - **priority**: low, medium (default) or high.
    - **category**: optional free text.
    """
    try:
        task = use_case.execute(owner_id, body.to_command())
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Failed to create task for {owner_id}")
        raise HTTPException(status_code=500, detail="Failed to create task")
    return TaskResponse.from_domain(task)


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Partially update a task",
    responses={400: {"model": MessageResponse}, 404: {"model": MessageResponse}},
)
def update_task(
    task_id: str,
    body: TaskPatchRequest,
    owner_id: str = Depends(current_owner),
    use_case: UpdateTaskUseCase = Depends(update_task_use_case),
) -> TaskResponse:
    """
    Applies the fields present in the body and returns the stored task.

    - **task_id**: id of the task to modify.
    - Any subset of title, description, deadline, priority, category, completed.
    """
    try:
        task = use_case.execute(owner_id, task_id, body.to_patch())
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Failed to update task {task_id}")
        raise HTTPException(status_code=500, detail="Failed to update task")
    return TaskResponse.from_domain(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={404: {"model": MessageResponse}},
)
def delete_task(
    task_id: str,
    owner_id: str = Depends(current_owner),
    use_case: DeleteTaskUseCase = Depends(delete_task_use_case),
) -> None:
    """
    Permanently removes a task.

    - **task_id**: id of the task to delete.
    """
    try:
        use_case.execute(owner_id, task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except Exception:
        logger.exception(f"Failed to delete task {task_id}")
        raise HTTPException(status_code=500, detail="Failed to delete task")
