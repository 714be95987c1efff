import logging

from mobile_client.confirmation import ConfirmationFlow
from mobile_client.errors import LoadError, TaskClientError
from mobile_client.gateway import TaskApiGateway
from mobile_client.identity import Principal
from mobile_client.models import ALL_CATEGORIES, StatusFilter, Task, TaskInput, TaskUpdate
from mobile_client.session import AuthSession

logger = logging.getLogger(__name__)


class TaskStore:
    """
    The signed-in user's tasks plus the filters the list screen applies.

    Every successful write replaces local state with the task the server
    returned; nothing is merged on the client. `load` records failures in
    `error` and never raises; `add`, `update` and `remove` record them and
    re-raise so the calling screen can react.

    The store follows the session: a new principal triggers `load`, signing
    out empties the list and error without any request. A response that
    arrives after the principal changed never touches local state.
    """

    def __init__(self, gateway: TaskApiGateway, session: AuthSession) -> None:
        self._gateway = gateway
        self._session = session
        self._tasks: list[Task] = []
        self.loading = False
        self.error: TaskClientError | None = None
        self.status_filter = StatusFilter.ALL
        self.category_filter = ALL_CATEGORIES
        self.delete_confirmation: ConfirmationFlow[str] = ConfirmationFlow()
        self._detach = session.add_listener(self._on_identity_changed)

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None

    def close(self) -> None:
        """Stops following the session."""
        self._detach()

    async def load(self) -> None:
        principal = self._session.principal
        if principal is None:
            return

        self.loading = True
        self.error = None
        try:
            tasks = await self._gateway.list_tasks()
        except TaskClientError as e:
            if self._session.principal != principal:
                return
            logger.warning(f"Loading tasks failed: {e}")
            self._tasks = []
            self.error = LoadError(e.message or "Failed to load tasks")
        else:
            # A response for a principal that has since signed out is dropped.
            if self._session.principal == principal:
                self._tasks = list(tasks)
        finally:
            self.loading = False

    async def add(self, task_input: TaskInput) -> Task:
        principal = self._session.principal
        try:
            task = await self._gateway.create_task(task_input)
        except TaskClientError as e:
            self._record_failure(principal, e)
            raise
        if self._session.principal == principal:
            self._tasks.append(task)
        return task

    async def update(self, task_id: str, update: TaskUpdate) -> Task:
        principal = self._session.principal
        try:
            updated = await self._gateway.update_task(task_id, update)
        except TaskClientError as e:
            self._record_failure(principal, e)
            raise
        if self._session.principal == principal:
            self._tasks = [updated if task.id == task_id else task for task in self._tasks]
        return updated

    async def remove(self, task_id: str) -> None:
        principal = self._session.principal
        try:
            await self._gateway.delete_task(task_id)
        except TaskClientError as e:
            self._record_failure(principal, e)
            raise
        if self._session.principal == principal:
            self._tasks = [task for task in self._tasks if task.id != task_id]

    async def toggle_completion(self, task_id: str) -> Task | None:
        task = self.find(task_id)
        if task is None:
            return None
        return await self.update(task_id, TaskUpdate(completed=not task.completed))

    def find(self, task_id: str) -> Task | None:
        return next((task for task in self._tasks if task.id == task_id), None)

    def set_status_filter(self, status_filter: StatusFilter | str) -> None:
        self.status_filter = StatusFilter(status_filter)

    def set_category_filter(self, category: str) -> None:
        self.category_filter = category

    def get_filtered(self) -> list[Task]:
        filtered = self._tasks

        if self.status_filter is StatusFilter.COMPLETED:
            filtered = [task for task in filtered if task.completed]
        elif self.status_filter is StatusFilter.PENDING:
            filtered = [task for task in filtered if not task.completed]

        if self.category_filter != ALL_CATEGORIES:
            filtered = [task for task in filtered if task.category == self.category_filter]

        return list(filtered)

    def categories(self) -> list[str]:
        """Distinct categories of the loaded tasks, in first-seen order."""
        seen: dict[str, None] = {}
        for task in self._tasks:
            if task.category:
                seen.setdefault(task.category, None)
        return list(seen)

    def request_delete(self, task_id: str) -> None:
        self.delete_confirmation.request(task_id)

    def cancel_delete(self) -> None:
        self.delete_confirmation.cancel()

    async def confirm_delete(self) -> None:
        task_id = self.delete_confirmation.confirm()
        await self.remove(task_id)

    async def _on_identity_changed(self, principal: Principal | None) -> None:
        if principal is None:
            self._tasks = []
            self.error = None
            self.delete_confirmation.reset()
            return
        await self.load()

    def _record_failure(self, principal: Principal | None, error: TaskClientError) -> None:
        # Results of calls started by a principal that has since signed out are dropped.
        if self._session.principal == principal:
            self.error = error
