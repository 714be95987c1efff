import logging
from typing import Any

import httpx
from pydantic import ValidationError

from mobile_client.errors import ApiError
from mobile_client.models import Task, TaskInput, TaskUpdate
from mobile_client.session import AuthSession

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error, please try again"
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from server"


def _error_message(response: httpx.Response) -> str:
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    if isinstance(message, str) and message:
        return message
    return f"Request failed with status code {response.status_code}"


class TaskApiGateway:
    """
    HTTP access to the task collection of the API.

    Each request asks the session for a credential right before it is sent,
    so an expiring token is refreshed instead of reused.
    """

    def __init__(
        self,
        base_url: str,
        session: AuthSession,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._client = client or httpx.AsyncClient()

    async def list_tasks(self) -> list[Task]:
        response = await self._request("GET", "/tasks")
        return self._parse(response, many=True)

    async def create_task(self, task_input: TaskInput) -> Task:
        response = await self._request("POST", "/tasks", json=task_input.to_json())
        return self._parse(response)

    async def update_task(self, task_id: str, update: TaskUpdate) -> Task:
        response = await self._request("PATCH", f"/tasks/{task_id}", json=update.to_json())
        return self._parse(response)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        headers = {}
        token = await self._session.get_id_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.request(
                method, f"{self._base_url}{path}", json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(NETWORK_ERROR_MESSAGE) from e

        if response.is_error:
            message = _error_message(response)
            logger.info(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code)
        return response

    @staticmethod
    def _parse(response: httpx.Response, many: bool = False) -> Any:
        # A 2xx body that is not a task (a proxy page, a truncated payload)
        # is reported like any other failed call.
        try:
            body = response.json()
            if many:
                if not isinstance(body, list):
                    raise ValueError("expected a list of tasks")
                return [Task.model_validate(item) for item in body]
            return Task.model_validate(body)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Unreadable task payload ({response.status_code}): {e}")
            raise ApiError(UNEXPECTED_RESPONSE_MESSAGE, response.status_code) from e
