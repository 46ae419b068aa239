from typing import Callable

import httpx

from taskboard.schemas.project import Project
from taskboard.schemas.task import Task, TaskCreate, TaskUpdate
from taskboard.schemas.user import Token


class ApiRequestError(Exception):
    """A Resource API call failed; ``message`` is what the server said, if anything."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ApiClient:
    """
    Thin async wrapper over the Resource API used by the board.

    ``signup`` and ``login`` store the token they receive.

    Every request carries the bearer token. A 401 anywhere means the session
    is gone: the token is dropped and ``on_unauthorized`` runs (the caller's
    forced-logout hook) before the error is raised.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self.token = token
        self.on_unauthorized = on_unauthorized
        self._http = http or httpx.AsyncClient(base_url=base_url, transport=transport)

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, json: dict | None = None):
        try:
            response = await self._http.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            raise ApiRequestError(0, f"Network error: {e}") from e

        if response.status_code == 401:
            self.token = None
            if self.on_unauthorized:
                self.on_unauthorized()

        if response.is_error:
            raise ApiRequestError(response.status_code, _error_message(response))
        return response.json()

    # ── Session ─────────────────────────────────────────

    async def signup(self, name: str, email: str, password: str) -> Token:
        data = await self._request(
            "POST", "/auth/signup", json={"name": name, "email": email, "password": password}
        )
        return self._start_session(data)

    async def login(self, email: str, password: str) -> Token:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._start_session(data)

    def _start_session(self, data: dict) -> Token:
        session = Token.model_validate(data)
        self.token = session.token
        return session

    # ── Projects and tasks ──────────────────────────────

    async def list_projects(self) -> list[Project]:
        data = await self._request("GET", "/projects")
        return [Project.model_validate(item) for item in data]

    async def list_tasks(self, project_id: str) -> list[Task]:
        data = await self._request("GET", f"/projects/{project_id}/tasks")
        return [Task.model_validate(item) for item in data]

    async def create_task(self, project_id: str, draft: TaskCreate) -> Task:
        data = await self._request(
            "POST", f"/projects/{project_id}/tasks", json=draft.model_dump(mode="json")
        )
        return Task.model_validate(data)

    async def update_task(self, task_id: str, patch: TaskUpdate) -> Task:
        data = await self._request(
            "PUT", f"/tasks/{task_id}", json=patch.model_dump(mode="json", exclude_unset=True)
        )
        return Task.model_validate(data)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or response.reason_phrase)
    return response.reason_phrase
