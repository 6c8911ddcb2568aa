"""
Taskboard API Client - Thin httpx wrapper over the REST surface

The credential is passed explicitly to every authenticated call; the client
holds no token of its own, so one client can serve several users.

Usage:
    with httpx.Client(base_url="http://localhost:8000") as http:
        client = TaskboardClient(http)
        auth = client.login("alice@taskboard.io", "Secret123")
        creds = Credentials(auth["token"])
        client.create_task(creds, {"title": "Write docs", "assignedUser": "alice"})
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import httpx
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    token: str

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class ApiError(Exception):
    """Unsuccessful API response, carrying the envelope's message and field errors"""

    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class TaskboardClient:
    """
    Args:
        http: Configured httpx.Client (base_url pointing at the API host)
        prefix: Path prefix of the API routers
    """

    def __init__(self, http: httpx.Client, prefix: str = "/api"):
        self.http = http
        self.prefix = prefix

    def _request(
        self,
        method: str,
        path: str,
        credentials: Optional[Credentials] = None,
        **kwargs,
    ) -> Optional[Dict[str, Any]]:
        headers = credentials.headers() if credentials else {}
        response = self.http.request(method, f"{self.prefix}{path}", headers=headers, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.is_error or not body.get("success", False):
            message = body.get("message") or response.reason_phrase or "An error occurred"
            logger.debug(f"API {method} {path} failed: {response.status_code} {message}")
            raise ApiError(response.status_code, message, body.get("errors"))
        return body.get("data")

    # Auth
    def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/auth/register", json={"username": username, "email": email, "password": password}
        )

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def list_users(self, credentials: Credentials) -> List[Dict[str, Any]]:
        return self._request("GET", "/auth/users", credentials)["users"]

    # Tasks
    def list_tasks(self, credentials: Credentials, **params: Any) -> Dict[str, Any]:
        """Returns {"tasks": [...], "pagination": {...}}; params use the API's camelCase names"""
        query = {key: value for key, value in params.items() if value is not None}
        return self._request("GET", "/tasks", credentials, params=query)

    def get_task(self, credentials: Credentials, task_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}", credentials)["task"]

    def create_task(self, credentials: Credentials, task: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/tasks", credentials, json=task)["task"]

    def update_task(self, credentials: Credentials, task_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", credentials, json=changes)["task"]

    def change_status(self, credentials: Credentials, task_id: str, status: str) -> Dict[str, Any]:
        return self._request("PATCH", f"/tasks/{task_id}/status", credentials, json={"status": status})["task"]

    def delete_task(self, credentials: Credentials, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}", credentials)

    def get_stats(self, credentials: Credentials) -> Dict[str, Any]:
        return self._request("GET", "/tasks/stats", credentials)["stats"]
