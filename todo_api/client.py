"""HTTP client for the task API, offering the operations the web UI uses."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import API_BASE_URL
from .validation import validate_create

logger = logging.getLogger(__name__)

_UPDATE_KEYS = {
    "title": "title",
    "description": "description",
    "due_date": "dueDate",
    "is_done": "isDone",
}


class TaskApiError(Exception):
    """Non-2xx response from the API; ``payload`` is the decoded error body."""

    def __init__(self, status_code: int, payload: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(f"{status_code}: {self.payload.get('message', 'request failed')}")


class TaskClient:
    def __init__(self, http: Optional[httpx.Client] = None, base_url: str = API_BASE_URL):
        self.http = http or httpx.Client(base_url=base_url, timeout=10.0)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "TaskClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = self.http.request(method, url, **kwargs)
        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = {"message": response.text}
            logger.warning("%s %s failed with %s: %s", method, url, response.status_code, payload)
            raise TaskApiError(response.status_code, payload)
        return response

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks").json()

    def get_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}").json()

    def create_task(self, title: str, description: str = "", due_date: str = "") -> Dict[str, Any]:
        """Create a task, checking the input locally first.

        Blank description/due date are left out of the request. Raises
        ``todo_api.errors.ValidationError`` without calling the API when the
        input would be rejected.
        """
        validate_create({"title": title, "description": description, "dueDate": due_date}).unwrap()

        body: Dict[str, Any] = {"title": title.strip()}
        if description and description.strip():
            body["description"] = description
        if due_date and due_date.strip():
            body["dueDate"] = due_date
        return self._request("POST", "/tasks", json=body).json()

    def update_task(self, task_id: int, **changes: Any) -> Dict[str, Any]:
        """Send only the given fields (``title``, ``description``, ``due_date``, ``is_done``)."""
        unknown = set(changes) - set(_UPDATE_KEYS)
        if unknown:
            raise TypeError(f"Unknown task fields: {', '.join(sorted(unknown))}")
        body = {_UPDATE_KEYS[name]: value for name, value in changes.items()}
        return self._request("PUT", f"/tasks/{task_id}", json=body).json()

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    def toggle_task(self, task_id: int) -> Dict[str, Any]:
        task = self.get_task(task_id)
        return self.update_task(task_id, is_done=not task["isDone"])
