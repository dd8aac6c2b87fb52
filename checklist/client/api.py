"""HTTP client for the /api/tasks endpoints."""
import logging
from typing import List

import requests

from checklist.errors import ChecklistError
from checklist.models.task_model import Task

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class ClientError(ChecklistError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class TaskApiClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.error("%s %s failed with status %s", method, url, status)
            raise ClientError(f"{method} {path} failed with status {status}", status_code=status) from exc
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise ClientError(f"{method} {path} failed: {exc}") from exc
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body", method, url)
            raise ClientError(f"{method} {path} returned a non-JSON body") from exc

    def list_tasks(self) -> List[Task]:
        return [Task.from_dict(item) for item in self._request("GET", "/api/tasks")]

    def create_task(self, text: str) -> Task:
        return Task.from_dict(self._request("POST", "/api/tasks", json={"text": text}))

    def set_completed(self, task_id: int, completed: bool) -> Task:
        data = self._request("PUT", f"/api/tasks/{task_id}", json={"completed": completed})
        return Task.from_dict(data)

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")
