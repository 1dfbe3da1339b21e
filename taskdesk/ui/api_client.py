"""
Task API client — async httpx wrapper used by the Reflex UI state.

Every method returns the decoded JSON body; non-2xx answers raise
``TaskdeskApiError`` carrying the server's ``error`` text.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from taskdesk.engine.errors import TaskdeskApiError

logger = logging.getLogger("taskdesk.ui.api_client")


class TaskApiClient:
    """
    Usage:
        client = TaskApiClient("http://localhost:3001/api")
        data = await client.get_tasks({"status": "To Do", "sort": "due_date"})
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
    ) -> Dict[str, Any]:
        url = f"{self._base_url}{endpoint}"
        logger.debug("API request %s %s", method, url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error("API request %s %s failed: %s", method, url, e)
            raise TaskdeskApiError("Could not reach the task service", url=url) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = "Request failed"
            if isinstance(data, dict):
                message = data.get("error") or data.get("message") or message
            details = data.get("details") if isinstance(data, dict) else None
            logger.warning("API error %s on %s %s: %s", response.status_code, method, url, message)
            raise TaskdeskApiError(message, status_code=response.status_code, details=details)

        return data if isinstance(data, dict) else {}

    async def get_tasks(self, filters: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """GET /tasks — only non-empty filter values are sent."""
        params = {k: v for k, v in (filters or {}).items() if k in ("status", "sort", "order") and v}
        return await self.request("GET", "/tasks", params=params or None)

    async def get_task(self, task_id: int) -> Dict[str, Any]:
        return await self.request("GET", f"/tasks/{task_id}")

    async def create_task(self, task_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", "/tasks", json=task_data)

    async def update_task(self, task_id: int, updates: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", f"/tasks/{task_id}", json=updates)

    async def delete_task(self, task_id: int) -> Dict[str, Any]:
        return await self.request("DELETE", f"/tasks/{task_id}")
