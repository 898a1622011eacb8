"""
Pomotodo API client for Task Bridge.
"""

import logging
from typing import Optional

import httpx

from .config import Config
from .exceptions import PomotodoAPIError
from .models import PomodoroTask

logger = logging.getLogger(__name__)


class PomotodoClient:
    """Pomotodo API client."""

    def __init__(self, config: Config, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = config.pomotodo_base_url.rstrip('/')
        self.api_token = config.pomodoro_token
        self.timeout = config.timeout
        self.transport = transport

    def _get_headers(self) -> dict:
        """Get request headers."""
        return {
            'Authorization': f'token {self.api_token}',
        }

    def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_data: Optional[dict] = None,
    ) -> httpx.Response:
        """Make a request to the Pomotodo API. Status codes are left to the caller."""
        url = f"{self.base_url}/{endpoint}"

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            return client.request(
                method,
                url,
                headers=self._get_headers(),
                params=params,
                json=json_data,
            )

    # ==========================================================================
    # Todos
    # ==========================================================================

    def get_todos(self, completed: bool) -> list[PomodoroTask]:
        """
        List active or completed todos.

        Any transport, HTTP or parse failure raises PomotodoAPIError.
        """
        params = {'completed': 'true' if completed else 'false'}

        try:
            response = self._send('GET', 'todos', params=params)
            response.raise_for_status()
            todos = [PomodoroTask.from_api(t) for t in response.json()]
        except httpx.HTTPError as e:
            raise PomotodoAPIError(f"Pomotodo todo listing failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise PomotodoAPIError(f"Unexpected Pomotodo todo response: {e!r}") from e

        logger.info(f"Fetched {len(todos)} {'completed' if completed else 'active'} Pomotodo todos")
        return todos

    def create_todo(self, description: str) -> int:
        """Create a pinned todo. Returns the HTTP status code."""
        data = {
            'description': description,
            'pin': True,
        }
        response = self._send('POST', 'todos', json_data=data)
        return response.status_code

    def delete_todo(self, todo_id: str) -> int:
        """Delete a todo. Returns the HTTP status code."""
        response = self._send('DELETE', f'todos/{todo_id}')
        return response.status_code
