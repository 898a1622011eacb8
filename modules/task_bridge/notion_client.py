"""
Notion API client for Task Bridge.

Reads in-progress tasks from a database and marks pages completed.
"""

import logging
from typing import Optional

import httpx

from .config import Config
from .exceptions import NotionAPIError
from .models import WorkspaceTask

logger = logging.getLogger(__name__)

STATUS_PROPERTY = 'Status'
STATUS_IN_PROGRESS = 'In progress'
STATUS_COMPLETED = 'Completed'


class NotionClient:
    """Notion API client."""

    def __init__(self, config: Config, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = config.notion_base_url.rstrip('/')
        self.api_token = config.notion_token
        self.database_id = config.notion_database
        self.notion_version = config.notion_version
        self.timeout = config.timeout
        self.transport = transport

    def _get_headers(self) -> dict:
        """Get request headers."""
        return {
            'Authorization': f'Bearer {self.api_token}',
            'Content-Type': 'application/json',
            'Notion-Version': self.notion_version,
        }

    def _send(self, method: str, endpoint: str, json_data: Optional[dict] = None) -> httpx.Response:
        """Make a request to the Notion API. Status codes are left to the caller."""
        url = f"{self.base_url}/{endpoint}"

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            return client.request(
                method,
                url,
                headers=self._get_headers(),
                json=json_data,
            )

    # ==========================================================================
    # Tasks
    # ==========================================================================

    def get_in_progress_tasks(self, prefix: str = '') -> list[WorkspaceTask]:
        """
        Query the database for tasks whose Status is "In progress".

        Titles are returned with ``prefix`` prepended. Records with an empty
        title are skipped. Any transport, HTTP or parse failure raises
        NotionAPIError.
        """
        query = {
            'filter': {
                'property': STATUS_PROPERTY,
                'select': {'equals': STATUS_IN_PROGRESS},
            }
        }

        try:
            response = self._send('POST', f'databases/{self.database_id}/query', json_data=query)
            response.raise_for_status()
            results = response.json()['results']
        except httpx.HTTPError as e:
            raise NotionAPIError(f"Notion database query failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise NotionAPIError(f"Unexpected Notion query response: {e!r}") from e

        tasks = []
        for record in results:
            try:
                task = WorkspaceTask.from_api(record, prefix)
            except (KeyError, IndexError, TypeError) as e:
                raise NotionAPIError(f"Malformed Notion record: {e!r}") from e

            if task is None:
                logger.debug(f"Skipping Notion page {record.get('id')} - empty title")
                continue
            tasks.append(task)

        logger.info(f"Fetched {len(tasks)} in-progress Notion tasks")
        return tasks

    def mark_task_completed(self, page_id: str) -> int:
        """Set a page's Status to Completed. Returns the HTTP status code."""
        update = {
            'properties': {
                STATUS_PROPERTY: {'select': {'name': STATUS_COMPLETED}},
            }
        }
        response = self._send('PATCH', f'pages/{page_id}', json_data=update)
        return response.status_code
