"""
pytest configuration and fixtures for Task Bridge tests.
"""
import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.task_bridge.config import Config, ENV_KEYS


@pytest.fixture
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every task bridge environment variable."""
    for key in list(ENV_KEYS) + ['TASK_BRIDGE_CONFIG']:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config():
    """Config pointing at the real service URLs with test credentials."""
    return Config(
        pomodoro_token='pomo-token',
        notion_token='notion-token',
        notion_database='db123',
        task_prefix='[P] ',
        timeout=5,
    )


def notion_page(page_id, name):
    """Notion query result record; ``name=None`` gives an empty title."""
    title = [] if name is None else [{'type': 'text', 'plain_text': name}]
    return {
        'object': 'page',
        'id': page_id,
        'properties': {
            'Name': {'id': 'title', 'type': 'title', 'title': title},
            'Status': {'type': 'select', 'select': {'name': 'In progress'}},
        },
    }


def pomotodo_todo(uuid, description, completed=False):
    """Pomotodo todo as returned by GET /todos."""
    return {
        'uuid': uuid,
        'description': description,
        'completed': completed,
        'pin': False,
    }


@pytest.fixture
def sample_notion_response():
    """Query response with two tasks and one untitled page."""
    return {
        'object': 'list',
        'results': [
            notion_page('page-1', 'Write report'),
            notion_page('page-2', 'Review PR'),
            notion_page('page-3', None),
        ],
        'has_more': False,
    }


@pytest.fixture
def sample_todos():
    """Active and completed todo listings, keyed by the completed flag."""
    return {
        False: [
            pomotodo_todo('todo-1', '[P] Write report'),
            pomotodo_todo('todo-2', 'Buy milk'),
            pomotodo_todo('todo-3', '[P] Stale task'),
        ],
        True: [
            pomotodo_todo('todo-4', '[P] Review PR', completed=True),
        ],
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler):
        self.requests = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def request_json(request):
    """Decode a captured request body."""
    return json.loads(request.content)
