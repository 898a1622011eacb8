"""
Configuration management for Task Bridge module.

Loads config.json plus environment variables and provides typed config access.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# Find project root and load .env
PROJECT_ROOT = Path(__file__).parent.parent.parent
load_dotenv(PROJECT_ROOT / '.env')

DEFAULT_CONFIG_FILE = 'config.json'

# config.json key -> Config field
FILE_KEYS = {
    'pomodoroToken': 'pomodoro_token',
    'notionToken': 'notion_token',
    'notionDatabase': 'notion_database',
    'taskPrefix': 'task_prefix',
}

# Environment variable -> Config field
ENV_KEYS = {
    'POMODORO_API_TOKEN': 'pomodoro_token',
    'NOTION_API_TOKEN': 'notion_token',
    'NOTION_DATABASE_ID': 'notion_database',
    'TASK_PREFIX': 'task_prefix',
    'NOTION_BASE_URL': 'notion_base_url',
    'NOTION_VERSION': 'notion_version',
    'POMOTODO_BASE_URL': 'pomotodo_base_url',
    'TASK_BRIDGE_TIMEOUT': 'timeout',
    'TASK_BRIDGE_LOG_LEVEL': 'log_level',
    'TASK_BRIDGE_LOG_FILE': 'log_file',
}


@dataclass(frozen=True)
class Config:
    """Task bridge configuration."""

    # Pomotodo
    pomodoro_token: str = ''
    pomotodo_base_url: str = 'https://api.pomotodo.com/1'

    # Notion
    notion_token: str = ''
    notion_database: str = ''
    notion_base_url: str = 'https://api.notion.com/v1'
    notion_version: str = '2021-08-16'

    # Prepended to Notion titles; marks the Pomotodo todos this tool owns
    task_prefix: str = ''

    # HTTP timeout (seconds)
    timeout: int = 30

    # Logging (set TASK_BRIDGE_LOG_LEVEL=DEBUG for verbose output)
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> 'Config':
        """
        Load configuration from a JSON file and environment variables.

        Environment variables override file values. A missing file is not an
        error; the environment alone may carry every setting.
        """
        if config_path is None:
            config_path = os.getenv('TASK_BRIDGE_CONFIG', DEFAULT_CONFIG_FILE)
        config_path = Path(config_path)

        values = {}
        if config_path.exists():
            values.update(_read_config_file(config_path))
        else:
            logger.debug(f"No config file at {config_path}, using environment only")

        for env_key, field_name in ENV_KEYS.items():
            value = os.getenv(env_key)
            # Set-but-empty variables never override the file
            if value:
                values[field_name] = value

        if 'timeout' in values:
            try:
                values['timeout'] = int(values['timeout'])
            except (TypeError, ValueError):
                raise ConfigError(f"Invalid timeout: {values['timeout']!r}")

        if 'log_level' in values:
            values['log_level'] = str(values['log_level']).upper()

        return cls(**values)

    def validate(self) -> list[str]:
        """Validate required configuration. Returns list of errors."""
        errors = []

        if not self.pomodoro_token:
            errors.append("POMODORO_API_TOKEN (pomodoroToken) is required")

        if not self.notion_token:
            errors.append("NOTION_API_TOKEN (notionToken) is required")

        if not self.notion_database:
            errors.append("NOTION_DATABASE_ID (notionDatabase) is required")

        if not self.task_prefix:
            logger.warning("TASK_PREFIX is empty: every Pomotodo todo will be treated as managed")

        return errors

    def masked(self) -> dict:
        """Settings as a dict with secrets hidden, for display."""
        def mask(value: str) -> str:
            return f"{'*' * 8} (set)" if value else 'NOT SET'

        return {
            'pomodoro_token': mask(self.pomodoro_token),
            'pomotodo_base_url': self.pomotodo_base_url,
            'notion_token': mask(self.notion_token),
            'notion_database': self.notion_database or 'NOT SET',
            'notion_base_url': self.notion_base_url,
            'notion_version': self.notion_version,
            'task_prefix': repr(self.task_prefix),
            'timeout': self.timeout,
            'log_level': self.log_level,
            'log_file': self.log_file or '-',
        }


def _read_config_file(path: Path) -> dict:
    """Read the JSON config file and map its keys onto Config fields."""
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    values = {}
    for file_key, field_name in FILE_KEYS.items():
        if file_key in data:
            values[field_name] = str(data[file_key])
    return values
