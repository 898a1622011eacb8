"""
Task Bridge CLI entry point.

Usage:
    python -m modules.task_bridge                 Run one sync
    python -m modules.task_bridge sync --dry-run  Show what a sync would change
    python -m modules.task_bridge test            Test connections
    python -m modules.task_bridge config          Show effective configuration
"""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import Config
from .sync_engine import SyncEngine

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def configure_logging(config: Config) -> None:
    """Log to stdout, and to a rotating file when TASK_BRIDGE_LOG_FILE is set."""
    handlers = [logging.StreamHandler(sys.stdout)]

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        ))

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def _check_config(config: Config) -> bool:
    errors = config.validate()
    if errors:
        print("\n[CONFIG ERRORS]")
        for err in errors:
            print(f"  - {err}")
        return False
    return True


def cmd_sync(config: Config, dry_run: bool = False) -> int:
    """Run one sync. Read failures are left to propagate."""
    if not _check_config(config):
        return 1

    engine = SyncEngine(config)
    actions = engine.run(dry_run=dry_run)

    if dry_run:
        print("\n[DRY RUN] No changes were made.\n")
        print(actions.describe())

    return 0


def cmd_test(config: Config, dry_run: bool = False) -> int:
    """Test connections to Notion and Pomotodo."""
    print("=" * 60)
    print("Task Bridge Connection Test")
    print("=" * 60)

    if not _check_config(config):
        return 1

    engine = SyncEngine(config)

    print("\n[Notion Connection]")
    try:
        workspace = engine.read_workspace_tasks()
        print(f"  ✓ Connected to Notion")
        print(f"  ✓ Found {len(workspace)} in-progress tasks")
        for title in list(workspace)[:5]:
            print(f"    - {title}")
    except Exception as e:
        print(f"  ✗ Notion connection failed: {e}")
        return 1

    print("\n[Pomotodo Connection]")
    try:
        pomodoro = engine.read_pomodoro_tasks()
        completed = sum(1 for todo in pomodoro.values() if todo.completed)
        print(f"  ✓ Connected to Pomotodo")
        print(f"  ✓ Found {len(pomodoro)} todos ({completed} completed)")
    except Exception as e:
        print(f"  ✗ Pomotodo connection failed: {e}")
        return 1

    print("\n" + "=" * 60)
    print("All connections successful!")
    print("=" * 60)
    return 0


def cmd_config(config: Config, dry_run: bool = False) -> int:
    """Show current configuration."""
    print("Current Configuration:")
    for key, value in config.masked().items():
        print(f"  {key}: {value}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Task Bridge - Notion ↔ Pomotodo')
    parser.add_argument('command', nargs='?', default='sync',
                        choices=['sync', 'test', 'config'],
                        help='Command to run (default: sync)')
    parser.add_argument('--config', dest='config_path',
                        help='Path to config.json (default: ./config.json or $TASK_BRIDGE_CONFIG)')
    parser.add_argument('--dry-run', '-n', action='store_true',
                        help='Preview changes without making them')

    args = parser.parse_args(argv)

    config = Config.load(args.config_path)
    configure_logging(config)

    commands = {
        'sync': cmd_sync,
        'test': cmd_test,
        'config': cmd_config,
    }

    return commands[args.command](config, dry_run=args.dry_run)


if __name__ == '__main__':
    sys.exit(main())
