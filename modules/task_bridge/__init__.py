"""
Task Bridge Module - Notion ↔ Pomotodo

Keeps in-progress Notion tasks and Pomotodo todos in step.
"""

__version__ = "0.1.0"
