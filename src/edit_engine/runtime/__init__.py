"""Runtime services: telemetry and settings."""

from .config import EditorSettings

__all__ = ["EditorSettings"]
