"""Configuration management with Pydantic models."""

from .settings import DispatcherSettings

__all__ = ["DispatcherSettings"]
