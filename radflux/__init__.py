"""In-process action dispatcher for unidirectional data flow."""

from .actions import (
    Action,
    ActionNotDeclaredError,
    ActionRegistry,
    Actions,
    ActionStateError,
    DoneCallback,
    HandlerAlreadyRegisteredError,
)
from .config import DispatcherSettings
from .utils import setup_logging

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionNotDeclaredError",
    "ActionRegistry",
    "ActionStateError",
    "Actions",
    "DispatcherSettings",
    "DoneCallback",
    "HandlerAlreadyRegisteredError",
    "setup_logging",
]
