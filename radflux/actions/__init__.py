"""Action dispatch: declared actions, handlers and subscribers."""

from .base import Action, DoneCallback, Handler, Subscriber
from .errors import ActionNotDeclaredError, ActionStateError, HandlerAlreadyRegisteredError
from .registry import ActionRegistry, Actions

__all__ = [
    "Action",
    "ActionNotDeclaredError",
    "ActionRegistry",
    "ActionStateError",
    "Actions",
    "DoneCallback",
    "Handler",
    "HandlerAlreadyRegisteredError",
    "Subscriber",
]
