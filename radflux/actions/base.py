"""Base records for declared actions and their completion callbacks."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Optional

if TYPE_CHECKING:
    from .registry import ActionRegistry


Subscriber = Callable[[Any], Any]
Done = Callable[[Any], None]
Handler = Callable[[Done, Any], Any]


@dataclass(frozen=True)
class Action:
    """A declared action with an optional handler and its subscribers.

    The record is frozen: the subscriber list can be mutated in place but
    never replaced, and attaching a handler produces a new record that
    shares the same list.
    """

    name: str
    handler: Optional[Handler] = None
    subscribers: List[Subscriber] = field(default_factory=list)

    @property
    def has_handler(self) -> bool:
        """Check if a handler has been attached to this action."""
        return self.handler is not None

    def is_subscribed(self, callback: Subscriber) -> bool:
        """Check if this exact callback reference is subscribed."""
        return any(each is callback for each in self.subscribers)


@dataclass(frozen=True)
class DoneCallback:
    """Completion callback handed to an action's handler.

    Each invocation publishes its result to the action's subscribers.
    """

    action: str
    registry: "ActionRegistry" = field(repr=False, compare=False)

    def invoke(self, result: Any = None) -> None:
        """Publish ``result`` to the subscribers of the bound action."""
        self.registry.publish(self.action, result)

    __call__ = invoke
