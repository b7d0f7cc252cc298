"""Action registry: declaration, call, completion and publish."""

import dataclasses
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Union

import structlog

from ..config import DispatcherSettings
from ..utils.metrics import ACTION_CALLS, ACTION_PUBLISHES, SUBSCRIBER_ERRORS
from .base import Action, DoneCallback, Handler, Subscriber
from .errors import ActionNotDeclaredError, HandlerAlreadyRegisteredError


logger = structlog.get_logger(__name__)


class ActionRegistry:
    """Registry of declared actions, their handlers and subscribers.

    Usage::

        actions = ActionRegistry({"load": None})

        @actions.handler("load")
        def load(done, item_id):
            done({"id": item_id, "value": item_id * 2})

        actions.on("load", print)
        actions.call("load", 5)

    The set of action names is fixed when the registry is built. Each action
    may get one handler, attached with ``register_async``; without one,
    ``call`` publishes its payload straight to the subscribers.
    """

    def __init__(
        self,
        actions: Union[Mapping[str, Any], Iterable[str]],
        settings: Optional[DispatcherSettings] = None,
    ) -> None:
        """Initialize the registry from the declared action names.

        Args:
            actions: Mapping whose keys are the action names (values are
                ignored), or any iterable of names
            settings: Dispatcher settings, read from the environment if omitted
        """
        if isinstance(actions, str):
            raise TypeError(
                "ActionRegistry: actions must be a mapping or iterable of names, not a string"
            )

        self.settings = settings or DispatcherSettings()
        self._actions: Dict[str, Action] = {}

        for name in actions:
            if not isinstance(name, str):
                raise TypeError(
                    f"ActionRegistry: action names must be strings, got {type(name).__name__}"
                )
            self._actions[name] = Action(name=name)

        self._names = frozenset(self._actions)

        logger.info("Initialized ActionRegistry", actions=list(self._actions))

    @property
    def actions(self) -> Mapping[str, Action]:
        """Read-only view of the declared actions."""
        return MappingProxyType(self._actions)

    @property
    def names(self) -> FrozenSet[str]:
        return self._names

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def _lookup(self, name: Any, operation: str) -> Optional[Action]:
        """Return the declared action for ``name``, or None after logging a miss."""
        action = self._actions.get(name) if isinstance(name, str) else None
        if action is None:
            log = logger.warning if self.settings.warn_unknown_actions else logger.debug
            log("Ignoring undeclared action", action=name, operation=operation)
        return action

    def _require(self, name: str, operation: str) -> Action:
        action = self._actions.get(name)
        if action is None:
            raise ActionNotDeclaredError(name, operation)
        return action

    def register_async(self, name: str, handler: Handler) -> None:
        """Attach a handler to a declared action.

        The handler is called as ``handler(done, payload)`` whenever the
        action is called, and publishes by invoking ``done(result)``.

        Args:
            name: The action's name
            handler: What the action actually does

        Raises:
            TypeError: If name is not a string or handler is not callable
            ActionNotDeclaredError: If the action was not declared
            HandlerAlreadyRegisteredError: If a handler is already attached
        """
        if not isinstance(name, str):
            raise TypeError("ActionRegistry.register_async: name argument must be a string")
        if not callable(handler):
            raise TypeError("ActionRegistry.register_async: handler argument must be callable")

        action = self._require(name, "register_async")
        if action.has_handler:
            raise HandlerAlreadyRegisteredError(name)

        self._actions[name] = dataclasses.replace(action, handler=handler)

        logger.info(
            "Registered action handler",
            action=name,
            handler=getattr(handler, "__qualname__", repr(handler)),
        )

    registerAsync = register_async

    def handler(self, name: str) -> Callable[[Handler], Handler]:
        """Decorator form of ``register_async``."""
        def decorator(func: Handler) -> Handler:
            self.register_async(name, func)
            return func

        return decorator

    def call(self, name: str, payload: Any = None) -> Any:
        """Call an action.

        With a handler attached, runs ``handler(done, payload)`` and returns
        whatever the handler returned (a coroutine handler can therefore be
        awaited by the caller). The dispatcher itself treats a call as
        fire-and-forget; the returned value is an extension for callers that
        want it and is never inspected or scheduled. Without a handler,
        publishes ``payload`` before returning None. Undeclared actions are
        ignored.
        """
        action = self._lookup(name, "call")
        if action is None:
            return None

        if action.handler is not None:
            if self.settings.metrics_enabled:
                ACTION_CALLS.labels(action=name, mode="handler").inc()
            logger.debug("Calling action handler", action=name)
            return action.handler(self.build_done_function(name), payload)

        if self.settings.metrics_enabled:
            ACTION_CALLS.labels(action=name, mode="direct").inc()
        self.publish(name, payload)
        return None

    def build_done_function(self, name: str) -> DoneCallback:
        """Build the completion callback that publishes for ``name``."""
        return DoneCallback(action=name, registry=self)

    buildDoneFunction = build_done_function

    def publish(self, name: str, payload: Any = None) -> None:
        """Invoke every subscriber of ``name`` with ``payload``, in order.

        Subscribers are read from a snapshot taken when the publish starts:
        callbacks added or removed while it runs take effect on the next
        publish. A raising subscriber stops the cycle and its exception
        propagates to the caller.
        """
        action = self._lookup(name, "publish")
        if action is None:
            return

        subscribers = tuple(action.subscribers)
        if self.settings.metrics_enabled:
            ACTION_PUBLISHES.labels(action=name).inc()

        logger.debug("Publishing action", action=name, subscribers=len(subscribers))

        for callback in subscribers:
            try:
                callback(payload)
            except Exception as e:
                if self.settings.metrics_enabled:
                    SUBSCRIBER_ERRORS.labels(action=name).inc()
                logger.error(
                    "Subscriber failed during publish",
                    action=name,
                    subscriber=getattr(callback, "__qualname__", repr(callback)),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

    def on(self, name: str, callback: Subscriber) -> Optional[Subscriber]:
        """Subscribe to an action with a callback.

        Args:
            name: The action's name
            callback: Called with the result whenever the action completes

        Returns:
            The callback itself, to be passed to ``unsubscribe`` later, or
            None if that callback was already subscribed

        Raises:
            TypeError: If name is not a string or callback is not callable
            ActionNotDeclaredError: If the action was not declared
        """
        if not isinstance(name, str):
            raise TypeError("ActionRegistry.on: name argument must be a string")
        if not callable(callback):
            raise TypeError("ActionRegistry.on: callback argument must be callable")

        action = self._require(name, "on")
        if action.is_subscribed(callback):
            logger.debug("Callback already subscribed", action=name)
            return None

        action.subscribers.append(callback)

        if len(action.subscribers) > self.settings.max_subscribers_warning:
            logger.warning(
                "Action has many subscribers, check for missing unsubscribes",
                action=name,
                subscribers=len(action.subscribers),
                threshold=self.settings.max_subscribers_warning,
            )

        return callback

    def subscriber(self, name: str) -> Callable[[Subscriber], Subscriber]:
        """Decorator form of ``on``."""
        def decorator(func: Subscriber) -> Subscriber:
            self.on(name, func)
            return func

        return decorator

    def unsubscribe(self, name: str, callback: Subscriber) -> bool:
        """Remove a callback from an action.

        Args:
            name: The action's name
            callback: The reference returned by ``on``

        Returns:
            True if the callback was removed, False otherwise
        """
        action = self._lookup(name, "unsubscribe")
        if action is None:
            return False

        for index, each in enumerate(action.subscribers):
            if each is callback:
                del action.subscribers[index]
                logger.debug("Removed subscriber", action=name)
                return True

        return False

    def has_handler(self, name: str) -> bool:
        action = self._actions.get(name)
        return action is not None and action.has_handler

    def subscriber_count(self, name: str) -> int:
        action = self._actions.get(name)
        return len(action.subscribers) if action is not None else 0

    def list_actions(self) -> List[Dict[str, Any]]:
        """List all declared actions.

        Returns:
            List of action info dictionaries
        """
        return [
            {
                "name": name,
                "has_handler": action.has_handler,
                "subscribers": len(action.subscribers),
            }
            for name, action in self._actions.items()
        ]

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "declared_actions": len(self._actions),
            "action_names": list(self._actions),
            "handlers_attached": sum(1 for action in self._actions.values() if action.has_handler),
            "total_subscribers": sum(len(action.subscribers) for action in self._actions.values()),
        }


Actions = ActionRegistry
