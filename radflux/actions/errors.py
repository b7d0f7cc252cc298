"""Errors raised when an operation violates a registry invariant."""


class ActionStateError(RuntimeError):
    """Base class for action registry state errors."""

    def __init__(self, action: str, message: str) -> None:
        super().__init__(message)
        self.action = action


class ActionNotDeclaredError(ActionStateError, KeyError):
    """The action name was not declared when the registry was built."""

    def __init__(self, action: str, operation: str) -> None:
        super().__init__(
            action,
            f"ActionRegistry.{operation}: action '{action}' not declared, "
            "please add it to the constructor",
        )
        self.operation = operation

    def __str__(self) -> str:
        return str(self.args[0])


class HandlerAlreadyRegisteredError(ActionStateError):
    """A handler is already attached to the action."""

    def __init__(self, action: str) -> None:
        super().__init__(
            action,
            f"ActionRegistry.register_async: action '{action}' already registered",
        )
