"""Exceptions raised by the form controller."""


class ControllerClosedError(RuntimeError):
    """Raised when a closed controller is asked to change or submit."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot call {operation}() on a closed form controller")
