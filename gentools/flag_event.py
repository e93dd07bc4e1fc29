"""A callable bound to its arguments, fired when a flag is raised."""

from __future__ import annotations

from typing import Any, Callable, Optional

_NOT_SET_MESSAGE = (
    "Error: Target function not set for FlagEvent instance. Can't trigger the event"
)


class EventNotSetError(RuntimeError):
    """Raised when an event is run without a target function."""


class FlagEvent:
    """A function and the arguments it is called with.

    ``try_run`` reports failure by returning False and leaves the reason
    in ``last_error``.
    """

    def __init__(self, func: Optional[Callable[..., Any]] = None, *args: Any) -> None:
        self.func = func
        self.args = args
        self.last_error: Optional[str] = None

    def set_triggered_func(self, func: Callable[..., Any], *args: Any) -> "FlagEvent":
        """Set the function, and its arguments when any are given; returns self."""
        self.func = func
        if args:
            self.args = args
        return self

    def set_func_arguments(self, *args: Any) -> "FlagEvent":
        """Replace the stored arguments; returns self."""
        self.args = args
        return self

    def run(self) -> Any:
        """Call the function with the stored arguments and return its result."""
        if self.func is None:
            raise EventNotSetError(_NOT_SET_MESSAGE)
        return self.func(*self.args)

    def try_run(self) -> bool:
        """Run the event; return whether it completed without raising."""
        try:
            self.run()
        except Exception as exc:
            self.last_error = str(exc)
            return False
        self.last_error = None
        return True