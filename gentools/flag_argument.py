"""Typed holders for the argument a command-line flag carries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

ParseFunction = Callable[[str], Any]


@dataclass
class Ref:
    """A mutable cell that a linked argument writes parsed values into."""

    value: Any = None


class FlagArgument(ABC):
    """Something a flag can parse command-line text into.

    ``try_parse`` reports failure by returning False and leaves the reason
    in ``last_error``.
    """

    last_error: Optional[str] = None

    @property
    @abstractmethod
    def value(self) -> Any:
        """The value currently held."""

    @abstractmethod
    def parse(self, text: str) -> None:
        """Parse text into the held value, raising on failure."""

    @abstractmethod
    def try_parse(self, text: str) -> bool:
        """Parse text into the held value; return whether it worked."""

    @abstractmethod
    def arg_type(self) -> str:
        """Name of the type this argument holds."""

    def _attempt(self, text: str) -> bool:
        try:
            self.parse(text)
        except Exception as exc:
            self.last_error = str(exc)
            return False
        self.last_error = None
        return True


class VoidArgument(FlagArgument):
    """An argument that holds nothing; used by switches."""

    @property
    def value(self) -> None:
        return None

    def parse(self, text: str) -> None:
        return None

    def try_parse(self, text: str) -> bool:
        self.last_error = None
        return True

    def arg_type(self) -> str:
        return ""


def _type_name(value_type: Optional[type]) -> str:
    return value_type.__name__ if value_type is not None else ""


class ValueArgument(FlagArgument):
    """An argument that owns its value.

    When no value is given but a type is, the value starts as that type's
    default instance.
    """

    def __init__(
        self,
        value: Any = None,
        parse_function: Optional[ParseFunction] = None,
        value_type: Optional[type] = None,
    ) -> None:
        if value_type is None and value is not None:
            value_type = type(value)
        if value is None and value_type is not None:
            value = value_type()
        self._value = value
        self.parse_function = parse_function
        self.value_type = value_type

    @property
    def value(self) -> Any:
        return self._value

    def set_default_value(self, value: Any) -> "ValueArgument":
        """Replace the held value; returns self for chaining."""
        self._value = value
        if self.value_type is None and value is not None:
            self.value_type = type(value)
        return self

    def set_parse_function(self, parse_function: ParseFunction) -> "ValueArgument":
        """Replace the parse function; returns self for chaining."""
        self.parse_function = parse_function
        return self

    def parse(self, text: str) -> None:
        if self.parse_function is None:
            raise RuntimeError("No parse function set for this argument")
        self._value = self.parse_function(text)

    def try_parse(self, text: str) -> bool:
        return self._attempt(text)

    def arg_type(self) -> str:
        return _type_name(self.value_type)


class LinkedArgument(FlagArgument):
    """An argument that writes parsed values into a caller-owned ``Ref``."""

    def __init__(
        self,
        target: Optional[Ref] = None,
        parse_function: Optional[ParseFunction] = None,
        value_type: Optional[type] = None,
    ) -> None:
        if value_type is None and target is not None and target.value is not None:
            value_type = type(target.value)
        self.target = target
        self.parse_function = parse_function
        self.value_type = value_type

    @property
    def value(self) -> Any:
        return self.target.value if self.target is not None else None

    def set_linked_value(self, target: Ref) -> "LinkedArgument":
        """Point the argument at a new cell; returns self for chaining."""
        self.target = target
        if self.value_type is None and target is not None and target.value is not None:
            self.value_type = type(target.value)
        return self

    def set_parse_function(self, parse_function: ParseFunction) -> "LinkedArgument":
        """Replace the parse function; returns self for chaining."""
        self.parse_function = parse_function
        return self

    def parse(self, text: str) -> None:
        if self.target is None:
            raise RuntimeError("No linked value set for this argument")
        if self.parse_function is None:
            raise RuntimeError("No parse function set for this argument")
        self.target.value = self.parse_function(text)

    def try_parse(self, text: str) -> bool:
        return self._attempt(text)

    def arg_type(self) -> str:
        return _type_name(self.value_type)