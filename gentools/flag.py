"""Command-line flags: the tokens that name them and the argument they carry."""

from __future__ import annotations

import warnings
from typing import Iterable, Optional, Sequence, Union

from gentools.flag_argument import FlagArgument, VoidArgument
from gentools.parse_functions import InvalidArgumentError


class EmptyTokenError(ValueError):
    """Raised when an empty string is given as a flag token."""


class FlagArgumentNotSetError(RuntimeError):
    """Raised when a flag without an argument is raised."""


class Tokens:
    """The names a flag answers to.

    A one-character token is the short token; every longer one is a long
    token. A later short token replaces an earlier one, with a warning.
    """

    def __init__(self, *args: str) -> None:
        if not args:
            raise TypeError("At least one token is required")
        self.short_token = ""
        self.long_tokens: list[str] = []
        for token in args:
            token = str(token)
            if not token:
                raise EmptyTokenError("Empty token provided")
            if len(token) == 1:
                if self.short_token:
                    warnings.warn(
                        f"Warning: In Flag with short token '{self.short_token}'\n"
                        f" >>>Short token has already been set. Another token, "
                        f"'{token}', is overriding previous short token",
                        stacklevel=2,
                    )
                self.short_token = token
            else:
                self.long_tokens.append(token)

    def __repr__(self) -> str:
        return f"Tokens(short_token={self.short_token!r}, long_tokens={self.long_tokens!r})"


TokenSpec = Union[Tokens, str, Iterable[str]]


def _as_tokens(spec: TokenSpec) -> Tokens:
    if isinstance(spec, Tokens):
        return spec
    if isinstance(spec, str):
        return Tokens(spec)
    return Tokens(*spec)


class Flag:
    """A named command-line flag that parses the argument following it.

    Without an argument, a flag's argument is not required and raising it
    fails until one is set. With an argument, the argument is required
    unless ``arg_required`` says otherwise.
    """

    def __init__(
        self,
        tokens: TokenSpec,
        description: str,
        argument: Optional[FlagArgument] = None,
        arg_required: Optional[bool] = None,
        flag_required: bool = False,
        pos_parsable: bool = False,
    ) -> None:
        self.tokens = _as_tokens(tokens)
        self.description = description
        self.argument: FlagArgument = argument if argument is not None else VoidArgument()
        self.argument_set = argument is not None
        if arg_required is None:
            arg_required = argument is not None
        self.arg_required = arg_required
        self.flag_required = flag_required
        self.pos_parsable = pos_parsable
        self.last_error: Optional[str] = None

    @property
    def short_token(self) -> str:
        return self.tokens.short_token

    @property
    def long_tokens(self) -> list[str]:
        return self.tokens.long_tokens

    @property
    def name(self) -> str:
        """The first long token, or the short token when there is none."""
        return self.long_tokens[0] if self.long_tokens else self.short_token

    def set_flag_required(self, required: bool) -> "Flag":
        """Set whether the flag must be given; returns self."""
        self.flag_required = required
        return self

    def set_arg_required(self, required: bool) -> "Flag":
        """Set whether the flag's argument must be given; returns self."""
        self.arg_required = required
        return self

    def set_pos_parsable(self, pos_parsable: bool) -> "Flag":
        """Set whether the flag may be given by position; returns self.

        A required flag that becomes position-parsable also requires its argument.
        """
        self.pos_parsable = pos_parsable
        if pos_parsable and self.flag_required:
            self.arg_required = True
        return self

    def set_argument(self, argument: FlagArgument) -> "Flag":
        """Set the argument the flag parses into; returns self."""
        if not isinstance(argument, FlagArgument):
            raise TypeError(f"Expected a FlagArgument, got {type(argument).__name__}")
        self.argument = argument
        self.argument_set = True
        return self

    def _not_set_message(self) -> str:
        return (
            f"Error: In Flag instance with name '{self.name}'\n"
            " >>>The Flag's argument has not been set. Only Switches can be Raised "
            "without having set an argument.\nSet the argument in a constructor, "
            "or by calling set_argument"
        )

    def _at_end_message(self) -> str:
        return (
            f"Error: In Flag instance with name '{self.name}'\n"
            " >>>The position given to the Flag is already at the end of the "
            "arguments. No item to parse, and argument is required for this flag"
        )

    def raise_args(self, args: Sequence[str], position: int) -> int:
        """Parse ``args[position]`` into the argument; return the next position.

        The position is left unchanged when there is nothing to parse or the
        text does not parse and the argument is optional.
        """
        if not self.argument_set:
            raise FlagArgumentNotSetError(self._not_set_message())
        if position >= len(args):
            if self.arg_required:
                raise InvalidArgumentError(self._at_end_message())
            return position
        try:
            self.argument.parse(args[position])
        except InvalidArgumentError:
            if self.arg_required:
                raise
            return position
        return position + 1

    def try_raise_args(self, args: Sequence[str], position: int) -> tuple[bool, int]:
        """Like ``raise_args`` but returns ``(succeeded, next_position)``.

        On failure the reason is left in ``last_error``.
        """
        try:
            new_position = self.raise_args(args, position)
        except Exception as exc:
            self.last_error = str(exc)
            return False, position
        self.last_error = None
        return True, new_position


def make_flags_position_parsable(*args: Flag) -> None:
    """Mark every flag given as position-parsable."""
    for flag in args:
        flag.set_pos_parsable(True)