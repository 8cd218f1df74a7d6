"""User commands and the validators that parse their arguments."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Collection

Validator = Callable[[str], Any]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1
_INF_LITERALS = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"}


class ValidationError(ValueError):
    """Raised when a command or one of its arguments is not valid."""


@dataclass
class Command:
    """A command sent by a user: an id, the sender and the raw text."""

    id: int = 0
    user: str = ""
    content: str = ""

    def validate(
        self,
        users: Collection[str],
        commands: Collection[str],
        *args: Validator,
    ) -> tuple[str, list[Any]]:
        """Check the sender and the command, then parse the arguments.

        An empty ``users`` or ``commands`` collection accepts anything.
        Returns the command word and the values the validators produced,
        one per validator.
        """
        if users and self.user not in users:
            raise ValidationError(f"command cannot be executed: {self.user}")
        parts = self.content.split(" ")
        exec_word = parts[0]
        if commands and exec_word not in commands:
            raise ValidationError(f"unknown command: {exec_word}")
        options = parts[1:]
        values: list[Any] = []
        for i, validator in enumerate(args):
            opt = options[i] if i < len(options) else ""
            try:
                values.append(validator(opt))
            except ValueError as err:
                raise ValidationError(
                    f"error for argument '{opt}' at {i}: {err}"
                ) from err
        return exec_word, values


def command_from_message(id: int, user: str, cmd: str, *args: str) -> Command:
    """Build a command from a command word and its options."""
    return Command(id=id, user=user, content=f"{cmd} {' '.join(args)}")


def new_command(id: int, user: str, *args: str) -> Command:
    """Build a command whose first word is the command and the rest options."""
    if not args:
        raise ValueError("a command needs at least one word")
    prefix, *opts = args
    return Command(id=id, user=user, content=f"{prefix} {' '.join(opts)}")


def any_user() -> frozenset[str]:
    """A user filter that accepts every user."""
    return frozenset()


def contains(*args: str) -> frozenset[str]:
    """A filter that accepts only the given values."""
    return frozenset(args)


def any_value() -> Validator:
    """A validator that accepts any argument as it is."""
    return lambda s: s


def not_empty() -> Validator:
    """A validator that rejects an empty argument."""

    def check(s: str) -> str:
        if s == "":
            raise ValueError("cannot be empty")
        return s

    return check


def one_of(*args: str) -> Validator:
    """A validator that accepts only one of the given values."""
    joined = "','".join(args)

    def check(s: str) -> str:
        if s not in args:
            raise ValueError(f"must be one of ['{joined}']")
        return s

    return check


def integer() -> Validator:
    """A validator parsing a base-10 64-bit integer; empty means zero."""

    def check(s: str) -> int:
        if s == "":
            return 0
        if not _INT_PATTERN.fullmatch(s):
            raise ValueError(f"invalid syntax: {s!r}")
        number = int(s)
        if not _INT_MIN <= number <= _INT_MAX:
            raise ValueError(f"value out of range: {s!r}")
        return number

    return check


def floating() -> Validator:
    """A validator parsing a float; empty means zero."""

    def check(s: str) -> float:
        if s == "":
            return 0.0
        if s != s.strip() or "_" in s:
            raise ValueError(f"invalid syntax: {s!r}")
        number = float(s)
        if math.isinf(number) and s.lower() not in _INF_LITERALS:
            raise ValueError(f"value out of range: {s!r}")
        return number

    return check