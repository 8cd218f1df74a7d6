"""Interfaces to exchanges, trade sources and users."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping

from coinflow.api.command import Command
from coinflow.api.message import Message

if TYPE_CHECKING:
    from coinflow.api.events import Signal
    from coinflow.api.trigger import Trigger


@dataclass(frozen=True)
class Query:
    """A trades query."""

    coin: str
    index: str = ""


@dataclass(frozen=True)
class Pair:
    """A coin trading pair."""

    coin: str


class Client(ABC):
    """A low level source of trades."""

    @abstractmethod
    def trades(self, process: Iterable[Signal]) -> Iterator[Any]:
        """Yield trades, taking control signals from ``process``."""


class Exchange(ABC):
    """Submits and tracks orders and positions on an exchange."""

    @abstractmethod
    def open_positions(self) -> Any:
        """Return the positions currently open."""

    @abstractmethod
    def open_order(self, order: Any) -> tuple[Any, list[str]]:
        """Submit an order; return it with the transaction ids."""

    @abstractmethod
    def balance(self, price_map: Mapping[str, Any]) -> dict[str, Any]:
        """Return the balance per coin."""

    @abstractmethod
    def pairs(self) -> dict[str, Pair]:
        """Return the tradeable pairs."""

    @abstractmethod
    def current_price(self) -> dict[str, Any]:
        """Return the current price per coin."""


class User(ABC):
    """Exchanges information with, and takes commands from, the user."""

    @abstractmethod
    def run(self) -> None:
        """Start the interface and open any external connections."""

    @abstractmethod
    def listen(self, key: str, prefix: str) -> Iterator[Command]:
        """Yield commands for the subscriber that start with ``prefix``."""

    @abstractmethod
    def send(self, channel: str, message: Message, trigger: Trigger | None) -> int:
        """Send a message and return its id."""

    @abstractmethod
    def add_user(self, channel: str, user: str, chat_id: int) -> None:
        """Register a chat id for the user."""


def reply(private: str, user: User, message: Message, err: BaseException | None) -> None:
    """Send a reply, adding the error to it if there is one."""
    if err is not None:
        message.add_line(f"error:{err}")
    user.send(private, message, None)