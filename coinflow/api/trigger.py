"""Triggers that bind user replies to a consumer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(frozen=True)
class ConsumerKey:
    """Identifies a consumer of user commands."""

    id: str = ""
    key: str = ""
    prefix: str = ""


@dataclass
class Trigger:
    """A reusable trigger for a consumer; the setters chain."""

    id: str
    key: ConsumerKey
    default: list[str] = field(default_factory=list)
    description: str = ""
    timeout: timedelta = timedelta(0)

    def with_id(self, id: str) -> Trigger:
        self.id = id
        return self

    def with_description(self, desc: str) -> Trigger:
        self.description = desc
        return self

    def with_timeout(self, timeout: timedelta) -> Trigger:
        self.timeout = timeout
        return self

    def with_defaults(self, *args: str) -> Trigger:
        self.default = list(args)
        return self


def new_trigger(key: ConsumerKey) -> Trigger:
    """Create a trigger, taking the key's id or a fresh one."""
    return Trigger(id=key.id or str(uuid.uuid4()), key=key)