"""Messages exchanged with the user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Message:
    """A message for a user or group; the setters chain."""

    text: str
    reply: int = 0
    time: datetime = field(default_factory=datetime.now)

    def reply_to(self, msg_id: int) -> Message:
        """Mark this message as a reply to the given message id."""
        self.reply = msg_id
        return self

    def add_line(self, txt: str) -> Message:
        """Append a line of text."""
        self.text = f"{self.text}\n{txt}"
        return self

    def reference_time(self, t: datetime) -> Message:
        """Set the time the message refers to."""
        self.time = t
        return self


def error_message(txt: str) -> Message:
    """Create a message reporting an error."""
    return Message(text=f"ERROR:{txt}")