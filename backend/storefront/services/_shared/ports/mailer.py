from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class OutboundEmail:
    """A rendered message handed to a :class:`Mailer`."""

    to_address: str
    subject: str
    body_html: str


class Mailer(Protocol):
    """Port for outbound email."""

    def send(self, to_address: str, subject: str, body_html: str) -> None:
        """
        Deliver one message.

        :raises UpstreamFailureError: When the transport rejects or is unreachable.
        """


class OutboxMailer(Mailer):
    """Collects messages in memory instead of sending them (tests, local runs)."""

    def __init__(self) -> None:
        self.outbox: list[OutboundEmail] = []
        self._lock = threading.Lock()

    def send(self, to_address: str, subject: str, body_html: str) -> None:
        with self._lock:
            self.outbox.append(OutboundEmail(to_address, subject, body_html))

    def clear(self) -> None:
        with self._lock:
            self.outbox.clear()
