"""Outbound email seam for customer notifications."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailDelivery:
    status: str  # "sent" or "failed"
    message_id: str | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status == "sent"


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> EmailDelivery:
        """Hand a plain-text message to the mail provider.

        Rejections come back as a failed ``EmailDelivery``; transport errors
        may raise.
        """
