"""Notification port.

Notifications are fire-and-forget: a failing sender is logged and never
propagated to the caller of the core operation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):

    @abstractmethod
    def notify(self, recipient_id: str, subject: str, body: str) -> None:
        """Deliver a message to a user."""


def notify_safely(notifier: Notifier | None, recipient_id: str, subject: str, body: str) -> None:
    if notifier is None:
        return
    try:
        notifier.notify(recipient_id, subject, body)
    except Exception:
        logger.exception("Notification to %s failed (%s)", recipient_id, subject)
