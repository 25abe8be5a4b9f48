"""Notification adapter that writes messages to the application log.

Stands in for the e-mail sender, which lives outside this system.
"""

from __future__ import annotations

import logging

from rms.domain.service.notifier import Notifier

logger = logging.getLogger("rms.notifications")


class LoggingNotifier(Notifier):

    def notify(self, recipient_id: str, subject: str, body: str) -> None:
        logger.info("To %s: %s - %s", recipient_id, subject, body)
