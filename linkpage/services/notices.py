"""Notifications utilisateur, effacées automatiquement après NOTICE_SECONDS"""

import logging
import time
from typing import Callable, Optional

from linkpage.core.config import settings

logger = logging.getLogger(__name__)


class NoticeBoard:

    def __init__(self, duration: float = settings.NOTICE_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self.clock = clock
        self._message: Optional[str] = None
        self._posted_at = 0.0

    def post(self, message: str) -> None:
        logger.info(f"Notice: {message}")
        self._message = message
        self._posted_at = self.clock()

    @property
    def current(self) -> Optional[str]:
        if self._message is None:
            return None
        if self.clock() - self._posted_at >= self.duration:
            self._message = None
        return self._message
