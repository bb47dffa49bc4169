import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

# seconds a toast stays visible
DEFAULT_DURATION = 4.0


@dataclass
class Toast:
    level: str  # "success" | "error"
    message: str
    created_at: datetime = field(default_factory=datetime.utcnow)
    duration: float = DEFAULT_DURATION

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(seconds=self.duration)

    def expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class Notifier:
    """
    Transient toast-style notifications. A toast disappears from `active`
    once its duration has passed, or earlier when dismissed.
    Every toast is logged as well.
    """

    def __init__(self, duration: float = DEFAULT_DURATION,
                 clock: Optional[Callable[[], datetime]] = None):
        self.duration = duration
        self.clock = clock or datetime.utcnow
        self._toasts: List[Toast] = []

    @property
    def active(self) -> List[Toast]:
        now = self.clock()
        self._toasts = [t for t in self._toasts if not t.expired(now)]
        return list(self._toasts)

    def _push(self, level: str, message: str) -> Toast:
        toast = Toast(level=level, message=message, created_at=self.clock(), duration=self.duration)
        self._toasts.append(toast)
        return toast

    def success(self, message: str) -> Toast:
        logger.info("%s", message)
        return self._push("success", message)

    def error(self, message: str) -> Toast:
        logger.error("%s", message)
        return self._push("error", message)

    def dismiss(self, toast: Toast) -> None:
        if toast in self._toasts:
            self._toasts.remove(toast)

    def clear(self) -> None:
        self._toasts.clear()
