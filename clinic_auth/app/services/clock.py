from abc import ABC, abstractmethod
from datetime import datetime

from clinic_auth.domain.base import utc_now


class Clock(ABC):
    """Source of "now" for every expiry decision"""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return utc_now()
