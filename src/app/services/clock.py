from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Source of the current time for every expiry decision"""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a naive UTC datetime"""
        pass
