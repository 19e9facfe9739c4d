"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    Use cases report expected failures as a ``Failure`` result instead of
    raising; unexpected errors propagate.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
