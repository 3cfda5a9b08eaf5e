"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    Each use case runs inside one request-scoped transaction.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
