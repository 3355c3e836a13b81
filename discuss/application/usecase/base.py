"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One API operation: validate ids, call domain services, shape the reply."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
