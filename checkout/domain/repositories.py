"""
Repository contracts.

Application code depends on these abstractions; the SQLAlchemy
implementations live in checkout.infrastructure.repositories.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

from checkout.domain.checkout import Order
from checkout.domain.customer import Customer
from checkout.domain.product import Product

T = TypeVar("T")


class RepositoryInterface(ABC, Generic[T]):
    @abstractmethod
    async def create(self, entity: T) -> None: ...

    @abstractmethod
    async def update(self, entity: T) -> None: ...

    @abstractmethod
    async def find(self, id: str) -> T:
        """Return the entity or raise the matching NotFoundError."""

    @abstractmethod
    async def find_all(self) -> List[T]: ...


class OrderRepositoryInterface(RepositoryInterface[Order]):
    pass


class CustomerRepositoryInterface(RepositoryInterface[Customer]):
    pass


class ProductRepositoryInterface(RepositoryInterface[Product]):
    pass
