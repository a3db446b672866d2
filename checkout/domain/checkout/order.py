from decimal import Decimal
from typing import Iterable, List

from checkout.domain.errors import OrderValidationError
from .order_item import OrderItem


class Order:
    """
    Order aggregate root.

    The aggregate owns its items; callers replace them wholesale through
    change_items(). total() is always derived from the current items.
    """

    def __init__(self, id: str, customer_id: str, items: Iterable[OrderItem]):
        self._id = id
        self._customer_id = customer_id
        self._items: List[OrderItem] = list(items)
        self.validate()

    def validate(self) -> None:
        if not self._id:
            raise OrderValidationError("Id is required")
        if not self._customer_id:
            raise OrderValidationError("CustomerId is required")
        if len(self._items) == 0:
            raise OrderValidationError("Items are required")
        if any(item.quantity <= 0 for item in self._items):
            raise OrderValidationError("Quantity must be greater than zero")

    @property
    def id(self) -> str:
        return self._id

    @property
    def customer_id(self) -> str:
        return self._customer_id

    @property
    def items(self) -> List[OrderItem]:
        return list(self._items)

    def change_items(self, items: Iterable[OrderItem]) -> None:
        previous = self._items
        self._items = list(items)
        try:
            self.validate()
        except OrderValidationError:
            self._items = previous
            raise

    def total(self) -> Decimal:
        return sum((item.total() for item in self._items), Decimal("0"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self._id == other._id
            and self._customer_id == other._customer_id
            and self._items == other._items
        )

    def __repr__(self) -> str:
        return f"Order(id={self._id!r}, customer_id={self._customer_id!r}, items={self._items!r})"
