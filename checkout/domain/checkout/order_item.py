from decimal import Decimal

from checkout.domain.errors import OrderItemValidationError
from checkout.domain.money import Number, is_cent_precise, to_decimal


class OrderItem:
    """A line of an Order. Has no lifecycle outside its owning Order."""

    def __init__(self, id: str, name: str, price: Number, product_id: str, quantity: int):
        self._id = id
        self._name = name
        self._price = to_decimal(price)
        self._product_id = product_id
        self._quantity = quantity
        self.validate()

    def validate(self) -> None:
        if not self._id:
            raise OrderItemValidationError("Id is required")
        if not self._product_id:
            raise OrderItemValidationError("ProductId is required")
        if self._price < 0:
            raise OrderItemValidationError("Price must be greater or equal to zero")
        if not is_cent_precise(self._price):
            raise OrderItemValidationError("Price must have at most two decimal places")
        if self._quantity <= 0:
            raise OrderItemValidationError("Quantity must be greater than zero")

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def price(self) -> Decimal:
        return self._price

    @property
    def product_id(self) -> str:
        return self._product_id

    @property
    def quantity(self) -> int:
        return self._quantity

    def total(self) -> Decimal:
        return self._price * self._quantity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderItem):
            return NotImplemented
        return (
            self._id == other._id
            and self._name == other._name
            and self._price == other._price
            and self._product_id == other._product_id
            and self._quantity == other._quantity
        )

    def __repr__(self) -> str:
        return (
            f"OrderItem(id={self._id!r}, name={self._name!r}, price={self._price!r}, "
            f"product_id={self._product_id!r}, quantity={self._quantity!r})"
        )
