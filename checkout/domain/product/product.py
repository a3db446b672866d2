from decimal import Decimal

from checkout.domain.money import Number, is_cent_precise, to_decimal
from checkout.domain.errors import ProductValidationError


class Product:
    def __init__(self, id: str, name: str, price: Number):
        self._id = id
        self._name = name
        self._price = to_decimal(price)
        self.validate()

    def validate(self) -> None:
        if not self._id:
            raise ProductValidationError("Id is required")
        if not self._name:
            raise ProductValidationError("Name is required")
        if self._price < 0:
            raise ProductValidationError("Price must be greater or equal to zero")
        if not is_cent_precise(self._price):
            raise ProductValidationError("Price must have at most two decimal places")

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def price(self) -> Decimal:
        return self._price

    def change_name(self, name: str) -> None:
        self._name = name
        self.validate()

    def change_price(self, price: Number) -> None:
        self._price = to_decimal(price)
        self.validate()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return (self._id, self._name, self._price) == (other._id, other._name, other._price)

    def __repr__(self) -> str:
        return f"Product(id={self._id!r}, name={self._name!r}, price={self._price!r})"
