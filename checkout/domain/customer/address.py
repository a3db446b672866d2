from checkout.domain.errors import CustomerValidationError


class Address:
    """Shipping address value object. Immutable; replace it to change it."""

    __slots__ = ("_street", "_number", "_zip", "_city")

    def __init__(self, street: str, number: int, zip: str, city: str):
        self._street = street
        self._number = number
        self._zip = zip
        self._city = city
        self.validate()

    def validate(self) -> None:
        if not self._street:
            raise CustomerValidationError("Street is required")
        if not self._number:
            raise CustomerValidationError("Number is required")
        if not self._zip:
            raise CustomerValidationError("Zip is required")
        if not self._city:
            raise CustomerValidationError("City is required")

    @property
    def street(self) -> str:
        return self._street

    @property
    def number(self) -> int:
        return self._number

    @property
    def zip(self) -> str:
        return self._zip

    @property
    def city(self) -> str:
        return self._city

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return (self._street, self._number, self._zip, self._city) == (
            other._street, other._number, other._zip, other._city
        )

    def __hash__(self) -> int:
        return hash((self._street, self._number, self._zip, self._city))

    def __str__(self) -> str:
        return f"{self._street}, {self._number}, {self._zip} {self._city}"

    def __repr__(self) -> str:
        return (
            f"Address(street={self._street!r}, number={self._number!r}, "
            f"zip={self._zip!r}, city={self._city!r})"
        )
