from typing import Optional

from checkout.domain.errors import CustomerValidationError
from .address import Address


class Customer:
    def __init__(self, id: str, name: str):
        self._id = id
        self._name = name
        self._address: Optional[Address] = None
        self._active = False
        self._reward_points = 0
        self.validate()

    def validate(self) -> None:
        if not self._id:
            raise CustomerValidationError("Id is required")
        if not self._name:
            raise CustomerValidationError("Name is required")

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def address(self) -> Optional[Address]:
        return self._address

    @property
    def reward_points(self) -> int:
        return self._reward_points

    def is_active(self) -> bool:
        return self._active

    def change_name(self, name: str) -> None:
        self._name = name
        self.validate()

    def change_address(self, address: Address) -> None:
        self._address = address

    def activate(self) -> None:
        if self._address is None:
            raise CustomerValidationError("Address is mandatory to activate a customer")
        self._active = True

    def deactivate(self) -> None:
        self._active = False

    def add_reward_points(self, points: int) -> None:
        self._reward_points += points

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Customer):
            return NotImplemented
        return (
            self._id == other._id
            and self._name == other._name
            and self._address == other._address
            and self._active == other._active
            and self._reward_points == other._reward_points
        )

    def __repr__(self) -> str:
        return (
            f"Customer(id={self._id!r}, name={self._name!r}, address={self._address!r}, "
            f"active={self._active!r}, reward_points={self._reward_points!r})"
        )
