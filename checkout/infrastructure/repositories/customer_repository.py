from typing import List
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import async_sessionmaker
from checkout.domain.customer import Address, Customer
from checkout.domain.errors import CustomerNotFoundError
from checkout.domain.repositories import CustomerRepositoryInterface
from checkout.infrastructure.models import CustomerModel
from shared.core import get_logger

logger = get_logger(__name__)


class CustomerRepository(CustomerRepositoryInterface):
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def create(self, entity: Customer) -> None:
        async with self.session_factory.begin() as session:
            session.add(CustomerModel(id=entity.id, **self._columns(entity)))
        logger.info(f"Created customer {entity.id}", extra={'extra_fields': {'customer_id': entity.id}})

    async def update(self, entity: Customer) -> None:
        async with self.session_factory.begin() as session:
            await session.execute(
                update(CustomerModel)
                .where(CustomerModel.id == entity.id)
                .values(**self._columns(entity))
            )
        logger.info(f"Updated customer {entity.id}", extra={'extra_fields': {'customer_id': entity.id}})

    async def find(self, id: str) -> Customer:
        async with self.session_factory() as session:
            model = await session.get(CustomerModel, id)
        if model is None:
            logger.warning(f"Customer {id} not found", extra={'extra_fields': {'customer_id': id}})
            raise CustomerNotFoundError(id)
        return self._to_domain(model)

    async def find_all(self) -> List[Customer]:
        async with self.session_factory() as session:
            models = (await session.execute(select(CustomerModel).order_by(CustomerModel.id))).scalars().all()
        return [self._to_domain(model) for model in models]

    @staticmethod
    def _columns(entity: Customer) -> dict:
        address = entity.address
        return {
            "name": entity.name,
            "street": address.street if address else None,
            "number": address.number if address else None,
            "zipcode": address.zip if address else None,
            "city": address.city if address else None,
            "active": entity.is_active(),
            "reward_points": entity.reward_points,
        }

    @staticmethod
    def _to_domain(model: CustomerModel) -> Customer:
        customer = Customer(model.id, model.name)
        if model.street is not None:
            customer.change_address(Address(model.street, model.number, model.zipcode, model.city))
        if model.active:
            customer.activate()
        if model.reward_points:
            customer.add_reward_points(model.reward_points)
        return customer
