"""
SQLAlchemy-backed persistence for the Order aggregate.

Every call opens its own AsyncSession from the injected factory, so a
repository instance can be shared between concurrent tasks.
"""

from typing import List
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.orm import selectinload
from checkout.domain.checkout import Order, OrderItem
from checkout.domain.errors import OrderNotFoundError, OrderRetrievalError, ValidationError
from checkout.domain.repositories import OrderRepositoryInterface
from checkout.infrastructure.models import OrderItemModel, OrderModel
from shared.core import get_logger

logger = get_logger(__name__)


class OrderRepository(OrderRepositoryInterface):
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def create(self, entity: Order) -> None:
        """Insert the order row and its item rows with a single commit."""
        model = OrderModel(
            id=entity.id,
            customer_id=entity.customer_id,
            total=entity.total(),
            items=[
                OrderItemModel(
                    id=item.id,
                    name=item.name,
                    price=item.price,
                    product_id=item.product_id,
                    quantity=item.quantity,
                )
                for item in entity.items
            ],
        )
        try:
            async with self.session_factory.begin() as session:
                session.add(model)
        except SQLAlchemyError:
            logger.error(
                f"Failed to create order {entity.id}",
                exc_info=True,
                extra={'extra_fields': {'order_id': entity.id}}
            )
            raise
        logger.info(
            f"Created order {entity.id}",
            extra={'extra_fields': {'order_id': entity.id, 'items': len(entity.items), 'total': entity.total()}}
        )

    async def update(self, entity: Order) -> None:
        """
        Replace the order's items and rewrite its total.

        The delete, the bulk insert and the total update share one
        transaction; any failure rolls all three back.
        """
        rows = [
            {
                "id": item.id,
                "name": item.name,
                "price": item.price,
                "product_id": item.product_id,
                "quantity": item.quantity,
                "order_id": entity.id,
            }
            for item in entity.items
        ]
        try:
            async with self.session_factory.begin() as session:
                await session.execute(
                    delete(OrderItemModel).where(OrderItemModel.order_id == entity.id)
                )
                await session.execute(insert(OrderItemModel), rows)
                await session.execute(
                    update(OrderModel)
                    .where(OrderModel.id == entity.id)
                    .values(total=entity.total())
                )
        except SQLAlchemyError:
            logger.error(
                f"Failed to update order {entity.id}, transaction rolled back",
                exc_info=True,
                extra={'extra_fields': {'order_id': entity.id}}
            )
            raise
        logger.info(
            f"Updated order {entity.id}",
            extra={'extra_fields': {'order_id': entity.id, 'items': len(rows), 'total': entity.total()}}
        )

    async def find(self, id: str) -> Order:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == id)
        )
        async with self.session_factory() as session:
            try:
                model = (await session.execute(stmt)).scalar_one()
            except NoResultFound:
                logger.warning(f"Order {id} not found", extra={'extra_fields': {'order_id': id}})
                raise OrderNotFoundError(id) from None
        return self._to_domain(model)

    async def find_all(self) -> List[Order]:
        stmt = select(OrderModel).options(selectinload(OrderModel.items)).order_by(OrderModel.id)
        try:
            async with self.session_factory() as session:
                models = (await session.execute(stmt)).scalars().all()
            return [self._to_domain(model) for model in models]
        except (SQLAlchemyError, ValidationError) as e:
            logger.error("Error retrieving all orders", exc_info=True)
            raise OrderRetrievalError() from e

    @staticmethod
    def _to_domain(model: OrderModel) -> Order:
        items = [
            OrderItem(item.id, item.name, item.price, item.product_id, item.quantity)
            for item in model.items
        ]
        return Order(model.id, model.customer_id, items)
