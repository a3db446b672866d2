from typing import List
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import async_sessionmaker
from checkout.domain.errors import ProductNotFoundError
from checkout.domain.product import Product
from checkout.domain.repositories import ProductRepositoryInterface
from checkout.infrastructure.models import ProductModel
from shared.core import get_logger

logger = get_logger(__name__)


class ProductRepository(ProductRepositoryInterface):
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def create(self, entity: Product) -> None:
        async with self.session_factory.begin() as session:
            session.add(ProductModel(id=entity.id, name=entity.name, price=entity.price))
        logger.info(f"Created product {entity.id}", extra={'extra_fields': {'product_id': entity.id}})

    async def update(self, entity: Product) -> None:
        async with self.session_factory.begin() as session:
            await session.execute(
                update(ProductModel)
                .where(ProductModel.id == entity.id)
                .values(name=entity.name, price=entity.price)
            )
        logger.info(f"Updated product {entity.id}", extra={'extra_fields': {'product_id': entity.id}})

    async def find(self, id: str) -> Product:
        async with self.session_factory() as session:
            model = await session.get(ProductModel, id)
        if model is None:
            logger.warning(f"Product {id} not found", extra={'extra_fields': {'product_id': id}})
            raise ProductNotFoundError(id)
        return Product(model.id, model.name, model.price)

    async def find_all(self) -> List[Product]:
        async with self.session_factory() as session:
            models = (await session.execute(select(ProductModel).order_by(ProductModel.id))).scalars().all()
        return [Product(model.id, model.name, model.price) for model in models]
