"""
Persistence tests for OrderRepository against in-memory SQLite.
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from checkout.domain.checkout import Order, OrderItem
from checkout.domain.customer import Address, Customer
from checkout.domain.errors import OrderItemValidationError, OrderNotFoundError, OrderRetrievalError
from checkout.domain.product import Product
from checkout.infrastructure.db import drop_models
from checkout.infrastructure.models import OrderItemModel, OrderModel


async def load_order_row(session_factory, order_id):
    """Return the stored order with its items as plain dicts."""
    async with session_factory() as session:
        model = (
            await session.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .where(OrderModel.id == order_id)
            )
        ).scalar_one()
    return {
        "id": model.id,
        "customer_id": model.customer_id,
        "total": model.total,
        "items": [
            {
                "id": item.id,
                "name": item.name,
                "price": item.price,
                "quantity": item.quantity,
                "order_id": item.order_id,
                "product_id": item.product_id,
            }
            for item in model.items
        ],
    }


async def count_items(session_factory, order_id):
    async with session_factory() as session:
        return await session.scalar(
            select(func.count()).select_from(OrderItemModel).where(OrderItemModel.order_id == order_id)
        )


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_order(self, session_factory, order_repository, customer, product):
        """Should persist the order row and its single item."""
        order_item = OrderItem("1", product.name, product.price, product.id, 2)
        order = Order("123", customer.id, [order_item])

        await order_repository.create(order)

        assert await load_order_row(session_factory, order.id) == {
            "id": "123",
            "customer_id": "123",
            "total": order.total(),
            "items": [
                {
                    "id": order_item.id,
                    "name": order_item.name,
                    "price": order_item.price,
                    "quantity": order_item.quantity,
                    "order_id": "123",
                    "product_id": "123",
                }
            ],
        }

    @pytest.mark.asyncio
    async def test_create_persists_every_item_and_total(
        self, session_factory, order_repository, product_repository, customer, product
    ):
        """Should store N item rows linked by order_id and total = sum(price * quantity)."""
        second = Product("456", "Product 2", "2.50")
        await product_repository.create(second)
        items = [
            OrderItem("1", product.name, product.price, product.id, 2),
            OrderItem("2", second.name, second.price, second.id, 3),
            OrderItem("3", product.name, product.price, product.id, 1),
        ]
        order = Order("10", customer.id, items)

        await order_repository.create(order)

        row = await load_order_row(session_factory, "10")
        assert len(row["items"]) == 3
        assert all(item["order_id"] == "10" for item in row["items"])
        assert row["total"] == Decimal("37.50")
        assert await count_items(session_factory, "10") == 3

    @pytest.mark.asyncio
    async def test_create_duplicate_id_fails(self, order_repository, customer, product):
        """Should surface the storage uniqueness violation unchanged."""
        order = Order("1", customer.id, [OrderItem("1", product.name, product.price, product.id, 1)])
        await order_repository.create(order)

        duplicate = Order("1", customer.id, [OrderItem("2", product.name, product.price, product.id, 1)])
        with pytest.raises(IntegrityError):
            await order_repository.create(duplicate)

    @pytest.mark.asyncio
    async def test_create_with_unknown_customer_fails(self, session_factory, order_repository, product):
        order = Order("1", "missing", [OrderItem("1", product.name, product.price, product.id, 1)])

        with pytest.raises(IntegrityError):
            await order_repository.create(order)

        async with session_factory() as session:
            assert await session.get(OrderModel, "1") is None


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_order(
        self, session_factory, order_repository, customer_repository, product_repository
    ):
        """Should replace the items and rewrite the total."""
        customer = Customer("853", "Jorge")
        customer.change_address(Address("Rua Santa", 1, "91172321", "Engenopolis"))
        await customer_repository.create(customer)

        product = Product("777", "Sushi", 30)
        await product_repository.create(product)

        order_item = OrderItem("1", product.name, product.price, product.id, 3)
        order = Order("1", customer.id, [order_item])
        await order_repository.create(order)

        row = await load_order_row(session_factory, order.id)
        assert row["total"] == Decimal("90")
        assert [item["id"] for item in row["items"]] == ["1"]

        product2 = Product("111", "Soup", 20)
        await product_repository.create(product2)
        order_item2 = OrderItem("2", product2.name, product2.price, product2.id, 2)
        order.change_items([order_item2])

        await order_repository.update(order)

        assert await load_order_row(session_factory, order.id) == {
            "id": "1",
            "customer_id": "853",
            "total": order.total(),
            "items": [
                {
                    "id": order_item2.id,
                    "name": order_item2.name,
                    "price": order_item2.price,
                    "quantity": order_item2.quantity,
                    "order_id": "1",
                    "product_id": "111",
                }
            ],
        }
        assert order.total() == Decimal("40")

    @pytest.mark.asyncio
    async def test_update_removes_previous_item_rows(self, session_factory, order_repository, customer, product):
        order = Order("1", customer.id, [
            OrderItem("1", product.name, product.price, product.id, 1),
            OrderItem("2", product.name, product.price, product.id, 1),
        ])
        await order_repository.create(order)

        order.change_items([OrderItem("3", product.name, product.price, product.id, 5)])
        await order_repository.update(order)

        async with session_factory() as session:
            assert await session.get(OrderItemModel, "1") is None
            assert await session.get(OrderItemModel, "2") is None
        assert await count_items(session_factory, "1") == 1

        found = await order_repository.find("1")
        assert found.total() == Decimal("50")
        assert found == order

    @pytest.mark.asyncio
    async def test_update_can_reuse_item_ids(self, session_factory, order_repository, customer, product):
        """Old rows are deleted before the insert, so an unchanged item id does not collide."""
        order = Order("1", customer.id, [OrderItem("1", product.name, product.price, product.id, 1)])
        await order_repository.create(order)

        order.change_items([OrderItem("1", product.name, product.price, product.id, 4)])
        await order_repository.update(order)

        row = await load_order_row(session_factory, "1")
        assert row["items"][0]["quantity"] == 4
        assert row["total"] == Decimal("40")

    @pytest.mark.asyncio
    async def test_failed_update_rolls_back(self, session_factory, order_repository, customer, product):
        """A failing insert must leave the previous items and total untouched."""
        original_item = OrderItem("1", product.name, product.price, product.id, 2)
        order = Order("1", customer.id, [original_item])
        await order_repository.create(order)

        order.change_items([OrderItem("2", "Ghost", 99, "no-such-product", 1)])
        with pytest.raises(IntegrityError):
            await order_repository.update(order)

        row = await load_order_row(session_factory, "1")
        assert [item["id"] for item in row["items"]] == ["1"]
        assert row["total"] == Decimal("20")


class TestFind:

    @pytest.mark.asyncio
    async def test_find_order(self, order_repository, customer_repository, product_repository):
        customer = Customer("152", "Pedro")
        customer.change_address(Address("Aranha 1", 1, "911231", "Porto Seguro"))
        await customer_repository.create(customer)

        product = Product("1", "Sushi", 10)
        await product_repository.create(product)

        order = Order("5", customer.id, [OrderItem("3", product.name, product.price, product.id, 2)])
        await order_repository.create(order)

        result = await order_repository.find(order.id)

        assert result == order
        assert result.total() == order.total()

    @pytest.mark.asyncio
    async def test_find_missing_order_raises(self, order_repository):
        with pytest.raises(OrderNotFoundError, match="Order not found") as exc_info:
            await order_repository.find("does-not-exist")
        assert exc_info.value.order_id == "does-not-exist"

    @pytest.mark.asyncio
    async def test_find_keeps_fractional_prices(self, order_repository, product_repository, customer):
        product = Product("p-1", "Tea", "3.35")
        await product_repository.create(product)
        order = Order("7", customer.id, [OrderItem("1", product.name, product.price, product.id, 3)])
        await order_repository.create(order)

        result = await order_repository.find("7")

        assert result.items[0].price == Decimal("3.35")
        assert result.total() == Decimal("10.05")


    @pytest.mark.asyncio
    async def test_find_returns_equal_order_and_consistent_total(self, session_factory, order_repository, customer, product):
        """Cent prices survive the NUMERIC(10, 2) round trip and the stored total matches the stored items."""
        order = Order("9", customer.id, [
            OrderItem("1", "x", Decimal("1.01"), product.id, 3),
            OrderItem("2", "y", Decimal("19.99"), product.id, 7),
        ])
        await order_repository.create(order)

        assert await order_repository.find("9") == order

        row = await load_order_row(session_factory, "9")
        assert row["total"] == sum(item["price"] * item["quantity"] for item in row["items"])
        assert row["total"] == order.total()

    def test_sub_cent_price_is_rejected_before_storage(self, customer, product):
        with pytest.raises(OrderItemValidationError):
            Order("9", customer.id, [OrderItem("1", "x", Decimal("1.005"), product.id, 3)])


class TestFindAll:

    @pytest.mark.asyncio
    async def test_find_all_orders(self, order_repository, customer_repository, product_repository):
        customer = Customer("123", "Pedro Sampaio")
        customer.change_address(Address("Novo 1", 1, "213123", "Aratinga"))
        await customer_repository.create(customer)

        product = Product("5", "Massa", 1)
        await product_repository.create(product)

        order = Order("6", customer.id, [OrderItem("8", product.name, product.price, product.id, 1)])
        await order_repository.create(order)

        customer2 = Customer("3122", "Mara")
        customer2.change_address(Address("Aranguera", 1, "1232312", "Capitu"))
        await customer_repository.create(customer2)

        product2 = Product("3", "LongNeck", 1)
        await product_repository.create(product2)

        order2 = Order("7", customer2.id, [OrderItem("7", product.name, product.price, product.id, 3)])
        await order_repository.create(order2)

        result = await order_repository.find_all()

        assert len(result) == 2
        assert order in result
        assert order2 in result

    @pytest.mark.asyncio
    async def test_find_all_empty(self, order_repository):
        assert await order_repository.find_all() == []

    @pytest.mark.asyncio
    async def test_find_all_wraps_storage_errors(self, engine, order_repository):
        await drop_models(engine)

        with pytest.raises(OrderRetrievalError, match="Error retrieving all orders") as exc_info:
            await order_repository.find_all()
        assert exc_info.value.__cause__ is not None
