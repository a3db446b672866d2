"""Shared fixtures: a fresh in-memory SQLite database per test."""

import pytest
import pytest_asyncio

from checkout.core_settings import Settings
from checkout.domain.customer import Address, Customer
from checkout.domain.product import Product
from checkout.infrastructure.db import create_engine_from_settings, create_session_factory, init_models
from checkout.infrastructure.repositories import CustomerRepository, OrderRepository, ProductRepository

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings():
    return Settings(DATABASE_URL=IN_MEMORY_URL, DATABASE_ECHO=False)


@pytest_asyncio.fixture
async def engine(settings):
    engine = create_engine_from_settings(settings)
    await init_models(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def order_repository(session_factory):
    return OrderRepository(session_factory)


@pytest.fixture
def customer_repository(session_factory):
    return CustomerRepository(session_factory)


@pytest.fixture
def product_repository(session_factory):
    return ProductRepository(session_factory)


@pytest_asyncio.fixture
async def customer(customer_repository):
    customer = Customer("123", "Customer 1")
    customer.change_address(Address("Street 1", 1, "Zipcode 1", "City 1"))
    await customer_repository.create(customer)
    return customer


@pytest_asyncio.fixture
async def product(product_repository):
    product = Product("123", "Product 1", 10)
    await product_repository.create(product)
    return product
