import pytest
from datetime import date
from beanie import init_beanie
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from culturastock.app import app
from culturastock.core.database import DOCUMENT_MODELS
from culturastock.schemas.item_schema import ItemCreate
from culturastock.schemas.loan_schema import LoanCreate
from culturastock.services.item_service import ItemService
from culturastock.services.loan_service import LoanService


@pytest.fixture
async def db():
    """Fresh in-memory store per test"""
    client = AsyncMongoMockClient()
    database = client["culturastock_test"]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    yield database


@pytest.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def add_item(db):
    async def _add_item(name="Guitarra", serial_number="GTA-001", description=None):
        return await ItemService.add_item(
            ItemCreate(name=name, serial_number=serial_number, description=description)
        )
    return _add_item


@pytest.fixture
def lend(db):
    async def _lend(item, name="Ana", document="123", loan_date=date(2024, 1, 10),
                    cultural_group="Grupo de Teatro", email="ana@example.com", phone="3001234567"):
        return await LoanService.create_loan(LoanCreate(
            borrower_name=name,
            borrower_document=document,
            borrower_phone=phone,
            borrower_email=email,
            cultural_group=cultural_group,
            item_id=item.id,
            loan_date=loan_date
        ))
    return _lend
