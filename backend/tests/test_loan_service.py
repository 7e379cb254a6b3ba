"""Loan creation and return, and the item status transitions they drive."""

import asyncio
from datetime import date, datetime

import pytest
from beanie import PydanticObjectId
from pymongo.errors import PyMongoError

from culturastock.core.exceptions import AlreadyReturned, ItemNotAvailable, NotFound, StoreUnavailable, ValidationError
from culturastock.models.item_model import InventoryItem, ItemStatus
from culturastock.models.loan_model import Loan, LoanStatus
from culturastock.schemas.loan_schema import LoanCreate
from culturastock.services.item_service import ItemService
from culturastock.services.loan_service import LoanService


class TestCreateLoan:

    async def test_loan_flips_item_to_loaned(self, add_item, lend):
        item = await add_item()
        loan = await lend(item)

        assert loan.status == LoanStatus.ACTIVE
        assert loan.item_name == "Guitarra"
        assert loan.item_serial_number == "GTA-001"
        assert loan.loan_date == datetime(2024, 1, 10)
        assert loan.return_date is None

        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.LOANED
        assert stored.loan_count == 1
        assert await Loan.find_all().count() == 1

    async def test_loaned_item_cannot_be_lent_again(self, add_item, lend):
        item = await add_item()
        await lend(item)
        with pytest.raises(ItemNotAvailable):
            await lend(item, name="Luis", document="456")

        assert await Loan.find_all().count() == 1
        stored = await InventoryItem.get(item.id)
        assert stored.loan_count == 1

    async def test_removed_item_cannot_be_lent(self, add_item, lend):
        item = await add_item()
        await ItemService.remove_item(item.id)
        with pytest.raises(ItemNotAvailable):
            await lend(item)
        assert await Loan.find_all().count() == 0

    async def test_unknown_item(self, db):
        with pytest.raises(NotFound):
            await LoanService.create_loan(LoanCreate(
                borrower_name="Ana",
                borrower_document="123",
                borrower_phone="300",
                borrower_email="ana@example.com",
                cultural_group="Coro Universitario",
                item_id=PydanticObjectId(),
                loan_date=date(2024, 1, 10)
            ))

    async def test_blank_borrower_field(self, add_item):
        item = await add_item()
        with pytest.raises(ValidationError):
            await LoanService.create_loan(LoanCreate(
                borrower_name="Ana",
                borrower_document="123",
                borrower_phone="300",
                borrower_email="ana@example.com",
                cultural_group="  ",
                item_id=item.id,
                loan_date=date(2024, 1, 10)
            ))
        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.AVAILABLE

    async def test_racing_loans_only_one_wins(self, add_item, lend):
        item = await add_item()
        results = await asyncio.gather(
            lend(item, name="Ana", document="123"),
            lend(item, name="Luis", document="456"),
            return_exceptions=True
        )

        loans = [r for r in results if isinstance(r, Loan)]
        failures = [r for r in results if isinstance(r, ItemNotAvailable)]
        assert len(loans) == 1
        assert len(failures) == 1

        stored = await InventoryItem.get(item.id)
        assert stored.loan_count == 1
        assert await Loan.find(Loan.status == LoanStatus.ACTIVE).count() == 1

    async def test_failed_insert_releases_item(self, add_item, lend, monkeypatch):
        item = await add_item()

        async def broken_insert(self, *args, **kwargs):
            raise PyMongoError("write concern error")
        monkeypatch.setattr(Loan, "insert", broken_insert)

        with pytest.raises(StoreUnavailable):
            await lend(item)

        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.AVAILABLE
        assert stored.loan_count == 0


class TestReturnLoan:

    async def test_return_puts_item_back(self, add_item, lend):
        item = await add_item()
        loan = await lend(item)

        returned = await LoanService.return_loan(loan.id)
        assert returned.status == LoanStatus.RETURNED
        assert returned.return_date is not None

        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.AVAILABLE
        assert stored.loan_count == 1

    async def test_second_return_fails(self, add_item, lend):
        item = await add_item()
        loan = await lend(item)
        await LoanService.return_loan(loan.id)

        with pytest.raises(AlreadyReturned):
            await LoanService.return_loan(loan.id)
        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.AVAILABLE

    async def test_second_return_leaves_new_loan_alone(self, add_item, lend):
        item = await add_item()
        first = await lend(item)
        await LoanService.return_loan(first.id)
        await lend(item, name="Luis", document="456")

        with pytest.raises(AlreadyReturned):
            await LoanService.return_loan(first.id)
        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.LOANED
        assert stored.loan_count == 2

    async def test_unknown_loan(self, db):
        with pytest.raises(NotFound):
            await LoanService.return_loan(PydanticObjectId())

    async def test_removed_item_stays_removed(self, add_item, lend):
        item = await add_item()
        loan = await lend(item)
        await ItemService.remove_item(item.id)

        await LoanService.return_loan(loan.id)
        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.REMOVED

    async def test_failed_item_release_reopens_loan(self, add_item, lend, monkeypatch):
        item = await add_item()
        loan = await lend(item)

        def down(*args, **kwargs):
            raise PyMongoError("down")
        monkeypatch.setattr(InventoryItem, "find_one", down)

        with pytest.raises(StoreUnavailable):
            await LoanService.return_loan(loan.id)
        monkeypatch.undo()

        stored = await Loan.get(loan.id)
        assert stored.status == LoanStatus.ACTIVE
        assert stored.return_date is None
        assert (await InventoryItem.get(item.id)).status == ItemStatus.LOANED


class TestListLoans:

    async def test_most_recent_loan_date_first(self, add_item, lend):
        jan = await lend(await add_item(serial_number="A-1"), loan_date=date(2024, 1, 10))
        mar = await lend(await add_item(serial_number="A-2"), loan_date=date(2024, 3, 5))
        feb = await lend(await add_item(serial_number="A-3"), loan_date=date(2024, 2, 1))

        loans = await LoanService.list_loans()
        assert [l.id for l in loans] == [mar.id, feb.id, jan.id]

    async def test_status_filter(self, add_item, lend):
        done = await lend(await add_item(serial_number="A-1"))
        await LoanService.return_loan(done.id)
        open_loan = await lend(await add_item(serial_number="A-2"))

        active = await LoanService.list_loans(LoanStatus.ACTIVE)
        assert [l.id for l in active] == [open_loan.id]


class TestGuitarScenario:

    async def test_full_cycle(self, add_item, lend):
        item = await add_item(name="Guitarra", serial_number="GTA-001")
        assert item.status == ItemStatus.AVAILABLE

        loan = await lend(item, name="Ana", document="123", loan_date=date(2024, 1, 10))
        stored = await InventoryItem.get(item.id)
        assert stored.status == ItemStatus.LOANED
        assert loan.status == LoanStatus.ACTIVE
        assert stored.loan_count == 1

        with pytest.raises(ItemNotAvailable):
            await lend(item, name="Luis", document="456")

        await LoanService.return_loan(loan.id)
        stored = await InventoryItem.get(item.id)
        loan = await Loan.get(loan.id)
        assert stored.status == ItemStatus.AVAILABLE
        assert loan.status == LoanStatus.RETURNED
        assert loan.return_date is not None
