# backend/culturastock/services/loan_service.py
from typing import Optional, List
from datetime import datetime
from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import Set, Inc
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError
from culturastock.models.item_model import InventoryItem, ItemStatus
from culturastock.models.loan_model import Loan, LoanStatus
from culturastock.schemas.loan_schema import LoanCreate
from culturastock.core.exceptions import ValidationError, NotFound, ItemNotAvailable, AlreadyReturned, StoreUnavailable
from culturastock.utils.text_utils import require_fields
import logging

logger = logging.getLogger(__name__)

class LoanService:

    @staticmethod
    async def create_loan(loan_data: LoanCreate) -> Loan:
        """
        Lend an available item.

        The availability check and the flip to LOANED happen in one
        conditional update, so two sessions racing for the same item
        cannot both win. If the loan insert fails afterwards the item is
        released again.
        """
        borrower = require_fields(
            borrower_name=loan_data.borrower_name,
            borrower_document=loan_data.borrower_document,
            borrower_phone=loan_data.borrower_phone,
            borrower_email=loan_data.borrower_email,
            cultural_group=loan_data.cultural_group,
        )
        loan_date = datetime.combine(loan_data.loan_date, datetime.min.time())

        try:
            item = await InventoryItem.find_one(
                InventoryItem.id == loan_data.item_id,
                InventoryItem.status == ItemStatus.AVAILABLE
            ).update(
                Set({
                    InventoryItem.status: ItemStatus.LOANED,
                    InventoryItem.updated_at: datetime.utcnow()
                }),
                Inc({InventoryItem.loan_count: 1}),
                response_type=UpdateResponse.NEW_DOCUMENT
            )

            if item is None:
                current = await InventoryItem.get(loan_data.item_id)
                if not current:
                    raise NotFound(f"Item {loan_data.item_id} not found")
                raise ItemNotAvailable(
                    f"Item {current.serial_number} is not available for loan - status: {current.status.value}"
                )
        except PyMongoError as e:
            logger.error(f"Error reserving item {loan_data.item_id}: {str(e)}")
            raise StoreUnavailable("Failed to create loan") from e

        try:
            loan = Loan(
                **borrower,
                item_id=item.id,
                item_name=item.name,
                item_serial_number=item.serial_number,
                loan_date=loan_date,
                status=LoanStatus.ACTIVE
            )
            await loan.insert()
        except PydanticValidationError as e:
            await LoanService._release_item(item.id)
            raise ValidationError(str(e)) from e
        except PyMongoError as e:
            logger.error(f"Error saving loan for item {item.id}, releasing item: {str(e)}")
            await LoanService._release_item(item.id)
            raise StoreUnavailable("Failed to create loan") from e

        logger.info(f"Created loan {loan.id}: {item.serial_number} -> {loan.borrower_name} ({loan.cultural_group})")
        return loan

    @staticmethod
    async def _release_item(item_id: PydanticObjectId) -> None:
        """Undo the reservation made by create_loan"""
        try:
            await InventoryItem.find_one(
                InventoryItem.id == item_id,
                InventoryItem.status == ItemStatus.LOANED
            ).update(
                Set({
                    InventoryItem.status: ItemStatus.AVAILABLE,
                    InventoryItem.updated_at: datetime.utcnow()
                }),
                Inc({InventoryItem.loan_count: -1})
            )
        except PyMongoError as e:
            logger.error(f"Could not release item {item_id}, it stays loaned: {str(e)}")

    @staticmethod
    async def return_loan(loan_id: PydanticObjectId) -> Loan:
        """Close an active loan and put its item back on the shelf. loan_count is kept."""
        now = datetime.utcnow()

        try:
            loan = await Loan.find_one(
                Loan.id == loan_id,
                Loan.status == LoanStatus.ACTIVE
            ).update(
                Set({Loan.status: LoanStatus.RETURNED, Loan.return_date: now}),
                response_type=UpdateResponse.NEW_DOCUMENT
            )

            if loan is None:
                existing = await Loan.get(loan_id)
                if not existing:
                    raise NotFound(f"Loan {loan_id} not found")
                raise AlreadyReturned(f"Loan {loan_id} was already returned on {existing.return_date}")
        except PyMongoError as e:
            logger.error(f"Error returning loan {loan_id}: {str(e)}")
            raise StoreUnavailable("Failed to return loan") from e

        try:
            # Removed items stay removed
            await InventoryItem.find_one(
                InventoryItem.id == loan.item_id,
                InventoryItem.status == ItemStatus.LOANED
            ).update(
                Set({
                    InventoryItem.status: ItemStatus.AVAILABLE,
                    InventoryItem.updated_at: now
                })
            )
        except PyMongoError as e:
            logger.error(f"Error releasing item {loan.item_id} for loan {loan_id}, reopening loan: {str(e)}")
            await LoanService._reopen_loan(loan_id)
            raise StoreUnavailable("Failed to return loan") from e

        logger.info(f"Returned loan {loan.id}: {loan.item_serial_number} from {loan.borrower_name}")
        return loan

    @staticmethod
    async def _reopen_loan(loan_id: PydanticObjectId) -> None:
        try:
            await Loan.find_one(
                Loan.id == loan_id,
                Loan.status == LoanStatus.RETURNED
            ).update(Set({Loan.status: LoanStatus.ACTIVE, Loan.return_date: None}))
        except PyMongoError as e:
            logger.error(f"Could not reopen loan {loan_id}: {str(e)}")

    @staticmethod
    async def get_loan(loan_id: PydanticObjectId) -> Loan:
        try:
            loan = await Loan.get(loan_id)
        except PyMongoError as e:
            logger.error(f"Error fetching loan {loan_id}: {str(e)}")
            raise StoreUnavailable("Failed to fetch loan") from e

        if not loan:
            raise NotFound(f"Loan {loan_id} not found")
        return loan

    @staticmethod
    async def list_loans(status: Optional[LoanStatus] = None) -> List[Loan]:
        """All loans, most recent loan date first"""
        try:
            query = Loan.find(Loan.status == status) if status else Loan.find_all()
            return await query.sort(-Loan.loan_date).to_list()
        except PyMongoError as e:
            logger.error(f"Error listing loans: {str(e)}")
            raise StoreUnavailable("Failed to load loans") from e
