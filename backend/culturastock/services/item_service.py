# backend/culturastock/services/item_service.py
from typing import Optional, List
from datetime import datetime
from beanie import PydanticObjectId
from beanie.operators import Set, Unset
from pymongo.errors import DuplicateKeyError, PyMongoError
from culturastock.models.item_model import InventoryItem, ItemStatus
from culturastock.schemas.item_schema import ItemCreate
from culturastock.core.exceptions import DuplicateSerialNumber, NotFound, StoreUnavailable
from culturastock.utils.text_utils import clean_text, require_fields
import logging

logger = logging.getLogger(__name__)

class ItemService:
    @staticmethod
    async def add_item(item_data: ItemCreate) -> InventoryItem:
        """Register a new item as available; serial numbers are unique among non-removed items"""
        fields = require_fields(
            name=item_data.name,
            serial_number=item_data.serial_number,
        )
        description = clean_text(item_data.description) or None

        try:
            existing = await InventoryItem.find_one(
                InventoryItem.serial_number == fields["serial_number"],
                InventoryItem.status != ItemStatus.REMOVED
            )
            if existing:
                raise DuplicateSerialNumber(fields["serial_number"])

            item = InventoryItem(
                name=fields["name"],
                serial_number=fields["serial_number"],
                description=description,
                status=ItemStatus.AVAILABLE,
                loan_count=0,
                active_serial=fields["serial_number"],
            )
            await item.insert()
        except DuplicateKeyError as e:
            # Lost a race with a concurrent add of the same serial
            raise DuplicateSerialNumber(fields["serial_number"]) from e
        except PyMongoError as e:
            logger.error(f"Error adding item {fields['serial_number']}: {str(e)}")
            raise StoreUnavailable("Failed to add item") from e

        logger.info(f"Added item {item.id} ({item.serial_number})")
        return item

    @staticmethod
    async def get_item(item_id: PydanticObjectId) -> InventoryItem:
        try:
            item = await InventoryItem.get(item_id)
        except PyMongoError as e:
            logger.error(f"Error fetching item {item_id}: {str(e)}")
            raise StoreUnavailable("Failed to fetch item") from e

        if not item:
            raise NotFound(f"Item {item_id} not found")
        return item

    @staticmethod
    async def remove_item(item_id: PydanticObjectId) -> InventoryItem:
        """Soft delete: the item stays in the store flagged as removed"""
        item = await ItemService.get_item(item_id)
        if item.status == ItemStatus.REMOVED:
            return item

        try:
            await item.update(
                Set({
                    InventoryItem.status: ItemStatus.REMOVED,
                    InventoryItem.updated_at: datetime.utcnow()
                }),
                Unset({InventoryItem.active_serial: ""})
            )
        except PyMongoError as e:
            logger.error(f"Error removing item {item_id}: {str(e)}")
            raise StoreUnavailable("Failed to remove item") from e

        logger.info(f"Removed item {item_id} (was {item.serial_number})")
        return await ItemService.get_item(item_id)

    @staticmethod
    async def list_inventory(status: Optional[ItemStatus] = None) -> List[InventoryItem]:
        """All items, newest first. Text filtering is left to the caller."""
        try:
            query = InventoryItem.find(InventoryItem.status == status) if status else InventoryItem.find_all()
            return await query.sort(-InventoryItem.created_at).to_list()
        except PyMongoError as e:
            logger.error(f"Error listing inventory: {str(e)}")
            raise StoreUnavailable("Failed to load inventory") from e
