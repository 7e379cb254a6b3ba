# backend/culturastock/models/item_model.py
from typing import Optional
from datetime import datetime
from beanie import Document
from pydantic import Field
from pymongo import IndexModel
from enum import Enum

class ItemStatus(str, Enum):
    AVAILABLE = "available"    # On the shelf, can be lent
    LOANED = "loaned"          # Held by an active loan
    REMOVED = "removed"        # Written off (soft delete, terminal)

class InventoryItem(Document):
    name: str = Field(..., min_length=1, max_length=200, description="What is this item?")
    serial_number: str = Field(..., min_length=1, max_length=100, description="Unique among non-removed items")
    description: Optional[str] = Field(None, max_length=1000)

    status: ItemStatus = Field(default=ItemStatus.AVAILABLE)
    loan_count: int = Field(default=0, ge=0, description="Loans ever created for this item")

    # Same as serial_number while the item is not removed, unset on removal
    active_serial: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<InventoryItem {self.serial_number} - {self.status.value}>"

    def __str__(self) -> str:
        return f"{self.name} ({self.serial_number})"

    @property
    def is_available(self) -> bool:
        return self.status == ItemStatus.AVAILABLE

    class Settings:
        name = "inventory"
        keep_nulls = False
        indexes = [
            [("serial_number", 1), ("status", 1)],
            [("created_at", -1)],
            IndexModel([("active_serial", 1)], unique=True, sparse=True, name="unique_active_serial")
        ]
