# backend/culturastock/schemas/item_schema.py
from datetime import datetime
from typing import Optional
from beanie import PydanticObjectId
from pydantic import AliasChoices, BaseModel, Field
from culturastock.models.item_model import ItemStatus

class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="What is this item?")
    serial_number: str = Field(..., min_length=1, max_length=100, description="Serial number printed on the item")
    description: Optional[str] = Field(None, max_length=1000)

class ItemCreate(ItemBase):
    pass

class ItemOut(ItemBase):
    id: PydanticObjectId = Field(..., validation_alias=AliasChoices("id", "_id"))
    status: ItemStatus
    loan_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
