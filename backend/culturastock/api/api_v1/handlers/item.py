# backend/culturastock/api/api_v1/handlers/item.py
from fastapi import APIRouter, status, Query
from typing import List, Optional
from beanie import PydanticObjectId
from culturastock.schemas.item_schema import ItemCreate, ItemOut
from culturastock.schemas.damage_report_schema import DamageReportCreate, DamageReportOut
from culturastock.models.item_model import ItemStatus
from culturastock.services.item_service import ItemService
from culturastock.services.damage_report_service import DamageReportService

item_router = APIRouter()

@item_router.post("/", summary="Add an item to the inventory", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
async def add_item(item_data: ItemCreate):
    return await ItemService.add_item(item_data)

@item_router.get("/", summary="List inventory, newest first", response_model=List[ItemOut])
async def list_inventory(
    status: Optional[ItemStatus] = Query(None, description="Filter by status")
):
    return await ItemService.list_inventory(status)

@item_router.get("/{item_id}", summary="Get item by ID", response_model=ItemOut)
async def get_item(item_id: PydanticObjectId):
    return await ItemService.get_item(item_id)

@item_router.delete("/{item_id}", summary="Remove item (soft delete)", response_model=ItemOut)
async def remove_item(item_id: PydanticObjectId):
    return await ItemService.remove_item(item_id)

@item_router.post(
    "/{item_id}/damage-reports",
    summary="Report damage on an item",
    response_model=DamageReportOut,
    status_code=status.HTTP_201_CREATED
)
async def create_damage_report(item_id: PydanticObjectId, report_data: DamageReportCreate):
    return await DamageReportService.create_damage_report(
        item_id,
        report_data.reported_by,
        report_data.damage_description,
        report_data.severity
    )
