# backend/culturastock/schemas/damage_report_schema.py
from datetime import datetime
from beanie import PydanticObjectId
from pydantic import AliasChoices, BaseModel, Field
from culturastock.models.damage_report_model import DamageSeverity, DamageReportStatus

class DamageReportCreate(BaseModel):
    reported_by: str = Field(..., min_length=1, max_length=200)
    damage_description: str = Field(..., min_length=1, max_length=2000)
    severity: DamageSeverity

class DamageReportOut(DamageReportCreate):
    id: PydanticObjectId = Field(..., validation_alias=AliasChoices("id", "_id"))
    item_id: PydanticObjectId
    item_name: str
    item_serial_number: str
    report_date: datetime
    status: DamageReportStatus

    class Config:
        from_attributes = True
