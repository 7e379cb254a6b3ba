# backend/culturastock/models/damage_report_model.py
from datetime import datetime
from beanie import Document, PydanticObjectId
from pydantic import Field
from enum import Enum

class DamageSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class DamageReportStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"

class DamageReport(Document):
    item_id: PydanticObjectId
    item_name: str
    item_serial_number: str

    report_date: datetime = Field(default_factory=datetime.utcnow)
    reported_by: str = Field(..., min_length=1, max_length=200)
    damage_description: str = Field(..., min_length=1, max_length=2000)
    severity: DamageSeverity
    status: DamageReportStatus = Field(default=DamageReportStatus.PENDING)

    def __repr__(self) -> str:
        return f"<DamageReport {self.item_serial_number} - {self.severity.value}>"

    class Settings:
        name = "damage_reports"
        indexes = [
            [("item_id", 1), ("report_date", -1)]
        ]
