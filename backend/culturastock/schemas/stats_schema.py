# backend/culturastock/schemas/stats_schema.py
from datetime import datetime
from typing import Optional, List, Dict
from enum import Enum
from beanie import PydanticObjectId
from pydantic import BaseModel, Field
from culturastock.models.item_model import ItemStatus
from culturastock.schemas.loan_schema import LoanOut

class ItemStatsSort(str, Enum):
    TOTAL_LOANS = "total_loans"
    DAMAGE_REPORTS = "damage_reports"
    NAME = "name"

class ItemStat(BaseModel):
    id: PydanticObjectId
    name: str
    serial_number: str
    status: ItemStatus
    total_loans: int = 0
    active_loans: int = 0
    returned_loans: int = 0
    damage_reports: int = 0
    last_loan_date: Optional[datetime] = None

class GroupStat(BaseModel):
    total_loans: int = 0
    active_loans: int = 0
    returned_loans: int = 0

class DetailedStats(BaseModel):
    item_stats: List[ItemStat] = Field(default_factory=list, description="Sorted by total_loans, most used first")
    group_stats: Dict[str, GroupStat] = Field(default_factory=dict)
    total_items: int
    total_loans: int
    active_loans: int
    total_damage_reports: int

class ReportSummary(BaseModel):
    total_items: int
    available_items: int
    loaned_items: int
    removed_items: int
    active_loans: int
    returned_loans: int
    active_loans_by_group: Dict[str, int] = Field(default_factory=dict)
    recent_loans: List[LoanOut] = Field(default_factory=list)
