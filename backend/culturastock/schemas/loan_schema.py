# backend/culturastock/schemas/loan_schema.py
from datetime import datetime, date
from typing import Optional
from beanie import PydanticObjectId
from pydantic import AliasChoices, BaseModel, Field
from culturastock.models.loan_model import LoanStatus

class BorrowerBase(BaseModel):
    borrower_name: str = Field(..., min_length=1, max_length=200)
    borrower_document: str = Field(..., min_length=1, max_length=50, description="Identity document number")
    borrower_phone: str = Field(..., min_length=1, max_length=30)
    borrower_email: str = Field(..., min_length=1, max_length=200)
    cultural_group: str = Field(..., min_length=1, max_length=200)

class LoanCreate(BorrowerBase):
    item_id: PydanticObjectId
    loan_date: date = Field(default_factory=date.today)

class LoanOut(BorrowerBase):
    id: PydanticObjectId = Field(..., validation_alias=AliasChoices("id", "_id"))
    item_id: PydanticObjectId
    item_name: str
    item_serial_number: str
    loan_date: datetime
    return_date: Optional[datetime]
    status: LoanStatus
    is_active: bool
    days_out: int
    created_at: datetime

    class Config:
        from_attributes = True

class BorrowerSuggestionOut(BaseModel):
    """Borrower profile pulled from loan history to pre-fill a new loan"""
    name: str
    document: str
    phone: str
    email: str
    cultural_group: str
