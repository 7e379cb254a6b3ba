# backend/culturastock/models/loan_model.py
from typing import Optional
from datetime import datetime
from beanie import Document, PydanticObjectId
from pydantic import Field, computed_field
from enum import Enum

class LoanStatus(str, Enum):
    ACTIVE = "active"       # Item is with the borrower
    RETURNED = "returned"   # Item came back (terminal)

# Groups offered by the loan form. Stored loans keep whatever text was sent.
CULTURAL_GROUPS = [
    "Grupo de Danza Folclórica",
    "Grupo de Danza Contemporánea",
    "Grupo de Teatro",
    "Coro Universitario",
    "Orquesta Sinfónica",
    "Estudiantina",
    "Grupo de Música Andina",
    "Grupo de Música Tropical",
    "Banda de Rock",
    "Grupo de Percusión",
    "Grupo de Artes Plásticas",
    "Grupo de Fotografía",
    "Cineclub",
    "Otro",
]

class Loan(Document):
    # Borrower
    borrower_name: str = Field(..., min_length=1, max_length=200)
    borrower_document: str = Field(..., min_length=1, max_length=50)
    borrower_phone: str = Field(..., min_length=1, max_length=30)
    borrower_email: str = Field(..., min_length=1, max_length=200)
    cultural_group: str = Field(..., min_length=1, max_length=200)

    # Item, denormalized at loan time so history survives item removal
    item_id: PydanticObjectId
    item_name: str
    item_serial_number: str

    loan_date: datetime
    return_date: Optional[datetime] = None
    status: LoanStatus = Field(default=LoanStatus.ACTIVE)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Loan {self.item_serial_number} -> {self.borrower_document} - {self.status.value}>"

    def __str__(self) -> str:
        return f"{self.item_name} - {self.borrower_name}"

    @computed_field
    @property
    def is_active(self) -> bool:
        return self.status == LoanStatus.ACTIVE

    @computed_field
    @property
    def days_out(self) -> int:
        """Days the item has been (or was) out"""
        end = self.return_date or datetime.utcnow()
        return max((end - self.loan_date).days, 0)

    class Settings:
        name = "loans"
        indexes = [
            [("loan_date", -1)],
            [("item_id", 1), ("status", 1)],
            [("borrower_document", 1)]
        ]
