# backend/culturastock/api/api_v1/handlers/loan.py
from fastapi import APIRouter, status, Query
from typing import List, Optional
from beanie import PydanticObjectId
from culturastock.schemas.loan_schema import LoanCreate, LoanOut, BorrowerSuggestionOut
from culturastock.models.loan_model import LoanStatus, CULTURAL_GROUPS
from culturastock.services.loan_service import LoanService
from culturastock.services.borrower_service import BorrowerService

loan_router = APIRouter()
borrower_router = APIRouter()
cultural_group_router = APIRouter()

@loan_router.post("/", summary="Lend an available item", response_model=LoanOut, status_code=status.HTTP_201_CREATED)
async def create_loan(loan_data: LoanCreate):
    return await LoanService.create_loan(loan_data)

@loan_router.get("/", summary="List loans, most recent first", response_model=List[LoanOut])
async def list_loans(
    status: Optional[LoanStatus] = Query(None, description="Filter by status")
):
    return await LoanService.list_loans(status)

@loan_router.get("/{loan_id}", summary="Get loan by ID", response_model=LoanOut)
async def get_loan(loan_id: PydanticObjectId):
    return await LoanService.get_loan(loan_id)

@loan_router.post("/{loan_id}/return", summary="Record the return of a loaned item", response_model=LoanOut)
async def return_loan(loan_id: PydanticObjectId):
    return await LoanService.return_loan(loan_id)

@borrower_router.get("/suggestions", summary="Borrower autofill from loan history", response_model=List[BorrowerSuggestionOut])
async def suggest_borrowers(
    q: Optional[str] = Query(None, max_length=200, description="Name, document or email fragment")
):
    return await BorrowerService.suggest_borrowers(q)

@cultural_group_router.get("/", summary="Cultural groups offered by the loan form", response_model=List[str])
async def list_cultural_groups():
    return CULTURAL_GROUPS
