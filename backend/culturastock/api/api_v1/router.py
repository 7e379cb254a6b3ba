# backend/culturastock/api/api_v1/router.py
from fastapi import APIRouter
from culturastock.api.api_v1.handlers import item, loan, reports

router = APIRouter()

# Core entities
router.include_router(item.item_router, prefix="/items", tags=["items"])
router.include_router(loan.loan_router, prefix="/loans", tags=["loans"])
router.include_router(reports.damage_report_router, prefix="/damage-reports", tags=["damage-reports"])

# Loan form helpers
router.include_router(loan.borrower_router, prefix="/borrowers", tags=["borrowers"])
router.include_router(loan.cultural_group_router, prefix="/cultural-groups", tags=["cultural-groups"])

# Statistics and reporting
router.include_router(reports.statistics_router, prefix="/statistics", tags=["statistics"])
router.include_router(reports.reports_router, prefix="/reports", tags=["reports"])
