# backend/culturastock/api/api_v1/handlers/reports.py
from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse
from typing import List, Optional
from datetime import date
from beanie import PydanticObjectId
from culturastock.services.statistics_service import StatisticsService
from culturastock.services.reports_service import ReportsService
from culturastock.services.loan_service import LoanService
from culturastock.services.damage_report_service import DamageReportService
from culturastock.schemas.stats_schema import DetailedStats, ReportSummary, ItemStatsSort
from culturastock.schemas.loan_schema import LoanOut
from culturastock.schemas.damage_report_schema import DamageReportOut
import io

reports_router = APIRouter()
statistics_router = APIRouter()
damage_report_router = APIRouter()

@statistics_router.get("/", summary="Per-item and per-group usage statistics", response_model=DetailedStats)
async def get_detailed_stats(
    sort_by: ItemStatsSort = Query(ItemStatsSort.TOTAL_LOANS, description="Ordering of item_stats")
):
    return await StatisticsService.compute_detailed_stats(sort_by)

@reports_router.get("/summary", summary="Inventory and active loan summary", response_model=ReportSummary)
async def get_report_summary():
    return await ReportsService.get_report_summary()

@reports_router.get("/loans", summary="Loan history report")
async def get_loans_report(
    format: str = Query("json", pattern="^(json|csv)$", description="Report format")
):
    if format == "csv":
        csv_data = await ReportsService.get_loans_report_csv()
        return StreamingResponse(
            io.StringIO(csv_data),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=loans_{date.today()}.csv"}
        )

    loans = await LoanService.list_loans()
    return [LoanOut.model_validate(l) for l in loans]

@damage_report_router.get("/", summary="List damage reports, newest first", response_model=List[DamageReportOut])
async def list_damage_reports(
    item_id: Optional[PydanticObjectId] = Query(None, description="Only reports for this item")
):
    return await DamageReportService.list_damage_reports(item_id)
