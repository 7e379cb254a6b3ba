# backend/culturastock/services/reports_service.py
from typing import Dict
import csv
import io
from culturastock.models.item_model import ItemStatus
from culturastock.models.loan_model import LoanStatus
from culturastock.schemas.loan_schema import LoanOut
from culturastock.schemas.stats_schema import ReportSummary
from culturastock.services.loan_service import LoanService
from culturastock.services.statistics_service import StatisticsService
import logging

logger = logging.getLogger(__name__)

RECENT_LOANS_LIMIT = 5

class ReportsService:
    @staticmethod
    async def get_report_summary() -> ReportSummary:
        """Inventory status counts plus who currently holds what"""
        items, loans, _ = await StatisticsService.load_all()

        active = [l for l in loans if l.status == LoanStatus.ACTIVE]

        by_group: Dict[str, int] = {}
        for loan in active:
            by_group[loan.cultural_group] = by_group.get(loan.cultural_group, 0) + 1

        recent = sorted(active, key=lambda l: l.loan_date, reverse=True)[:RECENT_LOANS_LIMIT]

        return ReportSummary(
            total_items=len(items),
            available_items=sum(1 for i in items if i.status == ItemStatus.AVAILABLE),
            loaned_items=sum(1 for i in items if i.status == ItemStatus.LOANED),
            removed_items=sum(1 for i in items if i.status == ItemStatus.REMOVED),
            active_loans=len(active),
            returned_loans=sum(1 for l in loans if l.status == LoanStatus.RETURNED),
            active_loans_by_group=dict(sorted(by_group.items(), key=lambda kv: kv[1], reverse=True)),
            recent_loans=[LoanOut.model_validate(l) for l in recent]
        )

    @staticmethod
    async def get_loans_report_csv() -> str:
        """Loan history as CSV, most recent loan date first"""
        loans = await LoanService.list_loans()

        output = io.StringIO()
        writer = csv.writer(output)

        # Write headers
        writer.writerow([
            "Loan ID", "Loan Date", "Return Date", "Status",
            "Item", "Serial Number",
            "Borrower", "Document", "Phone", "Email", "Cultural Group"
        ])

        for loan in loans:
            writer.writerow([
                str(loan.id),
                loan.loan_date.strftime("%Y-%m-%d"),
                loan.return_date.strftime("%Y-%m-%d %H:%M") if loan.return_date else "",
                loan.status.value,
                loan.item_name,
                loan.item_serial_number,
                loan.borrower_name,
                loan.borrower_document,
                loan.borrower_phone,
                loan.borrower_email,
                loan.cultural_group
            ])

        logger.info(f"Exported {len(loans)} loans to CSV")
        return output.getvalue()
