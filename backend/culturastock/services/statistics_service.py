# backend/culturastock/services/statistics_service.py
from typing import Dict, List, Tuple
import asyncio
from pymongo.errors import PyMongoError
from culturastock.models.item_model import InventoryItem
from culturastock.models.loan_model import Loan, LoanStatus
from culturastock.models.damage_report_model import DamageReport
from culturastock.schemas.stats_schema import DetailedStats, ItemStat, GroupStat, ItemStatsSort
from culturastock.core.exceptions import StoreUnavailable
import logging

logger = logging.getLogger(__name__)

def sort_item_stats(item_stats: List[ItemStat], sort_by: ItemStatsSort) -> List[ItemStat]:
    if sort_by == ItemStatsSort.DAMAGE_REPORTS:
        return sorted(item_stats, key=lambda s: s.damage_reports, reverse=True)
    if sort_by == ItemStatsSort.NAME:
        return sorted(item_stats, key=lambda s: s.name.lower())
    return sorted(item_stats, key=lambda s: s.total_loans, reverse=True)

class StatisticsService:
    @staticmethod
    async def load_all() -> Tuple[List[InventoryItem], List[Loan], List[DamageReport]]:
        """Read the three collections concurrently, in natural store order"""
        try:
            items, loans, reports = await asyncio.gather(
                InventoryItem.find_all().to_list(),
                Loan.find_all().to_list(),
                DamageReport.find_all().to_list()
            )
        except PyMongoError as e:
            logger.error(f"Error loading statistics data: {str(e)}")
            raise StoreUnavailable("Failed to load statistics") from e
        return items, loans, reports

    @staticmethod
    def aggregate(
        items: List[InventoryItem],
        loans: List[Loan],
        reports: List[DamageReport],
        sort_by: ItemStatsSort = ItemStatsSort.TOTAL_LOANS
    ) -> DetailedStats:
        loans_by_item: Dict[str, List[Loan]] = {}
        for loan in loans:
            loans_by_item.setdefault(str(loan.item_id), []).append(loan)

        damage_by_item: Dict[str, int] = {}
        for report in reports:
            key = str(report.item_id)
            damage_by_item[key] = damage_by_item.get(key, 0) + 1

        item_stats = []
        for item in items:
            item_loans = loans_by_item.get(str(item.id), [])
            item_stats.append(ItemStat(
                id=item.id,
                name=item.name,
                serial_number=item.serial_number,
                status=item.status,
                total_loans=len(item_loans),
                active_loans=sum(1 for l in item_loans if l.status == LoanStatus.ACTIVE),
                returned_loans=sum(1 for l in item_loans if l.status == LoanStatus.RETURNED),
                damage_reports=damage_by_item.get(str(item.id), 0),
                # First loan in scan order, not re-sorted by date
                last_loan_date=item_loans[0].loan_date if item_loans else None
            ))

        group_stats: Dict[str, GroupStat] = {}
        for loan in loans:
            group = group_stats.setdefault(loan.cultural_group, GroupStat())
            group.total_loans += 1
            if loan.status == LoanStatus.ACTIVE:
                group.active_loans += 1
            elif loan.status == LoanStatus.RETURNED:
                group.returned_loans += 1

        return DetailedStats(
            item_stats=sort_item_stats(item_stats, sort_by),
            group_stats=group_stats,
            total_items=len(items),
            total_loans=len(loans),
            active_loans=sum(1 for l in loans if l.status == LoanStatus.ACTIVE),
            total_damage_reports=len(reports)
        )

    @staticmethod
    async def compute_detailed_stats(sort_by: ItemStatsSort = ItemStatsSort.TOTAL_LOANS) -> DetailedStats:
        items, loans, reports = await StatisticsService.load_all()
        stats = StatisticsService.aggregate(items, loans, reports, sort_by)
        logger.debug(f"Computed stats over {stats.total_items} items and {stats.total_loans} loans")
        return stats
