# backend/culturastock/services/damage_report_service.py
from typing import Optional, List
from beanie import PydanticObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError
from culturastock.models.damage_report_model import DamageReport, DamageReportStatus, DamageSeverity
from culturastock.services.item_service import ItemService
from culturastock.core.exceptions import ValidationError, StoreUnavailable
from culturastock.utils.text_utils import require_fields
import logging

logger = logging.getLogger(__name__)

class DamageReportService:
    @staticmethod
    async def create_damage_report(
        item_id: PydanticObjectId,
        reported_by: str,
        damage_description: str,
        severity: str
    ) -> DamageReport:
        """Log damage against an item. The item's status is left as it is."""
        fields = require_fields(reported_by=reported_by, damage_description=damage_description)
        try:
            severity = DamageSeverity(severity)
        except ValueError:
            allowed = ", ".join(s.value for s in DamageSeverity)
            raise ValidationError(f"Severity must be one of: {allowed}")

        item = await ItemService.get_item(item_id)

        try:
            report = DamageReport(
                item_id=item.id,
                item_name=item.name,
                item_serial_number=item.serial_number,
                reported_by=fields["reported_by"],
                damage_description=fields["damage_description"],
                severity=severity,
                status=DamageReportStatus.PENDING
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

        try:
            await report.insert()
        except PyMongoError as e:
            logger.error(f"Error saving damage report for item {item_id}: {str(e)}")
            raise StoreUnavailable("Failed to create damage report") from e

        logger.info(f"Damage report {report.id} ({severity.value}) filed for item {item.serial_number}")
        return report

    @staticmethod
    async def list_damage_reports(item_id: Optional[PydanticObjectId] = None) -> List[DamageReport]:
        try:
            query = DamageReport.find(DamageReport.item_id == item_id) if item_id else DamageReport.find_all()
            return await query.sort(-DamageReport.report_date).to_list()
        except PyMongoError as e:
            logger.error(f"Error listing damage reports: {str(e)}")
            raise StoreUnavailable("Failed to load damage reports") from e
