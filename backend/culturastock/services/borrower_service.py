# backend/culturastock/services/borrower_service.py
from typing import Dict, List, Optional
from pymongo.errors import PyMongoError
from culturastock.core.config import settings
from culturastock.core.exceptions import StoreUnavailable
from culturastock.models.loan_model import Loan
from culturastock.schemas.loan_schema import BorrowerSuggestionOut
from culturastock.utils.text_utils import clean_text
import logging

logger = logging.getLogger(__name__)

def matches_search(suggestion: BorrowerSuggestionOut, term: str) -> bool:
    """
    Name and email match case-insensitively; documents are mostly digits,
    so they match as-is.
    """
    lowered = term.lower()
    return (
        lowered in suggestion.name.lower()
        or term in suggestion.document
        or lowered in suggestion.email.lower()
    )

class BorrowerService:
    @staticmethod
    def index_borrowers(loans: List[Loan]) -> Dict[str, BorrowerSuggestionOut]:
        """
        One profile per document number. The first loan seen for a document
        wins, in whatever order the loans were given.
        """
        profiles: Dict[str, BorrowerSuggestionOut] = {}
        for loan in loans:
            if loan.borrower_document in profiles:
                continue
            profiles[loan.borrower_document] = BorrowerSuggestionOut(
                name=loan.borrower_name,
                document=loan.borrower_document,
                phone=loan.borrower_phone,
                email=loan.borrower_email,
                cultural_group=loan.cultural_group
            )
        return profiles

    @staticmethod
    async def suggest_borrowers(search_term: Optional[str] = None, limit: Optional[int] = None) -> List[BorrowerSuggestionOut]:
        if limit is None:
            limit = settings.BORROWER_SUGGESTION_LIMIT
        term = clean_text(search_term)

        try:
            # Natural store order, no sort
            loans = await Loan.find_all().to_list()
        except PyMongoError as e:
            logger.error(f"Error loading borrower history: {str(e)}")
            raise StoreUnavailable("Failed to load borrower suggestions") from e

        profiles = BorrowerService.index_borrowers(loans)
        if not term:
            return list(profiles.values())[:limit]

        return [s for s in profiles.values() if matches_search(s, term)][:limit]
