# backend/culturastock/utils/text_utils.py
from typing import Dict, Optional
from culturastock.core.exceptions import ValidationError

def clean_text(value: Optional[str]) -> str:
    """
    Trim surrounding whitespace; None becomes an empty string
    """
    if not value:
        return ""
    return value.strip()

def require_fields(**fields: Optional[str]) -> Dict[str, str]:
    """
    Clean every field and fail with ValidationError naming the empty ones
    """
    cleaned = {name: clean_text(value) for name, value in fields.items()}
    missing = [name for name, value in cleaned.items() if not value]
    if missing:
        raise ValidationError(f"Required fields are empty: {', '.join(missing)}")
    return cleaned
