"""Data models for Aral resources."""

from typing import Any, Iterable, List, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

from utils.logger import setup_logger

logger = setup_logger(name=__name__)


class Aral(BaseModel):
    """A single resource row from the `resource` table.
    
    Rows are owned by the data store and read-only here; a full snapshot
    is fetched for every page render.
    """
    
    id: int = Field(..., ge=1, description="ID is required")
    source_name: str = Field(..., min_length=2, description="Source name is needed")
    category: str = Field(..., min_length=2, description="Category is needed")
    field: str = Field(..., min_length=2, description="Field is needed")
    link: Optional[str] = None
    
    @field_validator("link")
    @classmethod
    def blank_link_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty link strings as a missing link."""
        if v is not None and not v.strip():
            return None
        return v


def validate_resources(raw_rows: Iterable[Any]) -> List[Aral]:
    """
    Validate raw Supabase rows into Aral models.
    
    Rows that fail validation (missing fields, too-short text, None entries)
    are logged and skipped so one bad row never takes the page down.
    
    Args:
        raw_rows: Rows as returned by the data provider
    
    Returns:
        List of valid Aral models, in input order
    """
    resources = []
    rejected = 0
    
    for raw in raw_rows:
        if raw is None:
            rejected += 1
            continue
        try:
            resources.append(Aral.model_validate(raw))
        except ValidationError as e:
            rejected += 1
            row_id = raw.get("id") if isinstance(raw, dict) else None
            logger.warning(f"Skipping invalid resource row (id={row_id}): {e.error_count()} error(s)")
    
    if rejected:
        logger.info(f"Validated {len(resources)} resources, rejected {rejected}")
    
    return resources
