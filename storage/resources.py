"""Resource loading shared by the web pages and the CLI."""

from typing import List

from models.data_models import Aral, validate_resources
from storage.supabase_client import ResourceFetchError, SupabaseClient
from utils.logger import setup_logger

logger = setup_logger(name=__name__)


def load_resources(supabase: SupabaseClient, order_by: str = "source_name") -> List[Aral]:
    """
    Fetch and validate all resources, falling back to an empty list.

    A failed fetch is logged and rendered as "no resources" so the page
    still loads; callers never see the storage error.

    Args:
        supabase: SupabaseClient instance
        order_by: Column the snapshot is ordered by

    Returns:
        Validated resources in provider order (possibly empty)
    """
    try:
        raw_rows = supabase.get_all_resources(order_by=order_by)
    except ResourceFetchError as e:
        logger.error(f"Error fetching data: {e}")
        return []

    resources = validate_resources(raw_rows)
    logger.info(f"Loaded {len(resources)} resources")
    return resources
