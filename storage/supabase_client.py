"""
Supabase storage client for Aral resource data.

The site only reads from the `resource` table: a full, ordered snapshot is
fetched per page render. The client is constructed once by the caller and
passed in where it is needed.
"""

from collections import Counter
from typing import Dict, List, Optional, Any
from supabase import Client, create_client

from utils.logger import setup_logger

logger = setup_logger(name=__name__)


class ResourceFetchError(Exception):
    """Raised when resources cannot be retrieved from Supabase."""


# PostgREST caps a single response at this many rows
PAGE_SIZE = 1000


class SupabaseClient:
    """Client for reading resources from Supabase."""

    def __init__(self, supabase_url: str, supabase_key: str, table_name: str = "resource"):
        """
        Initialize Supabase client.

        Args:
            supabase_url: Supabase project URL
            supabase_key: Supabase API key (anon/public key)
            table_name: Table holding the resources (default: "resource")
        """
        self.client: Client = create_client(supabase_url, supabase_key)
        self.table_name = table_name
        logger.info(f"Initialized SupabaseClient for {supabase_url}")

    def _select_all(self, columns: str, order_by: Optional[str] = None) -> List[Dict[str, Any]]:
        """Select every row in PAGE_SIZE batches until a short batch comes back."""
        rows: List[Dict[str, Any]] = []
        offset = 0

        while True:
            query = self.client.table(self.table_name).select(columns)
            if order_by:
                query = query.order(order_by, desc=False)

            result = query.limit(PAGE_SIZE).offset(offset).execute()
            batch = result.data or []
            if not batch:
                break

            rows.extend(batch)
            offset += len(batch)
            logger.debug(f"Fetched batch of {len(batch)} rows (total: {len(rows)})")

            if len(batch) < PAGE_SIZE:
                break

        return rows

    def get_all_resources(self, order_by: str = "source_name") -> List[Dict[str, Any]]:
        """
        Fetch every resource, ordered ascending by a stable column.

        Rows are read in batches of PAGE_SIZE, so tables larger than one
        PostgREST response are returned in full.

        Args:
            order_by: Column to sort by (default: "source_name")

        Returns:
            List of raw resource dicts (empty list if the table is empty)

        Raises:
            ResourceFetchError: If the Supabase query fails
        """
        try:
            resources = self._select_all("*", order_by=order_by)
            logger.debug(f"Fetched {len(resources)} resources ordered by {order_by}")
            return resources

        except Exception as e:
            logger.error(f"Supabase error: {e}")
            raise ResourceFetchError("Failed to fetch resources") from e

    def get_resource(self, resource_id: int) -> Optional[Dict[str, Any]]:
        """
        Get a single resource by id.

        Args:
            resource_id: Resource primary key

        Returns:
            Resource dict or None if not found

        Raises:
            ResourceFetchError: If the Supabase query fails
        """
        try:
            result = self.client.table(self.table_name).select("*").eq(
                "id", resource_id
            ).execute()

            if result.data:
                return result.data[0]
            return None

        except Exception as e:
            logger.error(f"Failed to get resource id={resource_id}: {e}")
            raise ResourceFetchError(f"Failed to fetch resource {resource_id}") from e

    def get_resource_stats(self) -> Dict[str, Any]:
        """
        Count resources, in total and per category.

        Returns:
            Dict: {'total': int, 'categories': {category: count}}.
            Zero counts if the query fails.
        """
        try:
            count_result = self.client.table(self.table_name).select(
                "*", count="exact", head=True
            ).execute()
            total = count_result.count or 0

            rows = self._select_all("category")
            categories = Counter(row.get("category") or "" for row in rows)
            return {
                'total': total,
                'categories': dict(sorted(categories.items())),
            }

        except Exception as e:
            logger.error(f"Failed to get resource stats: {e}")
            return {'total': 0, 'categories': {}}
