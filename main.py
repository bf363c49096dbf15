#!/usr/bin/env python3
"""
OpenVerse - Main CLI entrypoint

Serves the OpenVerse site and lets you inspect the Aral resource table
from the terminal, using the same filtering as the web page.

Usage:
    python main.py serve                                  # Start the site on :8000
    python main.py serve --host 0.0.0.0 --port 8080 --no-reload
    python main.py list                                   # All resources
    python main.py list --filter test                     # Filter on source_name
    python main.py list --column category --filter "Category A"
    python main.py stats                                  # Totals per category
"""

import argparse
import sys
from typing import Optional

from aral_table.columns import ARAL_COLUMNS, get_value
from aral_table.data_table import EMPTY_MESSAGE, DataTable
from storage.resources import load_resources
from storage.supabase_client import SupabaseClient
from utils.config_loader import load_config
from utils.logger import setup_logger

logger = setup_logger(name=__name__)


def format_table(table: DataTable) -> str:
    """
    Lay out the table's visible rows as aligned plain text.

    Cells use the raw attribute values (no HTML), so custom cell renderers
    are bypassed here. An empty view prints the empty-state message.
    """
    headers = [column.label for column in table.columns]
    rows = []
    for row in table.visible_rows:
        cells = []
        for column in table.columns:
            value = get_value(row, column.key)
            cells.append("" if value is None else str(value))
        rows.append(cells)

    widths = [len(header) for header in headers]
    for cells in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, cells)]

    lines = [
        "  ".join(header.ljust(width) for header, width in zip(headers, widths)).rstrip(),
        "  ".join("-" * width for width in widths),
    ]
    if not rows:
        lines.append(EMPTY_MESSAGE)
    for cells in rows:
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip())

    return "\n".join(lines)


def list_resources(
    column: Optional[str] = None,
    filter_text: str = "",
    supabase: SupabaseClient = None,
    order_by: str = "source_name",
) -> bool:
    """
    Print the Aral table, optionally filtered on one column.

    Args:
        column: Column key to filter on (default: first column)
        filter_text: Case-insensitive substring to match
        supabase: SupabaseClient instance (optional, will create if not provided)
        order_by: Column the snapshot is ordered by

    Returns:
        bool: True if the column was valid and the table was printed
    """
    if column and column not in [c.key for c in ARAL_COLUMNS]:
        logger.error(f"Unknown column '{column}'. Choose one of: {', '.join(c.key for c in ARAL_COLUMNS)}")
        return False

    if supabase is None:
        config = load_config()
        supabase = SupabaseClient(
            config.credentials.supabase_url,
            config.credentials.supabase_key,
            table_name=config.resource_table,
        )
        order_by = config.order_by

    resources = load_resources(supabase, order_by=order_by)
    table = DataTable(columns=ARAL_COLUMNS, rows=resources, filter_column=column, filter_value=filter_text)

    print(format_table(table))
    print(f"\n{len(table.visible_rows)} of {len(resources)} rows (column={table.state.column}, filter={table.state.value!r})")
    return True


def show_stats(supabase: SupabaseClient = None) -> bool:
    """
    Print resource totals per category.

    Args:
        supabase: SupabaseClient instance (optional, will create if not provided)

    Returns:
        bool: True if successful
    """
    if supabase is None:
        config = load_config()
        supabase = SupabaseClient(
            config.credentials.supabase_url,
            config.credentials.supabase_key,
            table_name=config.resource_table,
        )

    stats = supabase.get_resource_stats()
    logger.info("=" * 80)
    logger.info("RESOURCE STATS")
    logger.info("=" * 80)
    logger.info(f"  Total resources: {stats['total']}")
    for category, count in stats["categories"].items():
        logger.info(f"  {category}: {count}")
    return True


def main():
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="OpenVerse - Open like Space",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the site with auto-reload
  python main.py serve

  # Resources whose source name contains "test"
  python main.py list --filter test

  # Resources in Category A
  python main.py list --column category --filter "Category A"
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the OpenVerse web site"
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the server on (default: 8000)"
    )
    serve_parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind the server to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload (use for production)"
    )

    # List command
    list_parser = subparsers.add_parser(
        "list",
        help="Print the Aral resource table"
    )
    list_parser.add_argument(
        "--column",
        type=str,
        default=None,
        help="Column to filter on: source_name, category, field or link (default: source_name)"
    )
    list_parser.add_argument(
        "--filter",
        type=str,
        default="",
        dest="filter_text",
        help="Case-insensitive text the column must contain"
    )

    subparsers.add_parser(
        "stats",
        help="Show resource totals per category"
    )

    args = parser.parse_args()

    # Show help if no command provided
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        from backend.server import run_server
        run_server(host=args.host, port=args.port, reload=not args.no_reload)
        sys.exit(0)

    elif args.command == "list":
        success = list_resources(column=args.column, filter_text=args.filter_text)
        sys.exit(0 if success else 1)

    elif args.command == "stats":
        success = show_stats()
        sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
