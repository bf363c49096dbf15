#!/usr/bin/env python3
"""
Database setup script for OpenVerse.

Creates the Supabase `resource` schema programmatically using a direct
PostgreSQL connection.

Usage:
    python setup/setup_database.py           # Create schema
    python setup/setup_database.py --verify  # Verify existing schema
    python setup/setup_database.py --drop    # Drop and recreate (DANGEROUS)
    python setup/setup_database.py --seed    # Create schema and insert sample rows
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.config_loader import load_config
from utils.logger import setup_logger

try:
    import psycopg2
except ImportError:
    print("Error: psycopg2 not installed. Run: pip install -e .")
    sys.exit(1)

logger = setup_logger(name=__name__)


CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS resource (
    id BIGSERIAL PRIMARY KEY,
    source_name TEXT NOT NULL CHECK (char_length(source_name) >= 2),
    category TEXT NOT NULL CHECK (char_length(category) >= 2),
    field TEXT NOT NULL CHECK (char_length(field) >= 2),
    link TEXT
);
"""

CREATE_INDEXES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_resource_source_name ON resource(source_name);",
    "CREATE INDEX IF NOT EXISTS idx_resource_category ON resource(category);",
]

DROP_TABLE_SQL = "DROP TABLE IF EXISTS resource CASCADE;"

INSERT_RESOURCE_SQL = """
INSERT INTO resource (source_name, category, field, link)
SELECT %s, %s, %s, %s
WHERE NOT EXISTS (SELECT 1 FROM resource WHERE source_name = %s);
"""

SAMPLE_RESOURCES = [
    ("NASA Open Data Portal", "Dataset", "Astronomy", "https://data.nasa.gov"),
    ("arXiv", "Preprints", "Physics", "https://arxiv.org"),
    ("OpenStax", "Textbooks", "General Science", "https://openstax.org"),
    ("ESA Sky", "Sky Atlas", "Astronomy", "https://sky.esa.int"),
    ("Zooniverse", "Citizen Science", "Astronomy", "https://www.zooniverse.org"),
]


def get_database_url(config) -> str:
    """
    Get PostgreSQL database URL.

    Uses DATABASE_URL from .env; exits with instructions if it is missing.
    """
    if config.credentials.database_url:
        return config.credentials.database_url

    logger.error("DATABASE_URL not found in .env file")
    logger.error("\nTo get your DATABASE_URL:")
    logger.error("1. Go to Supabase Dashboard → Project Settings → Database")
    logger.error("2. Find 'Connection string' under 'Connection pooling'")
    logger.error("3. Copy the 'URI' connection string")
    logger.error("4. Add to .env file: DATABASE_URL=postgresql://...")
    sys.exit(1)


def create_connection(database_url: str):
    """Create a PostgreSQL database connection."""
    try:
        conn = psycopg2.connect(database_url)
        logger.info("✓ Connected to PostgreSQL database")
        return conn
    except Exception as e:
        logger.error(f"✗ Failed to connect to database: {e}")
        logger.error("\nMake sure:")
        logger.error("1. DATABASE_URL is correct in .env file")
        logger.error("2. Your IP is allowed in Supabase (Project Settings → Database → Connection pooling)")
        logger.error("3. Database password is correct")
        sys.exit(1)


def execute_sql(conn, sql_statement: str, description: str, params=None) -> bool:
    """Execute a SQL statement and commit, rolling back on failure."""
    try:
        cursor = conn.cursor()
        cursor.execute(sql_statement, params)
        conn.commit()
        cursor.close()
        logger.info(f"✓ {description}")
        return True
    except Exception as e:
        logger.error(f"✗ {description} failed: {e}")
        conn.rollback()
        return False


def verify_schema(conn) -> bool:
    """Verify that the resource table, its columns and indexes exist."""
    try:
        cursor = conn.cursor()

        cursor.execute("""
            SELECT EXISTS (
                SELECT FROM information_schema.tables
                WHERE table_name = 'resource'
            );
        """)
        table_exists = cursor.fetchone()[0]

        if not table_exists:
            logger.error("✗ Table 'resource' does not exist")
            cursor.close()
            return False

        logger.info("✓ Table 'resource' exists")

        cursor.execute("""
            SELECT column_name
            FROM information_schema.columns
            WHERE table_name = 'resource';
        """)
        columns = [row[0] for row in cursor.fetchall()]

        missing = [c for c in ("id", "source_name", "category", "field", "link") if c not in columns]
        if missing:
            logger.error(f"✗ Missing columns: {', '.join(missing)}")
            cursor.close()
            return False

        logger.info("✓ All resource columns exist")

        cursor.execute("""
            SELECT indexname
            FROM pg_indexes
            WHERE tablename = 'resource';
        """)
        indexes = [row[0] for row in cursor.fetchall()]

        for idx in ['idx_resource_source_name', 'idx_resource_category']:
            if idx in indexes:
                logger.info(f"✓ Index '{idx}' exists")
            else:
                logger.warning(f"⚠ Index '{idx}' missing")

        cursor.close()
        return True

    except Exception as e:
        logger.error(f"✗ Schema verification failed: {e}")
        return False


def create_schema(conn) -> bool:
    """Create the database schema."""
    logger.info("\n" + "="*80)
    logger.info("CREATING SCHEMA")
    logger.info("="*80 + "\n")

    if not execute_sql(conn, CREATE_TABLE_SQL, "Created table 'resource'"):
        return False

    for idx_sql in CREATE_INDEXES_SQL:
        idx_name = idx_sql.split("INDEX IF NOT EXISTS ")[1].split(" ON")[0]
        if not execute_sql(conn, idx_sql, f"Created index '{idx_name}'"):
            return False

    logger.info("\n✓ Database schema created successfully!")
    return True


def seed_resources(conn) -> bool:
    """Insert the sample resources, skipping any source name already present."""
    for source_name, category, field, link in SAMPLE_RESOURCES:
        if not execute_sql(
            conn,
            INSERT_RESOURCE_SQL,
            f"Seeded '{source_name}'",
            params=(source_name, category, field, link, source_name),
        ):
            return False
    return True


def drop_schema(conn) -> bool:
    """Drop the existing schema (DANGEROUS)."""
    logger.warning("\n" + "="*80)
    logger.warning("⚠️  WARNING: DROPPING EXISTING SCHEMA")
    logger.warning("="*80)
    logger.warning("This will DELETE ALL DATA in the resource table!")

    response = input("\nType 'yes' to confirm: ")
    if response.lower() != 'yes':
        logger.info("Aborted.")
        return False

    if not execute_sql(conn, DROP_TABLE_SQL, "Dropped table 'resource'"):
        return False

    logger.info("✓ Schema dropped")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Set up database schema for OpenVerse"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify existing schema without creating"
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop and recreate tables (DANGEROUS - deletes all data)"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Insert sample resources after creating the schema"
    )

    args = parser.parse_args()

    config = load_config()
    logger.info("✓ Configuration loaded")

    database_url = get_database_url(config)
    conn = create_connection(database_url)

    try:
        if args.verify:
            logger.info("\n" + "="*80)
            logger.info("VERIFYING SCHEMA")
            logger.info("="*80 + "\n")

            if verify_schema(conn):
                logger.info("\n✓ Schema verification successful")
                sys.exit(0)
            else:
                logger.error("\n✗ Schema verification failed")
                sys.exit(1)

        if args.drop:
            if not drop_schema(conn):
                sys.exit(1)

        if not create_schema(conn):
            logger.error("\n✗ Schema creation failed")
            sys.exit(1)

        if args.seed and not seed_resources(conn):
            logger.error("\n✗ Seeding failed")
            sys.exit(1)

        logger.info("\n" + "="*80)
        logger.info("NEXT STEPS")
        logger.info("="*80)
        logger.info("\n1. Verify the schema:")
        logger.info("   python setup/setup_database.py --verify")
        logger.info("\n2. Start the site:")
        logger.info("   python main.py serve")
        sys.exit(0)

    finally:
        conn.close()
        logger.info("\n✓ Database connection closed")


if __name__ == "__main__":
    main()
