"""Initialize the Media Catalog database schema.

Creates all tables defined in SQLAlchemy models and seeds
reference data (genres, age categories).

Usage:
    python -m src.scripts.init_database
    python -m src.scripts.init_database --drop  # Drop and recreate
    python -m src.scripts.init_database --seed  # Include seed data
    python -m src.scripts.init_database --check # Connection and tables only
"""

import argparse
import sys

from sqlalchemy import inspect

from src.database.connection import DatabaseConnection, get_database
from src.services.catalog.reference_service import AgeCategoryService, GenreService
from src.services.catalog.schemas import AgeCategoryData, GenreData
from src.settings import settings

DEFAULT_GENRES = (
    "Action",
    "Adventure",
    "Animation",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Family",
    "Fantasy",
    "Horror",
    "Mystery",
    "Romance",
    "Science Fiction",
    "Thriller",
    "War",
    "Western",
)

DEFAULT_AGE_RANGES = ("0-6", "7-12", "13-16", "17-18", "18-99")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Initialize the Media Catalog database schema",
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Seed reference data after creation",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check connection, don't modify schema",
    )
    return parser.parse_args(argv)


def seed_genres(db: DatabaseConnection) -> int:
    """Insert the default genres that are missing.

    Returns:
        Number of genres inserted.
    """
    inserted = GenreService(db).add([GenreData(name=name) for name in DEFAULT_GENRES])
    print(f"✅ Seeded {inserted} genres ({len(DEFAULT_GENRES)} defaults)")
    return inserted


def seed_age_categories(db: DatabaseConnection) -> int:
    """Insert the default age categories that are missing.

    Returns:
        Number of categories inserted.
    """
    categories = [AgeCategoryData.from_range(r) for r in DEFAULT_AGE_RANGES]
    inserted = AgeCategoryService(db).add(categories)
    print(f"✅ Seeded {inserted} age categories ({len(categories)} defaults)")
    return inserted


def print_table_summary(db: DatabaseConnection) -> None:
    """Print the tables present in the database.

    Args:
        db: DatabaseConnection instance.
    """
    tables = sorted(inspect(db.engine).get_table_names())
    print("\n📊 Database Tables:")
    print("-" * 40)
    for table in tables:
        print(f"   • {table}")
    print("-" * 40)
    print(f"   Total: {len(tables)} tables")


def _print_banner(db: DatabaseConnection) -> None:
    """Print the banner with database connection info."""
    print("=" * 50)
    print("🎬 Media Catalog Database Initialization")
    print("=" * 50)
    print(f"   Backend: {db.backend}")
    if db.backend == "postgresql":
        print(f"   Host: {settings.database.host}")
        print(f"   Port: {settings.database.port}")
        print(f"   Database: {settings.database.database}")
    print("=" * 50)


def run(db: DatabaseConnection, args: argparse.Namespace) -> int:
    """Perform the database operations selected by the arguments.

    Args:
        db: DatabaseConnection instance.
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    if not db.check_connection():
        print("❌ Cannot connect to database")
        print("   Check POSTGRES_* or DATABASE_URL")
        return 1
    print("✅ Database connection successful")

    if args.check:
        print_table_summary(db)
        return 0

    if args.drop:
        print("🗑️  Dropping existing tables...")
        db.drop_schema()

    print("📋 Creating tables...")
    db.create_schema()
    print("✅ Tables created")

    if args.seed:
        print("\n🌱 Seeding reference data...")
        seed_genres(db)
        seed_age_categories(db)

    print_table_summary(db)
    print("\n✅ Database initialization complete!")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = parse_args(argv)
    db = get_database()
    _print_banner(db)
    return run(db, args)


if __name__ == "__main__":
    sys.exit(main())
