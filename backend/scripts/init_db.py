#!/usr/bin/env python3
"""Initialize the database schema and ledger owners."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from herbtrace.config import INITIAL_AUTHORITY
from herbtrace.database import create_tables, drop_tables
from herbtrace.dependencies import get_services


async def init_db() -> None:
    """Create all database tables and record the initial authority."""
    await create_tables()
    await get_services().initialize(INITIAL_AUTHORITY)
    print(f"Database tables created successfully (authority: {INITIAL_AUTHORITY}).")


async def drop_db() -> None:
    """Drop all database tables."""
    await drop_tables()
    print("Database tables dropped.")


async def reset_db() -> None:
    """Drop and recreate all database tables."""
    await drop_db()
    await init_db()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "--reset":
        asyncio.run(reset_db())
    else:
        asyncio.run(init_db())
