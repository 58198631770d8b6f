#!/usr/bin/env python3
"""One-shot database setup: init tables and owners, seed zones."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.init_db import init_db
from scripts.seed_zones import seed_zones


async def setup_all() -> None:
    """Run all setup steps."""
    print("=== Setting up herb traceability database ===")
    print()

    print("Step 1: Creating tables...")
    await init_db()
    print()

    print("Step 2: Seeding zones...")
    await seed_zones()
    print()

    print("=== Setup complete! ===")
    print("Start the server with: uvicorn herbtrace.main:app --reload --port 8000")


if __name__ == "__main__":
    asyncio.run(setup_all())
