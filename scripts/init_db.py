# scripts/init_db.py
import asyncio

from heymies.config import settings
from heymies.db import create_tables


async def main() -> None:
    n = await create_tables()
    print(f"OK: created {n} tables in {settings.HEYMIES_DB_URL} (idempotent).")


if __name__ == "__main__":
    asyncio.run(main())
