from __future__ import annotations

import argparse
import asyncio

from heymies.db import async_session, create_tables
from heymies.service_layer.demo_seed import DEMO_AGENT_ID, seed_demo


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--agent-id", default=DEMO_AGENT_ID, help="Owner id for the demo listings")
    args = parser.parse_args()

    await create_tables()

    async with async_session() as session:
        res = await seed_demo(session, agent_id=args.agent_id)
        await session.commit()

    print(f"Seeded demo listings. created={res['created']} total={res['seeded']} agent_id={res['agent_id']}")


if __name__ == "__main__":
    asyncio.run(main())
