from __future__ import annotations

import argparse
import asyncio
import logging

from heymies.config import settings
from heymies.jobs.scheduler import build_scheduler, run_dispatch_quiet

log = logging.getLogger("heymies.scheduler")


def _quiet_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    # Quiet the usual offenders
    for name in ("httpx", "apscheduler", "uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)


async def main() -> None:
    parser = argparse.ArgumentParser(description="Deliver queued outbox emails on an interval.")
    parser.add_argument("--once", action="store_true", help="Dispatch once and exit")
    args = parser.parse_args()

    _quiet_logging()

    if args.once:
        res = await run_dispatch_quiet()
        log.info("dispatch: %s", res if res is not None else "nothing to do")
        return

    scheduler = build_scheduler()
    scheduler.start()
    log.info("Scheduler started (outbox every %s min)", settings.SCHED_DISPATCH_INTERVAL_MINUTES)

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        scheduler.shutdown()
        log.info("Scheduler stopped")


if __name__ == "__main__":
    asyncio.run(main())
