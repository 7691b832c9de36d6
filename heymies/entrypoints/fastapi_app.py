# heymies/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI

from ..db import create_tables
from .api.routers import admin, agents, ai, buyers, calculators, health, jobs, leads, listings, sellers


def create_app() -> FastAPI:
    app = FastAPI(title="HeyMies - Property Leads")

    @app.on_event("startup")
    async def _startup() -> None:
        await create_tables()

    # Routers
    app.include_router(health.router)
    app.include_router(leads.router)
    app.include_router(admin.router)
    app.include_router(agents.router)
    app.include_router(buyers.router)
    app.include_router(sellers.router)
    app.include_router(listings.router)
    app.include_router(calculators.router)
    app.include_router(ai.router)
    app.include_router(jobs.router)

    return app
