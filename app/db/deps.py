# app/db/deps.py
from contextlib import nullcontext
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator
from common.context_vars import request_timer_context_var

# Note: No import from main.py here!


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency.
    Pulls the manager from app.state to support multiple app instances.
    Time spent inside the session is reported as "db" in Server-Timing.
    """
    manager = getattr(request.app.state, "db_manager", None)

    if not manager:
        # This handles cases where the dependency is called but lifespan didn't run
        raise RuntimeError(
            "DbManager not found in app.state. Ensure lifespan is configured."
        )

    timer = request_timer_context_var.get()
    with timer.capture("db") if timer else nullcontext():
        async with manager.session() as session:
            yield session


get_session = get_db

__all__ = ["get_session", "get_db"]
