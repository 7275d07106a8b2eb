# -*- coding: utf-8 -*-
"""
Entry point for the battery deal tracker.

Orchestrates: logging, settings check, container, one dashboard snapshot, shutdown.
Views (add deal, history, dashboard) drive DealService, DealListController and
DealStatisticsService from the container; this module only verifies the store is
reachable and logs what the dashboard would show.

Run with: python -m battery_deal_tracker.main

Notebook usage:
    from battery_deal_tracker.main import run
    await run()
"""
from __future__ import annotations

import asyncio
import structlog
from typing import Any

from battery_deal_tracker.config import Settings, get_settings
from battery_deal_tracker.DI import Container
from battery_deal_tracker.exceptions import MissingRequiredConfigError
from battery_deal_tracker.logging.config import configure_logging


def _check_store_settings(settings: Settings, logger: Any) -> None:
    if settings.store.backend != "postgrest":
        return
    for env_name, value in (
        ("STORE__URL", settings.store.url),
        ("STORE__ANON_KEY", settings.store.anon_key),
    ):
        if not (value or "").strip():
            logger.error(
                "main_missing_store_setting",
                message=f"{env_name} is not set",
            )
            raise MissingRequiredConfigError(env_name)


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    _check_store_settings(settings, logger)

    container = Container()
    http_client = container.http_client()
    statistics = container.statistics_service()
    try:
        snapshot = await statistics.dashboard()
        stats = snapshot.statistics
        logger.info(
            "main_dashboard_snapshot",
            store_backend=settings.store.backend,
            total_deals=stats.total_deals,
            total_spent=str(stats.total_spent),
            total_revenue=str(stats.total_revenue),
            profit=str(stats.profit),
            unsold_count=stats.unsold_count,
            best_seller=stats.best_seller.name if stats.best_seller else None,
            avg_profit=str(stats.avg_profit),
            recent_deals=[d.id for d in snapshot.recent_deals],
        )
    finally:
        await http_client.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
