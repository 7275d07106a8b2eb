# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from battery_deal_tracker.clients.http import AsyncHttpClient
from battery_deal_tracker.clients.postgrest import PostgrestClient
from battery_deal_tracker.config import Settings, get_settings
from battery_deal_tracker.events.bus import get_event_bus
from battery_deal_tracker.persistence.repositories.in_memory import InMemoryDealRepository
from battery_deal_tracker.persistence.repositories.interfaces import IDealRepository
from battery_deal_tracker.persistence.repositories.postgrest import PostgrestDealRepository
from battery_deal_tracker.services.deal_list import DealListController
from battery_deal_tracker.services.deals import DealService
from battery_deal_tracker.services.statistics import DealStatisticsService


def _build_deal_repository(settings: Settings, client: PostgrestClient) -> IDealRepository:
    """Pick the deal repository for settings.store.backend."""
    if settings.store.backend == "memory":
        return InMemoryDealRepository()
    return PostgrestDealRepository(client=client, settings=settings)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP/PostgREST clients, deal repository, services."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    postgrest_client = providers.Singleton(
        PostgrestClient,
        http_client=http_client,
        settings=config,
    )

    deal_repository = providers.Singleton(
        _build_deal_repository,
        config,
        postgrest_client,
    )

    event_bus = providers.Callable(get_event_bus)

    deal_service = providers.Singleton(
        DealService,
        repository=deal_repository,
        event_bus=event_bus,
    )

    statistics_service = providers.Singleton(
        DealStatisticsService,
        repository=deal_repository,
        settings=config,
    )

    # one controller per history view
    deal_list_controller = providers.Factory(
        DealListController,
        repository=deal_repository,
        settings=config,
        event_bus=event_bus,
    )
