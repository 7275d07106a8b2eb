# -*- coding: utf-8 -*-
"""DealStatisticsService: dashboard aggregates over every stored deal.

compute() is pure and sync; collect() and dashboard() fetch from the repository
first. Nothing is cached: every call recomputes from the full deal set.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

import structlog

from battery_deal_tracker.models.deal import Deal, DealStatus, PurchaseType

if TYPE_CHECKING:
    from battery_deal_tracker.config import Settings
    from battery_deal_tracker.persistence.repositories.interfaces.deal_repository import (
        IDealRepository,
    )

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class BestSeller:
    """Seller with the highest summed purchase_price."""

    name: str
    total: Decimal


@dataclass(frozen=True, slots=True)
class MonthlySummary:
    """Per-month (YYYY-MM) totals."""

    deal_count: int = 0
    spent: Decimal = ZERO
    revenue: Decimal = ZERO

    @property
    def profit(self) -> Decimal:
        return self.revenue - self.spent


@dataclass(frozen=True, slots=True)
class DealStatistics:
    """Aggregates shown on the dashboard."""

    total_deals: int = 0
    total_spent: Decimal = ZERO
    total_revenue: Decimal = ZERO
    """Sum of sell_price over deals that have one."""
    profit: Decimal = ZERO
    """total_revenue - total_spent (unsold deals count as spent, so this can be negative)."""
    unsold_count: int = 0
    best_seller: Optional[BestSeller] = None
    avg_profit: Decimal = ZERO
    """Mean of sell_price - purchase_price over sold deals; 0 when nothing is sold."""
    total_pieces: int = 0
    total_weight: Decimal = ZERO
    monthly_breakdown: dict[str, MonthlySummary] = field(default_factory=dict)
    """Keyed YYYY-MM, newest month first."""


@dataclass(frozen=True, slots=True)
class DashboardSnapshot:
    """Statistics plus the most recent deals."""

    statistics: DealStatistics
    recent_deals: list[Deal] = field(default_factory=list)


def _best_seller(totals: dict[str, Decimal]) -> Optional[BestSeller]:
    if not totals:
        return None
    # highest total wins; equal totals go to the alphabetically first name
    name, total = min(totals.items(), key=lambda item: (-item[1], item[0]))
    return BestSeller(name=name, total=total)


class DealStatisticsService:
    """Aggregates deals into DealStatistics and dashboard snapshots."""

    def __init__(
        self,
        repository: IDealRepository,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Deal repository (injected).
            settings: Application settings (uses settings.deal_list.recent_deals_limit).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = repository
        self._recent_limit = settings.deal_list.recent_deals_limit
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @staticmethod
    def compute(deals: Iterable[Deal]) -> DealStatistics:
        """Aggregate deals. No I/O, no side effects."""
        total_deals = 0
        total_spent = ZERO
        total_revenue = ZERO
        unsold_count = 0
        sold_profit = ZERO
        sold_count = 0
        total_pieces = 0
        total_weight = ZERO
        seller_totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        months: dict[str, MonthlySummary] = defaultdict(MonthlySummary)

        for deal in deals:
            total_deals += 1
            total_spent += deal.purchase_price
            seller_totals[deal.seller_name] += deal.purchase_price

            month = months[deal.month_key]
            months[deal.month_key] = replace(
                month,
                deal_count=month.deal_count + 1,
                spent=month.spent + deal.purchase_price,
                revenue=month.revenue + (deal.sell_price or ZERO),
            )

            if deal.sell_price is not None:
                total_revenue += deal.sell_price
                sold_profit += deal.sell_price - deal.purchase_price
                sold_count += 1
            if deal.status == DealStatus.PURCHASED:
                unsold_count += 1

            if deal.purchase_type == PurchaseType.BY_PIECE and deal.quantity is not None:
                total_pieces += deal.quantity
            elif deal.purchase_type == PurchaseType.BY_WEIGHT and deal.weight_lbs is not None:
                total_weight += deal.weight_lbs

        monthly = dict(sorted(months.items(), reverse=True))
        return DealStatistics(
            total_deals=total_deals,
            total_spent=total_spent,
            total_revenue=total_revenue,
            profit=total_revenue - total_spent,
            unsold_count=unsold_count,
            best_seller=_best_seller(dict(seller_totals)),
            avg_profit=sold_profit / sold_count if sold_count else ZERO,
            total_pieces=total_pieces,
            total_weight=total_weight,
            monthly_breakdown=monthly,
        )

    async def collect(self) -> DealStatistics:
        """Fetch every deal and aggregate."""
        deals = await self._repo.get_all()
        stats = self.compute(deals)
        self._logger.debug(
            "deal_statistics_computed",
            total_deals=stats.total_deals,
            unsold_count=stats.unsold_count,
        )
        return stats

    async def dashboard(self, recent_limit: Optional[int] = None) -> DashboardSnapshot:
        """Statistics plus the newest recent_limit deals (settings default when None).

        A recent_limit below 1 yields no recent deals.
        """
        limit = recent_limit if recent_limit is not None else self._recent_limit
        stats = await self.collect()
        if limit < 1:
            return DashboardSnapshot(statistics=stats, recent_deals=[])
        recent = await self._repo.list(page=1, page_size=limit)
        return DashboardSnapshot(statistics=stats, recent_deals=list(recent.items))
