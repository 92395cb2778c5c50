# clearing_ops/services/clearing_house/workflows.py
from __future__ import annotations

from typing import Any, Tuple

from clearing_ops.core.logging import log
from clearing_ops.models.clearing_house import (
    AssetClass,
    AssetPricingDetails,
    CreateMarketParams,
    MarketState,
)
from clearing_ops.services.clearing_house.actor import ClearingHouseActor
from clearing_ops.services.clearing_house.conversion import to_precision


def default_market_params(symbol: str = "BTC", asset_class: AssetClass = AssetClass.CRYPTOCURRENCY) -> CreateMarketParams:
    """Reference parameters for a new crypto market."""
    return CreateMarketParams(
        asset_pricing_details=AssetPricingDetails(symbol=symbol, asset_class=asset_class),
        init_state=MarketState(
            liquidation_factor=to_precision(0.01),   # 1 percent
            max_leverage_factor=to_precision(10),    # 10x
            max_reserve_factor=to_precision(0.5),    # 50% price change
        ),
        shorts_base_borrowing_factor=to_precision(5 * 10 ** -9),
        longs_base_borrowing_factor=to_precision(5 * 10 ** -9),
        longs_borrowing_exponent_factor=to_precision(1),
        shorts_borrowing_exponent_factor=to_precision(1),
        funding_factor=to_precision(2 * 10 ** -8),
        funding_exponent_factor=to_precision(1),
        shorts_max_reserve_factor=to_precision(0.3),  # 30%
        longs_max_reserve_factor=to_precision(0.3),   # 30%
    )


async def create_market_and_fetch(actor: ClearingHouseActor, params: CreateMarketParams) -> Tuple[int, Any]:
    """Create a market, then read back its details. Returns (market_index, details)."""
    market_index = await actor.create_market(params)
    log.success(
        f"Market created for {params.asset_pricing_details.symbol}",
        source="workflows",
        payload={"market_index": market_index},
    )
    details = await actor.get_market_details(market_index)
    return market_index, details


__all__ = ["default_market_params", "create_market_and_fetch"]
