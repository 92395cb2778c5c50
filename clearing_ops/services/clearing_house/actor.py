# clearing_ops/services/clearing_house/actor.py
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from clearing_ops.core.logging import log
from clearing_ops.models.clearing_house import (
    AddLiquidityParams,
    CreateMarketParams,
    DepositParams,
    RemoveLiquidityParams,
    WithdrawParams,
)
from clearing_ops.services.clearing_house.principal import Principal


@runtime_checkable
class ClearingHouseService(Protocol):
    """Anything that can perform the clearing-house canister's remote calls."""

    async def create_new_market(self, params: CreateMarketParams) -> int: ...

    async def query_market_details(self, market_index: int) -> Any: ...

    async def get_market_details(self, market_index: int) -> Any: ...

    async def get_user_market_liquidity_shares(self, principal: Principal, market_index: int) -> int: ...

    async def get_user_balance(self, principal: Principal) -> int: ...

    async def add_liquidity(self, params: AddLiquidityParams) -> Any: ...

    async def deposit_into_account(self, params: DepositParams) -> bool: ...

    async def remove_liquidity(self, params: RemoveLiquidityParams) -> None: ...

    async def withdraw(self, params: WithdrawParams) -> None: ...


class ClearingHouseActor:
    """
    Thin typed facade over a ClearingHouseService.
    Each method awaits one remote call and returns its response untouched;
    failures propagate to the caller.
    """

    def __init__(self, service: ClearingHouseService):
        self.clearing_house = service

    async def create_market(self, params: CreateMarketParams) -> int:
        log.debug("createNewMarket", source="ClearingHouseActor",
                  payload={"symbol": params.asset_pricing_details.symbol})
        return await self.clearing_house.create_new_market(params)

    async def query_market_details(self, market_index: int) -> Any:
        log.debug("queryMarketDetails", source="ClearingHouseActor", payload={"market_index": market_index})
        return await self.clearing_house.query_market_details(market_index)

    async def get_market_details(self, market_index: int) -> Any:
        log.debug("get_market_details", source="ClearingHouseActor", payload={"market_index": market_index})
        return await self.clearing_house.get_market_details(market_index)

    async def get_user_shares_balance(self, principal: Principal, market_index: int) -> int:
        log.debug("getUserMarketLiquidityShares", source="ClearingHouseActor",
                  payload={"principal": str(principal), "market_index": market_index})
        return await self.clearing_house.get_user_market_liquidity_shares(principal, market_index)

    async def get_user_balance(self, principal: Principal) -> int:
        log.debug("getUserBalance", source="ClearingHouseActor", payload={"principal": str(principal)})
        return await self.clearing_house.get_user_balance(principal)

    async def add_liquidity(self, params: AddLiquidityParams) -> Any:
        log.debug("addLiquidity", source="ClearingHouseActor", payload={"market_index": params.market_index})
        return await self.clearing_house.add_liquidity(params)

    async def deposit_into_account(self, params: DepositParams) -> bool:
        log.debug("depositIntoAccount", source="ClearingHouseActor", payload={"amount": params.amount})
        return await self.clearing_house.deposit_into_account(params)

    async def remove_liquidity(self, params: RemoveLiquidityParams) -> None:
        log.debug("remove_liquidity", source="ClearingHouseActor", payload={"market_index": params.market_index})
        return await self.clearing_house.remove_liquidity(params)

    async def withdraw(self, params: WithdrawParams) -> None:
        log.debug("withdraw", source="ClearingHouseActor", payload={"amount": params.amount})
        return await self.clearing_house.withdraw(params)


__all__ = ["ClearingHouseService", "ClearingHouseActor"]
