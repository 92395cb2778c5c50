# clearing_ops/services/clearing_house/canister.py
"""
ClearingHouseService over the Internet Computer HTTP interface (ic-py).

Install with the ``canister`` extra. Arguments are candid-encoded with the
types below, which mirror the canister's interface; responses are returned as
ic-py decodes them (first return value).
"""

from __future__ import annotations

from typing import Any, List, Optional

from ic.agent import Agent
from ic.candid import Types, encode
from ic.client import Client
from ic.identity import Identity

from clearing_ops.config.config_loader import OperatorConfig
from clearing_ops.core.logging import log
from clearing_ops.models.clearing_house import (
    AddLiquidityParams,
    CreateMarketParams,
    DepositParams,
    RemoveLiquidityParams,
    WithdrawParams,
)
from clearing_ops.services.clearing_house.actor import ClearingHouseActor
from clearing_ops.services.clearing_house.principal import Principal
from clearing_ops.services.signer_loader import Ed25519Identity

# ---------- candid types ----------
ASSET_CLASS = Types.Variant({"Cryptocurrency": Types.Null, "FiatCurrency": Types.Null})

ASSET_PRICING_DETAILS = Types.Record({"symbol": Types.Text, "class": ASSET_CLASS})

MARKET_STATE = Types.Record(
    {
        "maxLeverageFactor": Types.Nat,
        "maxReserveFactor": Types.Nat,
        "liquidationFactor": Types.Nat,
    }
)

CREATE_MARKET_PARAMS = Types.Record(
    {
        "assetPricingDetails": ASSET_PRICING_DETAILS,
        "initState": MARKET_STATE,
        "fundingFactor": Types.Nat,
        "fundingExponentFactor": Types.Nat,
        "longsMaxReserveFactor": Types.Nat,
        "longsBorrowingExponentFactor": Types.Nat,
        "longsBaseBorrowingFactor": Types.Nat,
        "shortsMaxReserveFactor": Types.Nat,
        "shortsBorrowingExponentFactor": Types.Nat,
        "shortsBaseBorrowingFactor": Types.Nat,
    }
)

LIQUIDITY_PARAMS_ADD = Types.Record({"amount": Types.Nat, "min_amount_out": Types.Nat})
LIQUIDITY_PARAMS_REMOVE = Types.Record({"amount_in": Types.Nat, "min_amount_out": Types.Nat})

LIQUIDITY_OPERATION_RESULT = Types.Variant(
    {
        "Settled": Types.Record({"amount_out": Types.Nat}),
        "Waiting": Types.Null,
        "Failed": Types.Null,
    }
)

QUERY_MARKET_DETAILS_RESULT = Types.Record(
    {
        "longsTotalOpenInterest": Types.Nat,
        "shortsTotalOpenInterest": Types.Nat,
        "longsReserveAvailableLiquidity": Types.Nat,
        "shortsReserveAvailableLiquidity": Types.Nat,
        "currentFundingFactorPerHourLong": Types.Int,
        "currentFundingFactorPerHourShort": Types.Int,
    }
)

# get_market_details reply; candid records carry only label hashes on the wire,
# so the names come from here. funding_manager and pricing_manager are skipped.
BIAS_DETAILS = Types.Record(
    {
        "total_open_interest": Types.Nat,
        "total_open_interest_dynamic": Types.Int,
        "total_units": Types.Nat,
        "total_reserve": Types.Nat,
        "total_debt_of_traders": Types.Nat,
        "current_borrowing_factor": Types.Nat,
        "cummulative_funding_factor_since_epoch": Types.Int,
        "cummulative_borrowing_factor_since_epoch": Types.Nat,
        "borrowing_exponent_factor_": Types.Nat,
        "base_borrowing_factor": Types.Nat,
    }
)

HOUSE_LIQUIDITY_MANAGER = Types.Record(
    {
        "total_liquidity_tokens_minted": Types.Nat,
        "total_deposit": Types.Nat,
        "current_longs_reserve": Types.Nat,
        "current_shorts_reserve": Types.Nat,
        "current_net_debt": Types.Nat,
        "bad_debt": Types.Nat,
        "free_liquidity": Types.Nat,
        "current_borrow_fees_owed": Types.Nat,
        "longs_max_reserve_factor": Types.Nat,
        "shorts_max_reserve_factor": Types.Nat,
        "liquidation_factor": Types.Nat,
        "last_time_since_borrow_fees_collected": Types.Nat64,
    }
)

MARKET_DETAILS = Types.Record(
    {
        "index_asset_pricing_details": ASSET_PRICING_DETAILS,
        "token_identifier": Types.Text,
        "bias_tracker": Types.Record({"longs": BIAS_DETAILS, "shorts": BIAS_DETAILS}),
        "state": Types.Record(
            {
                "max_leverage_factor": Types.Nat,
                "max_reserve_factor": Types.Nat,
                "liquidation_factor": Types.Nat,
            }
        ),
        "liquidity_manager": HOUSE_LIQUIDITY_MANAGER,
    }
)

DEPOSIT_PARAMS = Types.Record({"amount": Types.Nat, "block_index": Types.Opt(Types.Nat64)})
WITHDRAW_PARAMS = Types.Record({"amount": Types.Nat})


def _first(decoded: Any) -> Any:
    if isinstance(decoded, list):
        if not decoded:
            return None
        head = decoded[0]
        return head["value"] if isinstance(head, dict) and "value" in head else head
    return decoded


class IcClearingHouseService:
    """ClearingHouseService implementation that talks to a live canister."""

    def __init__(self, agent: Agent, canister_id: str):
        self._agent = agent
        self.canister_id = str(Principal.from_text(canister_id))

    async def _query(self, method: str, args: List[dict], ret: Optional[list] = None) -> Any:
        log.debug(f"query {method}", source="IcClearingHouseService")
        res = await self._agent.query_raw_async(self.canister_id, method, encode(args), ret)
        return _first(res)

    async def _update(self, method: str, args: List[dict], ret: Optional[list] = None) -> Any:
        log.debug(f"update {method}", source="IcClearingHouseService")
        res = await self._agent.update_raw_async(self.canister_id, method, encode(args), ret)
        return _first(res)

    # ---------- remote operations ----------
    async def create_new_market(self, params: CreateMarketParams) -> int:
        return await self._update(
            "createNewMarket",
            [{"type": CREATE_MARKET_PARAMS, "value": params.to_candid()}],
            [Types.Nat64],
        )

    async def query_market_details(self, market_index: int) -> Any:
        return await self._query(
            "queryMarketDetails",
            [{"type": Types.Nat64, "value": market_index}],
            [QUERY_MARKET_DETAILS_RESULT],
        )

    async def get_market_details(self, market_index: int) -> Any:
        return await self._query(
            "get_market_details",
            [{"type": Types.Nat64, "value": market_index}],
            [MARKET_DETAILS],
        )

    async def get_user_market_liquidity_shares(self, principal: Principal, market_index: int) -> int:
        return await self._query(
            "getUserMarketLiquidityShares",
            [
                {"type": Types.Principal, "value": str(principal)},
                {"type": Types.Nat64, "value": market_index},
            ],
            [Types.Nat],
        )

    async def get_user_balance(self, principal: Principal) -> int:
        return await self._query(
            "getUserBalance",
            [{"type": Types.Principal, "value": str(principal)}],
            [Types.Nat],
        )

    async def add_liquidity(self, params: AddLiquidityParams) -> Any:
        return await self._update(
            "addLiquidity",
            [
                {"type": Types.Nat64, "value": params.market_index},
                {"type": LIQUIDITY_PARAMS_ADD, "value": params.model_dump(exclude={"market_index"})},
            ],
            [LIQUIDITY_OPERATION_RESULT],
        )

    async def deposit_into_account(self, params: DepositParams) -> bool:
        return await self._update(
            "depositIntoAccount",
            [{"type": DEPOSIT_PARAMS, "value": params.to_candid()}],
            [Types.Bool],
        )

    # remove_liquidity and withdraw reply with ()
    async def remove_liquidity(self, params: RemoveLiquidityParams) -> None:
        await self._update(
            "remove_liquidity",
            [
                {"type": Types.Nat64, "value": params.market_index},
                {"type": LIQUIDITY_PARAMS_REMOVE, "value": params.model_dump(exclude={"market_index"})},
            ],
        )

    async def withdraw(self, params: WithdrawParams) -> None:
        await self._update("withdraw", [{"type": WITHDRAW_PARAMS, "value": params.to_candid()}])


def build_agent(config: OperatorConfig, identity: Ed25519Identity) -> Agent:
    ic_identity = Identity(privkey=identity.secret_seed().hex(), type="ed25519")
    return Agent(ic_identity, Client(url=config.ic_host))


def build_clearing_house_actor(config: OperatorConfig, identity: Ed25519Identity) -> ClearingHouseActor:
    """Wire identity, host and canister id into a ready ClearingHouseActor."""
    service = IcClearingHouseService(build_agent(config, identity), config.canister_id)
    log.info(
        "Clearing house actor ready",
        source="canister",
        payload={"host": config.ic_host, "canister_id": service.canister_id},
    )
    return ClearingHouseActor(service)


__all__ = ["IcClearingHouseService", "build_agent", "build_clearing_house_actor"]
