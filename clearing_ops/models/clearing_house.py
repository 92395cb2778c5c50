from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

# ------------------------------------------------------------------
# 1. Enums
# ------------------------------------------------------------------
class AssetClass(str, Enum):
    CRYPTOCURRENCY = "Cryptocurrency"
    FIAT_CURRENCY = "FiatCurrency"


class LiquidityOutcome(str, Enum):
    SETTLED = "Settled"
    WAITING = "Waiting"
    FAILED = "Failed"


class _WireModel(BaseModel):
    """Base for records forwarded to the canister under their wire names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_candid(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ------------------------------------------------------------------
# 2. Request records
# ------------------------------------------------------------------
class AssetPricingDetails(_WireModel):
    symbol: str
    asset_class: AssetClass = Field(default=AssetClass.CRYPTOCURRENCY, alias="class")

    def to_candid(self) -> Dict[str, Any]:
        return {"symbol": self.symbol, "class": {self.asset_class.value: None}}


class MarketState(_WireModel):
    max_leverage_factor: NonNegativeInt = Field(alias="maxLeverageFactor")
    max_reserve_factor: NonNegativeInt = Field(alias="maxReserveFactor")
    liquidation_factor: NonNegativeInt = Field(alias="liquidationFactor")


class CreateMarketParams(_WireModel):
    asset_pricing_details: AssetPricingDetails = Field(alias="assetPricingDetails")
    init_state: MarketState = Field(alias="initState")
    funding_factor: NonNegativeInt = Field(alias="fundingFactor")
    funding_exponent_factor: NonNegativeInt = Field(alias="fundingExponentFactor")
    longs_max_reserve_factor: NonNegativeInt = Field(alias="longsMaxReserveFactor")
    longs_borrowing_exponent_factor: NonNegativeInt = Field(alias="longsBorrowingExponentFactor")
    longs_base_borrowing_factor: NonNegativeInt = Field(alias="longsBaseBorrowingFactor")
    shorts_max_reserve_factor: NonNegativeInt = Field(alias="shortsMaxReserveFactor")
    shorts_borrowing_exponent_factor: NonNegativeInt = Field(alias="shortsBorrowingExponentFactor")
    shorts_base_borrowing_factor: NonNegativeInt = Field(alias="shortsBaseBorrowingFactor")

    def to_candid(self) -> Dict[str, Any]:
        out = self.model_dump(by_alias=True, exclude={"asset_pricing_details"})
        out["assetPricingDetails"] = self.asset_pricing_details.to_candid()
        return out


class AddLiquidityParams(_WireModel):
    market_index: NonNegativeInt
    amount: NonNegativeInt
    min_amount_out: NonNegativeInt = 0


class RemoveLiquidityParams(_WireModel):
    market_index: NonNegativeInt
    amount_in: NonNegativeInt
    min_amount_out: NonNegativeInt = 0


class DepositParams(_WireModel):
    amount: NonNegativeInt
    block_index: Optional[NonNegativeInt] = None

    def to_candid(self) -> Dict[str, Any]:
        # candid opt is encoded as an empty or single-element list
        block = [] if self.block_index is None else [self.block_index]
        return {"amount": self.amount, "block_index": block}


class WithdrawParams(_WireModel):
    amount: NonNegativeInt


# ------------------------------------------------------------------
# 3. Result records
# ------------------------------------------------------------------
class LiquidityOperationResult(BaseModel):
    outcome: LiquidityOutcome
    amount_out: Optional[int] = None

    @classmethod
    def from_candid(cls, value: Dict[str, Any]) -> "LiquidityOperationResult":
        """Read the decoded variant, e.g. ``{"Settled": {"amount_out": 5}}``."""
        if not isinstance(value, dict) or len(value) != 1:
            raise ValueError(f"expected a single-case variant, got {value!r}")
        (tag, payload), = value.items()
        outcome = LiquidityOutcome(tag)
        amount_out = payload.get("amount_out") if isinstance(payload, dict) else None
        return cls(outcome=outcome, amount_out=amount_out)


class QueryMarketDetailsResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    longs_total_open_interest: int = Field(alias="longsTotalOpenInterest")
    shorts_total_open_interest: int = Field(alias="shortsTotalOpenInterest")
    longs_reserve_available_liquidity: int = Field(alias="longsReserveAvailableLiquidity")
    shorts_reserve_available_liquidity: int = Field(alias="shortsReserveAvailableLiquidity")
    current_funding_factor_per_hour_long: int = Field(alias="currentFundingFactorPerHourLong")
    current_funding_factor_per_hour_short: int = Field(alias="currentFundingFactorPerHourShort")


__all__ = [
    "AssetClass",
    "LiquidityOutcome",
    "AssetPricingDetails",
    "MarketState",
    "CreateMarketParams",
    "AddLiquidityParams",
    "RemoveLiquidityParams",
    "DepositParams",
    "WithdrawParams",
    "LiquidityOperationResult",
    "QueryMarketDetailsResult",
]
