import pytest
from pydantic import ValidationError

from clearing_ops.models.clearing_house import (
    AddLiquidityParams,
    AssetClass,
    AssetPricingDetails,
    DepositParams,
    LiquidityOperationResult,
    LiquidityOutcome,
    MarketState,
    QueryMarketDetailsResult,
    WithdrawParams,
)
from clearing_ops.services.clearing_house.workflows import default_market_params


def test_create_market_params_use_wire_names():
    wire = default_market_params("ETH").to_candid()

    assert wire["assetPricingDetails"] == {"symbol": "ETH", "class": {"Cryptocurrency": None}}
    assert set(wire["initState"]) == {"maxLeverageFactor", "maxReserveFactor", "liquidationFactor"}
    assert set(wire) == {
        "assetPricingDetails",
        "initState",
        "fundingFactor",
        "fundingExponentFactor",
        "longsMaxReserveFactor",
        "longsBorrowingExponentFactor",
        "longsBaseBorrowingFactor",
        "shortsMaxReserveFactor",
        "shortsBorrowingExponentFactor",
        "shortsBaseBorrowingFactor",
    }


def test_asset_pricing_details_accepts_wire_alias():
    details = AssetPricingDetails.model_validate({"symbol": "EUR", "class": "FiatCurrency"})
    assert details.asset_class is AssetClass.FIAT_CURRENCY
    assert details.to_candid() == {"symbol": "EUR", "class": {"FiatCurrency": None}}


def test_market_state_rejects_negative_factors():
    with pytest.raises(ValidationError):
        MarketState(max_leverage_factor=-1, max_reserve_factor=0, liquidation_factor=0)


def test_params_are_frozen():
    params = WithdrawParams(amount=1)
    with pytest.raises(ValidationError):
        params.amount = 2


def test_deposit_optional_block_index():
    assert DepositParams(amount=5).to_candid() == {"amount": 5, "block_index": []}
    assert DepositParams(amount=5, block_index=9).to_candid() == {"amount": 5, "block_index": [9]}


def test_add_liquidity_defaults():
    params = AddLiquidityParams(market_index=1, amount=100)
    assert params.to_candid() == {"market_index": 1, "amount": 100, "min_amount_out": 0}


def test_liquidity_result_from_variant():
    settled = LiquidityOperationResult.from_candid({"Settled": {"amount_out": 77}})
    assert settled.outcome is LiquidityOutcome.SETTLED
    assert settled.amount_out == 77

    waiting = LiquidityOperationResult.from_candid({"Waiting": None})
    assert waiting.outcome is LiquidityOutcome.WAITING
    assert waiting.amount_out is None


@pytest.mark.parametrize("bad", [{}, {"Settled": {}, "Failed": None}, "Failed", {"Unknown": None}])
def test_liquidity_result_rejects_bad_variants(bad):
    with pytest.raises(ValueError):
        LiquidityOperationResult.from_candid(bad)


def test_query_market_details_result_reads_wire_names():
    result = QueryMarketDetailsResult.model_validate(
        {
            "longsTotalOpenInterest": 10,
            "shortsTotalOpenInterest": 20,
            "longsReserveAvailableLiquidity": 30,
            "shortsReserveAvailableLiquidity": 40,
            "currentFundingFactorPerHourLong": -5,
            "currentFundingFactorPerHourShort": 3,
        }
    )
    assert result.shorts_total_open_interest == 20
    assert result.current_funding_factor_per_hour_long == -5
