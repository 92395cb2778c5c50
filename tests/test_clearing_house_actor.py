import pytest

from clearing_ops.models.clearing_house import (
    AddLiquidityParams,
    DepositParams,
    RemoveLiquidityParams,
    WithdrawParams,
)
from clearing_ops.services.clearing_house.actor import ClearingHouseActor, ClearingHouseService
from clearing_ops.services.clearing_house.principal import Principal
from clearing_ops.services.clearing_house.workflows import default_market_params
from conftest import StubClearingHouse

USER = Principal.anonymous()


def _cases():
    market = default_market_params()
    add = AddLiquidityParams(market_index=0, amount=10 ** 22, min_amount_out=0)
    remove = RemoveLiquidityParams(market_index=0, amount_in=5, min_amount_out=1)
    deposit = DepositParams(amount=10 ** 20, block_index=42)
    withdraw = WithdrawParams(amount=7)
    # (facade method, args, service method, response)
    return [
        ("create_market", (market,), "create_new_market", 3),
        ("query_market_details", (3,), "query_market_details", {"longsTotalOpenInterest": 1}),
        ("get_market_details", (3,), "get_market_details", {"token_identifier": "BTC"}),
        ("get_user_shares_balance", (USER, 3), "get_user_market_liquidity_shares", 99),
        ("get_user_balance", (USER,), "get_user_balance", 12345),
        ("add_liquidity", (add,), "add_liquidity", {"Settled": {"amount_out": 10}}),
        ("deposit_into_account", (deposit,), "deposit_into_account", True),
        ("remove_liquidity", (remove,), "remove_liquidity", None),
        ("withdraw", (withdraw,), "withdraw", None),
    ]


def test_stub_satisfies_service_protocol(stub_service):
    assert isinstance(stub_service, ClearingHouseService)


@pytest.mark.asyncio
@pytest.mark.parametrize("facade_method, args, service_method, response", _cases())
async def test_facade_passes_through_unmodified(facade_method, args, service_method, response):
    service = StubClearingHouse(responses={service_method: response})
    actor = ClearingHouseActor(service)

    result = await getattr(actor, facade_method)(*args)

    assert result is response
    assert len(service.calls) == 1
    name, passed = service.calls[0]
    assert name == service_method
    assert len(passed) == len(args)
    assert all(p is a for p, a in zip(passed, args))


@pytest.mark.asyncio
@pytest.mark.parametrize("facade_method, args, service_method, response", _cases())
async def test_remote_failure_propagates(facade_method, args, service_method, response):
    error = RuntimeError("canister rejected the call")
    actor = ClearingHouseActor(StubClearingHouse(error=error))

    with pytest.raises(RuntimeError) as exc:
        await getattr(actor, facade_method)(*args)
    assert exc.value is error


@pytest.mark.asyncio
async def test_calls_are_not_retried(stub_service):
    stub_service.error = ConnectionError("boom")
    actor = ClearingHouseActor(stub_service)
    with pytest.raises(ConnectionError):
        await actor.get_user_balance(USER)
    assert len(stub_service.calls) == 1
