import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from clearing_ops.utils.console_logger import ConsoleLogger

SEED_HEX = "dead" * 16  # 64 hex chars -> 32-byte seed


class StubClearingHouse:
    """Stand-in for the canister: records every call and returns canned responses."""

    def __init__(self, responses=None, error=None):
        self.calls = []
        self.responses = dict(responses or {})
        self.error = error

    async def _answer(self, name, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error
        return self.responses.get(name)

    async def create_new_market(self, params):
        return await self._answer("create_new_market", params)

    async def query_market_details(self, market_index):
        return await self._answer("query_market_details", market_index)

    async def get_market_details(self, market_index):
        return await self._answer("get_market_details", market_index)

    async def get_user_market_liquidity_shares(self, principal, market_index):
        return await self._answer("get_user_market_liquidity_shares", principal, market_index)

    async def get_user_balance(self, principal):
        return await self._answer("get_user_balance", principal)

    async def add_liquidity(self, params):
        return await self._answer("add_liquidity", params)

    async def deposit_into_account(self, params):
        return await self._answer("deposit_into_account", params)

    async def remove_liquidity(self, params):
        return await self._answer("remove_liquidity", params)

    async def withdraw(self, params):
        return await self._answer("withdraw", params)


@pytest.fixture
def stub_service():
    return StubClearingHouse()


@pytest.fixture(autouse=True)
def _restore_log_level():
    level = ConsoleLogger._default_level
    yield
    ConsoleLogger._default_level = level
