"""Clearing-house operator script.

Derives the operator principal from ``PRIVATE_KEY_HEX`` and, on request,
creates a market on the configured canister.

    python market_cli.py
    python market_cli.py --expected-principal <text>
    python market_cli.py --create-market --symbol BTC
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from clearing_ops.config.config_loader import OperatorConfig, load_config
from clearing_ops.core.logging import configure_console_log, log
from clearing_ops.services.signer_loader import create_identity_from_private_key

parser = argparse.ArgumentParser(description="Clearing house operator helper")
parser.add_argument("--env-file", help="Path to a .env file (defaults to ./.env)")
parser.add_argument("--expected-principal", help="Abort if the derived principal does not match this text")
parser.add_argument("--create-market", action="store_true", help="Create a market with the reference parameters")
parser.add_argument("--symbol", default="BTC", help="Index asset symbol for --create-market")
parser.add_argument("--debug", action="store_true", help="Verbose logging")


async def _amain(args: argparse.Namespace, config: OperatorConfig) -> int:
    if not config.has_private_key:
        log.warning("PRIVATE_KEY_HEX not set; nothing to do", source="market_cli")
        return 0

    identity = create_identity_from_private_key(config.private_key_hex)
    principal = identity.get_principal().to_text()
    print(f"Principal: {principal}")

    if args.expected_principal and args.expected_principal.strip() != principal:
        log.error(
            "Key does not match expected principal",
            source="market_cli",
            payload={"expected": args.expected_principal.strip(), "derived": principal},
        )
        return 1

    if args.create_market:
        # needs the "canister" extra (ic-py)
        from clearing_ops.services.clearing_house.canister import build_clearing_house_actor
        from clearing_ops.services.clearing_house.workflows import (
            create_market_and_fetch,
            default_market_params,
        )

        actor = build_clearing_house_actor(config, identity)
        market_index, details = await create_market_and_fetch(actor, default_market_params(args.symbol))
        print(f"Market index: {market_index}")
        print(details)

    return 0


def main(argv: Optional[Sequence[str]] = None, config: Optional[OperatorConfig] = None) -> int:
    args = parser.parse_args(argv)
    try:
        if config is None:
            config = load_config(dotenv_path=args.env_file)
        configure_console_log(config.log_level, debug=args.debug)
        log.debug("Loaded configuration", source="market_cli", payload=config.redacted())
        return asyncio.run(_amain(args, config))
    except Exception as exc:
        log.exception(exc, "market_cli failed", source="market_cli")
        return 1


if __name__ == "__main__":
    sys.exit(main())
