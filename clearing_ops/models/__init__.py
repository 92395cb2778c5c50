"""Typed records exchanged with the clearing-house canister."""
