# clearing_ops/services/signer_loader.py
from __future__ import annotations

import re

from solders.keypair import Keypair

from clearing_ops.services.clearing_house.principal import Principal

# ---------------------------------------------------------------------
# Ed25519 DER encoding (SubjectPublicKeyInfo, OID 1.3.101.112)
# ---------------------------------------------------------------------
ED25519_DER_PREFIX = bytes.fromhex("302a300506032b6570032100")

_WHITESPACE_RE = re.compile(r"\s+")
_HEX_PAIR_RE = re.compile(r"[0-9a-f]{1,2}")


class Ed25519Identity:
    """Signing identity backed by a solders Ed25519 keypair."""

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Identity":
        # Keypair.from_seed raises ValueError unless the seed is 32 bytes
        return cls(Keypair.from_seed(bytes(seed)))

    @property
    def public_key(self) -> bytes:
        return bytes(self._keypair.pubkey())

    @property
    def public_key_der(self) -> bytes:
        return ED25519_DER_PREFIX + self.public_key

    def get_principal(self) -> Principal:
        return Principal.self_authenticating(self.public_key_der)

    def secret_seed(self) -> bytes:
        return bytes(self._keypair.secret())

    def sign(self, message: bytes) -> bytes:
        return bytes(self._keypair.sign_message(bytes(message)))

    def __repr__(self) -> str:
        return f"Ed25519Identity(principal={self.get_principal().to_text()!r})"


# ---------------------------------------------------------------------
# Hex parsing
# ---------------------------------------------------------------------
def normalize_private_key_hex(private_key_hex: str) -> str:
    return _WHITESPACE_RE.sub("", private_key_hex.strip().lower())


def private_key_bytes_from_hex(private_key_hex: str) -> bytes:
    """
    Decode operator-supplied hex into raw bytes, two characters per octet.
    A trailing odd character becomes its own octet; length is not checked here.
    """
    normalized = normalize_private_key_hex(private_key_hex)
    pairs = [normalized[i : i + 2] for i in range(0, len(normalized), 2)]
    for pair in pairs:
        # int(..., 16) alone also takes "+f" and non-ASCII digits
        if not _HEX_PAIR_RE.fullmatch(pair):
            raise ValueError(f"private key contains a non-hex byte: {pair!r}")
    return bytes(int(pair, 16) for pair in pairs)


def create_identity_from_private_key(private_key_hex: str) -> Ed25519Identity:
    return Ed25519Identity.from_seed(private_key_bytes_from_hex(private_key_hex))


__all__ = [
    "ED25519_DER_PREFIX",
    "Ed25519Identity",
    "normalize_private_key_hex",
    "private_key_bytes_from_hex",
    "create_identity_from_private_key",
]
