# clearing_ops/services/clearing_house/principal.py
from __future__ import annotations

import base64
import hashlib
import zlib

# ---------- constants ----------
SELF_AUTHENTICATING_SUFFIX = b"\x02"
ANONYMOUS_SUFFIX = b"\x04"
MAX_PRINCIPAL_BYTES = 29
CHECKSUM_BYTES = 4
GROUP_SIZE = 5


def _crc32_be(raw: bytes) -> bytes:
    return (zlib.crc32(raw) & 0xFFFFFFFF).to_bytes(CHECKSUM_BYTES, "big")


def _group(text: str) -> str:
    return "-".join(text[i : i + GROUP_SIZE] for i in range(0, len(text), GROUP_SIZE))


class Principal:
    """
    Ledger address: up to 29 opaque bytes with a checksummed base32 text form.
    Self-authenticating principals are SHA-224 of the DER public key plus 0x02.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes = b""):
        raw = bytes(raw)
        if len(raw) > MAX_PRINCIPAL_BYTES:
            raise ValueError(f"principal is at most {MAX_PRINCIPAL_BYTES} bytes, got {len(raw)}")
        self._raw = raw

    # ---------- constructors ----------
    @classmethod
    def self_authenticating(cls, der_public_key: bytes) -> "Principal":
        digest = hashlib.sha224(bytes(der_public_key)).digest()
        return cls(digest + SELF_AUTHENTICATING_SUFFIX)

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls(ANONYMOUS_SUFFIX)

    @classmethod
    def management_canister(cls) -> "Principal":
        return cls(b"")

    @classmethod
    def from_text(cls, text: str) -> "Principal":
        s = (text or "").strip().lower()
        compact = s.replace("-", "")
        if not compact:
            raise ValueError("principal text is empty")
        padding = "=" * (-len(compact) % 8)
        try:
            decoded = base64.b32decode(compact.upper() + padding)
        except ValueError as e:  # binascii.Error is a ValueError
            raise ValueError(f"principal text is not base32: {text!r}") from e
        if len(decoded) < CHECKSUM_BYTES:
            raise ValueError(f"principal text too short: {text!r}")

        checksum, raw = decoded[:CHECKSUM_BYTES], decoded[CHECKSUM_BYTES:]
        principal = cls(raw)
        if _crc32_be(raw) != checksum:
            raise ValueError(f"principal checksum mismatch: {text!r}")
        if principal.to_text() != s:
            raise ValueError(f"principal text is not in canonical form: {text!r}")
        return principal

    # ---------- views ----------
    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def is_anonymous(self) -> bool:
        return self._raw == ANONYMOUS_SUFFIX

    def to_text(self) -> str:
        encoded = base64.b32encode(_crc32_be(self._raw) + self._raw).decode("ascii")
        return _group(encoded.lower().rstrip("="))

    def __bytes__(self) -> bytes:
        return self._raw

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Principal({self.to_text()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Principal):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)


__all__ = ["Principal"]
