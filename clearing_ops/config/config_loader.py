from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from clearing_ops.utils.console_logger import Level

SENSITIVE_NAME_TOKENS: Tuple[str, ...] = ("KEY", "SECRET", "PASSWORD", "TOKEN", "SEED")

DEFAULT_IC_HOST = "https://icp-api.io"
DEFAULT_CANISTER_ID = "5ch5r-aiaaa-aaaao-a4pma-cai"

# environment variable -> OperatorConfig field
ENV_FIELDS: Dict[str, str] = {
    "PRIVATE_KEY_HEX": "private_key_hex",
    "IC_HOST": "ic_host",
    "CLEARING_HOUSE_CANISTER_ID": "canister_id",
    "LOG_LEVEL": "log_level",
}


def _redact_value(key: str, value: Any) -> Any:
    if isinstance(value, str) and any(tok in key.upper() for tok in SENSITIVE_NAME_TOKENS):
        return ("****" if len(value) <= 4 else f"{'*'*4}…{value[-4:]}")
    return value


class OperatorConfig(BaseModel):
    """Everything an operator script reads from its environment."""

    model_config = ConfigDict(frozen=True)

    private_key_hex: Optional[str] = None
    ic_host: str = DEFAULT_IC_HOST
    canister_id: str = DEFAULT_CANISTER_ID
    log_level: str = "INFO"

    @field_validator("private_key_hex", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        return Level.coerce(v).name

    @property
    def has_private_key(self) -> bool:
        return self.private_key_hex is not None

    def redacted(self) -> Dict[str, Any]:
        return {k: _redact_value(k, v) for k, v in self.model_dump().items()}


def load_config(
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Union[str, os.PathLike]] = None,
) -> OperatorConfig:
    """
    Build an OperatorConfig from *env*. When *env* is None the process
    environment is used, after merging a ``.env`` file (existing variables win).
    """
    if env is None:
        if dotenv_path is not None:
            load_dotenv(dotenv_path=Path(dotenv_path), override=False)
        else:
            load_dotenv(override=False)
        env = os.environ

    values: Dict[str, Any] = {}
    for var, field in ENV_FIELDS.items():
        raw = env.get(var)
        if raw is None:
            continue
        if field != "private_key_hex":
            raw = raw.strip()
            if not raw:
                continue
        values[field] = raw
    return OperatorConfig(**values)


__all__ = ["OperatorConfig", "load_config", "ENV_FIELDS", "DEFAULT_IC_HOST", "DEFAULT_CANISTER_ID"]
