import pytest
from pydantic import ValidationError

from clearing_ops.config.config_loader import (
    DEFAULT_CANISTER_ID,
    DEFAULT_IC_HOST,
    OperatorConfig,
    load_config,
)
from conftest import SEED_HEX


def test_defaults_from_empty_env():
    cfg = load_config(env={})
    assert cfg.private_key_hex is None
    assert not cfg.has_private_key
    assert cfg.ic_host == DEFAULT_IC_HOST
    assert cfg.canister_id == DEFAULT_CANISTER_ID
    assert cfg.log_level == "INFO"


def test_values_from_env_mapping():
    cfg = load_config(
        env={
            "PRIVATE_KEY_HEX": SEED_HEX,
            "IC_HOST": " http://127.0.0.1:4943 ",
            "CLEARING_HOUSE_CANISTER_ID": "aaaaa-aa",
            "LOG_LEVEL": "debug",
        }
    )
    assert cfg.private_key_hex == SEED_HEX
    assert cfg.ic_host == "http://127.0.0.1:4943"
    assert cfg.canister_id == "aaaaa-aa"
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize("blank", ["", "   ", "\n"])
def test_blank_key_counts_as_missing(blank):
    assert load_config(env={"PRIVATE_KEY_HEX": blank}).private_key_hex is None


def test_blank_optional_values_keep_defaults():
    cfg = load_config(env={"IC_HOST": "  ", "LOG_LEVEL": ""})
    assert cfg.ic_host == DEFAULT_IC_HOST
    assert cfg.log_level == "INFO"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        OperatorConfig(log_level="LOUD")


def test_redacted_hides_private_key():
    red = OperatorConfig(private_key_hex=SEED_HEX).redacted()
    assert SEED_HEX not in str(red)
    assert red["private_key_hex"].endswith(SEED_HEX[-4:])
    assert red["ic_host"] == DEFAULT_IC_HOST


def test_dotenv_file_fills_process_env(tmp_path, monkeypatch):
    # register undo so values loaded from the file are removed afterwards
    for var in ("PRIVATE_KEY_HEX", "IC_HOST"):
        monkeypatch.setenv(var, "x")
        monkeypatch.delenv(var)

    env_file = tmp_path / ".env"
    env_file.write_text(f"PRIVATE_KEY_HEX={SEED_HEX}\nIC_HOST=http://localhost:4943\n")

    cfg = load_config(dotenv_path=env_file)
    assert cfg.private_key_hex == SEED_HEX
    assert cfg.ic_host == "http://localhost:4943"


def test_process_env_wins_over_dotenv(tmp_path, monkeypatch):
    monkeypatch.setenv("IC_HOST", "http://from-env")
    env_file = tmp_path / ".env"
    env_file.write_text("IC_HOST=http://from-file\n")

    assert load_config(dotenv_path=env_file).ic_host == "http://from-env"
