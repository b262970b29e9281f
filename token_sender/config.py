import logging
import os
from typing import NamedTuple, Optional
from urllib.parse import urlparse

from dotenv import dotenv_values

from token_sender.errors import ConfigError
from token_sender.utils import int_16

logger = logging.getLogger(__name__)

ENV_FILE = ".env"

STARKNET_RPC_URL = "STARKNET_RPC_URL"
PRIVATE_KEY = "PRIVATE_KEY"
ACCOUNT_ADDRESS = "ACCOUNT_ADDRESS"
DECLARER_ACCOUNT_ADDRESS = "DECLARER_ACCOUNT_ADDRESS"
MANIFEST_PATH = "MANIFEST_PATH"
BLOCK_TAG = "BLOCK_TAG"
LOG_LEVEL = "LOG_LEVEL"

REQUIRED_KEYS = (STARKNET_RPC_URL, PRIVATE_KEY, ACCOUNT_ADDRESS)
BLOCK_TAGS = ("pending", "latest")
DEFAULT_BLOCK_TAG = "pending"
DEFAULT_LOG_LEVEL = "INFO"


class Config(NamedTuple):
    rpc_url: str
    private_key: int
    account_address: int
    # Signer for declare. Defaults to account_address.
    declarer_address: int
    manifest_path: Optional[str] = None
    block_tag: str = DEFAULT_BLOCK_TAG
    log_level: str = DEFAULT_LOG_LEVEL


def read_env_file(path: str = ENV_FILE) -> dict:
    if not os.path.isfile(path):
        raise ConfigError("env file not found", step="load config", subject=path)
    return dotenv_values(path)


def _required(values: dict, key: str, path: str) -> str:
    value = values.get(key)
    if value is None or value.strip() == "":
        raise ConfigError(f"missing required key {key}", step="load config", subject=path)
    return value.strip()


def _hex(value: str, key: str, path: str) -> int:
    try:
        return int_16(value)
    except ValueError as err:
        raise ConfigError(
            f"{key} is not a hexadecimal value", step="load config", subject=path
        ) from err


def load_config(path: str = ENV_FILE) -> Config:
    """
    Reads and validates the env file. No network access happens here, so a broken config
    fails before any connection is attempted.
    """
    values = read_env_file(path)
    for key in REQUIRED_KEYS:
        _required(values, key, path)

    rpc_url = values[STARKNET_RPC_URL].strip()
    if urlparse(rpc_url).scheme not in ("http", "https"):
        raise ConfigError(
            f"{STARKNET_RPC_URL} must be an http(s) URL", step="load config", subject=path
        )

    account_address = _hex(values[ACCOUNT_ADDRESS].strip(), ACCOUNT_ADDRESS, path)
    declarer = (values.get(DECLARER_ACCOUNT_ADDRESS) or "").strip()
    declarer_address = (
        _hex(declarer, DECLARER_ACCOUNT_ADDRESS, path) if declarer else account_address
    )

    block_tag = (values.get(BLOCK_TAG) or DEFAULT_BLOCK_TAG).strip().lower()
    if block_tag not in BLOCK_TAGS:
        raise ConfigError(
            f"{BLOCK_TAG} must be one of {', '.join(BLOCK_TAGS)}", step="load config", subject=path
        )

    log_level = (values.get(LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(
            f"{LOG_LEVEL} {log_level} is not a logging level", step="load config", subject=path
        )

    config = Config(
        rpc_url=rpc_url,
        private_key=_hex(values[PRIVATE_KEY].strip(), PRIVATE_KEY, path),
        account_address=account_address,
        declarer_address=declarer_address,
        manifest_path=(values.get(MANIFEST_PATH) or "").strip() or None,
        block_tag=block_tag,
        log_level=log_level,
    )
    logger.debug("Loaded config from %s", path)
    return config
