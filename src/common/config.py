from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from engine.registry import ChoiceRegistry
from state.persistent import DEFAULT_NAMESPACE, PersistentStore
from state.s3_store import S3Storage
from state.storage import FileStorage, StorageArea


# Environment configuration
ENV_NAMESPACE = "CHOICE_NAMESPACE"
ENV_STORAGE_PATH = "CHOICE_STORAGE_PATH"
ENV_STATE_BUCKET = "CHOICE_STATE_BUCKET"
ENV_STATE_PREFIX = "CHOICE_STATE_PREFIX"
ENV_FERNET_KEY = "CHOICE_FERNET_KEY"
ENV_LOG_LEVEL = "CHOICE_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name)
    return val if val not in (None, "") else default


def _require(v: Optional[str], what: str) -> str:
    if not v:
        raise RuntimeError(f"Missing required configuration: {what}")
    return v


@dataclass(frozen=True)
class ChoiceConfig:
    namespace: str = DEFAULT_NAMESPACE
    storage_path: Optional[str] = None
    state_bucket: Optional[str] = None
    state_prefix: str = ""
    fernet_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ChoiceConfig":
        return cls(
            namespace=_getenv(ENV_NAMESPACE, DEFAULT_NAMESPACE),
            storage_path=_getenv(ENV_STORAGE_PATH),
            state_bucket=_getenv(ENV_STATE_BUCKET),
            state_prefix=_getenv(ENV_STATE_PREFIX, "") or "",
            fernet_key=_getenv(ENV_FERNET_KEY),
        )

    @property
    def uses_s3(self) -> bool:
        return self.state_bucket is not None


def build_storage(config: ChoiceConfig, *, s3: Optional[object] = None) -> StorageArea:
    """S3 when a bucket is configured (Fernet key then required), else a JSON file."""
    if config.uses_s3:
        return S3Storage(
            s3=s3,
            bucket=config.state_bucket,
            prefix=config.state_prefix,
            fernet_key=_require(config.fernet_key, ENV_FERNET_KEY),
        )
    return FileStorage(config.storage_path)


def build_registry(config: Optional[ChoiceConfig] = None, *, storage: Optional[StorageArea] = None) -> ChoiceRegistry:
    config = config or ChoiceConfig.from_env()
    store = PersistentStore(storage or build_storage(config), namespace=config.namespace)
    return ChoiceRegistry(store)


def configure_logging(level: Optional[str] = None) -> None:
    name = (level or _getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
