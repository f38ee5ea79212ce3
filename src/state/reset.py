from __future__ import annotations

import logging
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .storage import StorageArea, StorageError


logger = logging.getLogger(__name__)


def _prefixes(namespace: str, ids: Optional[str]) -> List[str]:
    if ids is None:
        return [f"{namespace}."]
    return [f"{namespace}.{tok.strip()}" for tok in ids.split(",") if tok.strip()]


def clear_namespace(storage: StorageArea, namespace: str, ids: Optional[str] = None) -> List[str]:
    """Remove namespaced items from a storage area.

    - `ids=None` removes every item under `"{namespace}."`.
    - `ids="choice_state, credentials"` removes items whose key starts with
      `"{namespace}.choice_state"` or `"{namespace}.credentials"`.

    Returns the sorted list of removed keys. Storage failures are logged and
    whatever was removed up to that point is reported.
    """
    prefixes = _prefixes(namespace, ids)
    removed: List[str] = []
    try:
        targets = sorted({k for k in storage.keys() if any(k.startswith(p) for p in prefixes)})
        for key in targets:
            storage.remove_item(key)
            removed.append(key)
    except (StorageError, ClientError, BotoCoreError, OSError) as ex:
        logger.warning("Failed to clear %s items: %s", namespace, ex)
    return removed
