"""Opaque key/value store for wallet secret keys.

Stands in for the device's encrypted-at-rest secure storage. Only the
wallet manager talks to it; the agent lifecycle never does.
"""

from __future__ import annotations

import base64
from typing import Dict, Optional


class KeyStoreError(RuntimeError):
    pass


class KeyStore:
    KEY_PREFIX = "wallet_key_"

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def _storage_key(self, public_key: str) -> str:
        if not public_key:
            raise KeyStoreError("public_key is required")
        return f"{self.KEY_PREFIX}{public_key}"

    def store_key(self, public_key: str, secret_key: bytes) -> None:
        if not secret_key:
            raise KeyStoreError("secret_key is empty")
        self._items[self._storage_key(public_key)] = base64.b64encode(bytes(secret_key)).decode("ascii")

    def retrieve_key(self, public_key: str) -> Optional[bytes]:
        raw = self._items.get(self._storage_key(public_key))
        if raw is None:
            return None
        return base64.b64decode(raw)

    def delete_key(self, public_key: str) -> None:
        self._items.pop(self._storage_key(public_key), None)

    def has_key(self, public_key: str) -> bool:
        return self._storage_key(public_key) in self._items

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["KeyStore", "KeyStoreError"]
