"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A stored cache value with its absolute expiry and schema version.

    A ``value`` of None is a tombstone: the compute ran and produced nothing
    worth keeping. Tombstones are written with the short negative TTL.

    Attributes:
        value: Serialized payload, or None for a negative result
        expires_at: Unix timestamp after which the entry is stale
        version: Schema version the payload was written with
    """

    value: Any
    expires_at: float
    version: str

    @property
    def is_tombstone(self) -> bool:
        return self.value is None

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "expires_at": self.expires_at, "version": self.version}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheEntry":
        return cls(
            value=data.get("value"),
            expires_at=float(data["expires_at"]),
            version=str(data["version"]),
        )
