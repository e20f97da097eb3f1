from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, NewType, Union

from .errors import ConfigurationError


RequestCategory = NewType("RequestCategory", str)
ClientId = Union[int, str]

_CATEGORY_RE = re.compile(r"[^\s:]+")


class Decision(str, Enum):
    ADMIT = "admit"
    DROP = "drop"


def validate_category(category: str) -> RequestCategory:
    if not isinstance(category, str) or not _CATEGORY_RE.fullmatch(category):
        raise ConfigurationError(
            f"Invalid request category: {category!r} (expected non-empty name without ':' or whitespace)",
            data={"category": category if isinstance(category, str) else repr(category)},
        )
    return RequestCategory(category)


@dataclass(frozen=True, slots=True)
class LogKey:
    """
    Storage key of one client's history for one category.
    Rendered as "<category>:<client_id>"; categories never contain ':'
    so the first ':' always separates the two parts.
    """
    category: RequestCategory
    client_id: str

    @classmethod
    def for_request(cls, category: str, client_id: ClientId) -> "LogKey":
        return cls(category=validate_category(category), client_id=str(client_id))

    def __str__(self) -> str:
        return f"{self.category}:{self.client_id}"


def _checked_quotas(quotas: Mapping[str, int]) -> dict[str, int]:
    checked: dict[str, int] = {}
    for category, quota in quotas.items():
        name = validate_category(category)
        # bool is an int subclass; "Login: true" is a config typo, not a quota
        if isinstance(quota, bool) or not isinstance(quota, int) or quota <= 0:
            raise ConfigurationError(
                f"Quota for {name!r} must be a positive integer, got {quota!r}",
                data={"category": name},
            )
        checked[name] = quota
    return checked


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    """Read-only mapping category -> max admitted requests per 60-second window."""
    _quotas: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # validated copy behind a read-only view, however the instance was built
        object.__setattr__(self, "_quotas", MappingProxyType(_checked_quotas(self._quotas)))

    @classmethod
    def from_mapping(cls, quotas: Mapping[str, int]) -> "RateLimitConfig":
        return cls(_quotas=quotas)

    def quota(self, category: str) -> int:
        try:
            return self._quotas[category]
        except KeyError as exc:
            raise ConfigurationError(
                f"Unknown request category in config: {category!r}",
                data={"category": category},
            ) from exc

    @property
    def categories(self) -> list[RequestCategory]:
        return [RequestCategory(c) for c in self._quotas]

    def as_dict(self) -> dict[str, int]:
        return dict(self._quotas)

    def __contains__(self, category: object) -> bool:
        return category in self._quotas

    def __len__(self) -> int:
        return len(self._quotas)


@dataclass(frozen=True, slots=True)
class WindowEstimate:
    """Outcome of one admission check, kept for diagnostics."""
    key: LogKey
    quota: int
    current: int
    previous: int
    elapsed_fraction: float
    estimate: float
    decision: Decision

    @property
    def admitted(self) -> bool:
        return self.decision is Decision.ADMIT

    def to_dict(self) -> dict[str, object]:
        return {
            "decision": self.decision.value,
            "key": str(self.key),
            "quota": self.quota,
            "current": self.current,
            "previous": self.previous,
            "elapsed_fraction": self.elapsed_fraction,
            "estimate": self.estimate,
        }
