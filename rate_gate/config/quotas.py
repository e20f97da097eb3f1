from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from loguru import logger

from rate_gate.domain.errors import ConfigurationError
from rate_gate.domain.models import RateLimitConfig


def _flatten(doc: Any) -> dict[str, Any]:
    """
    Accepted layouts:
      {Message: 5, Login: 2}
      {domains: [{Message: 5}, {Login: 2}]}
      {domains: {Message: 5, Login: 2}}
    """
    if isinstance(doc, Mapping) and set(doc) == {"domains"}:
        doc = doc["domains"]

    if isinstance(doc, Mapping):
        return dict(doc)

    if isinstance(doc, list):
        merged: dict[str, Any] = {}
        for item in doc:
            if not isinstance(item, Mapping):
                raise ConfigurationError(f"Quota list items must be mappings, got {item!r}")
            for name, quota in item.items():
                if name in merged:
                    raise ConfigurationError(f"Duplicate quota for category {name!r}")
                merged[name] = quota
        return merged

    raise ConfigurationError(f"Unsupported quota document: {type(doc).__name__}")


def parse_quotas(text: str) -> RateLimitConfig:
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid quota YAML: {exc}") from exc
    if doc is None:
        raise ConfigurationError("Quota config is empty")
    return RateLimitConfig.from_mapping(_flatten(doc))


def load_quotas(path: str | Path) -> RateLimitConfig:
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Unable to read quota config: {p}", data={"path": str(p)}) from exc

    config = parse_quotas(text)
    logger.info("Loaded {} quotas from {}: {}", len(config), p, config.as_dict())
    return config
