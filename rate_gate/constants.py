from __future__ import annotations


# Length of the trailing window and of one wall-clock bucket
WINDOW_SEC: int = 60

# Decimal places kept in the weighted estimate
ESTIMATE_PRECISION: int = 9

DEFAULT_QUOTAS_PATH: str = "config/rate_limiter_config.yaml"
DEFAULT_REDIS_KEY_PREFIX: str = "rate_gate:"

MSG_DROPPED: str = "You have no request tokens left... Take a coffee break"
