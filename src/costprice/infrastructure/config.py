"""Runtime settings, read from the environment.

Every setting has a default so the CLI works out of the box:

  COSTPRICE_DATA_DIR     directory holding the collection files
  COSTPRICE_MAX_RETRIES  retries for a batch while the store is unavailable
  COSTPRICE_BASE_DELAY   backoff base in seconds (delay = 2**n * base)
  COSTPRICE_BATCH_SIZE   operations per atomic batch
  COSTPRICE_LOG_LEVEL    root log level for the CLI
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from costprice.domain.exceptions import ValidationError
from costprice.domain.service.batch_writer import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_RETRIES,
    MAX_BATCH_SIZE,
)

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:

    data_dir: Path = _DEFAULT_DATA_DIR
    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    batch_size: int = MAX_BATCH_SIZE
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        data_dir = env.get("COSTPRICE_DATA_DIR")
        max_retries = _parse(env, "COSTPRICE_MAX_RETRIES", int, DEFAULT_MAX_RETRIES)
        base_delay = _parse(env, "COSTPRICE_BASE_DELAY", float, DEFAULT_BASE_DELAY)
        batch_size = _parse(env, "COSTPRICE_BATCH_SIZE", int, MAX_BATCH_SIZE)
        log_level = env.get("COSTPRICE_LOG_LEVEL", "WARNING").strip().upper()

        if max_retries < 0:
            raise ValidationError("COSTPRICE_MAX_RETRIES cannot be negative")
        if base_delay < 0:
            raise ValidationError("COSTPRICE_BASE_DELAY cannot be negative")
        if not 0 < batch_size <= MAX_BATCH_SIZE:
            raise ValidationError(
                f"COSTPRICE_BATCH_SIZE must be between 1 and {MAX_BATCH_SIZE}"
            )
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValidationError(f"Unknown COSTPRICE_LOG_LEVEL: {log_level!r}")

        return Settings(
            data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
            max_retries=max_retries,
            base_delay=base_delay,
            batch_size=batch_size,
            log_level=log_level,
        )


def _parse(env, key: str, cast, default):
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid value for {key}: {raw!r}") from exc
