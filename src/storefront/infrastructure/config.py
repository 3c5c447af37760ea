"""Runtime settings.

Read from the environment once, in the composition root, and passed down
explicitly.  Domain and application code never look at ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    log_file: Path | None = None
    reserve_stock: bool = False
    default_payment_method: str = "invoice"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        log_file = env.get("STOREFRONT_LOG_FILE")
        return Settings(
            data_dir=Path(env.get("STOREFRONT_DATA_DIR", str(DEFAULT_DATA_DIR))),
            log_level=env.get("STOREFRONT_LOG_LEVEL", "INFO").upper(),
            log_file=Path(log_file) if log_file else None,
            reserve_stock=_parse_bool(
                "STOREFRONT_RESERVE_STOCK", env.get("STOREFRONT_RESERVE_STOCK", "false")
            ),
            default_payment_method=env.get("STOREFRONT_DEFAULT_PAYMENT_METHOD", "invoice"),
        )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
