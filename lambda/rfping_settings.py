# rfping_settings.py
# Environment-driven configuration for the ping recorder Lambda.
# Terraform injects these as Lambda environment variables.

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_REGION = "us-east-1"
DEFAULT_TABLE_NAME = "Clients"


@dataclass(frozen=True)
class Settings:
    region: str = DEFAULT_REGION
    table_name: str = DEFAULT_TABLE_NAME
    endpoint_url: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        # "region" is the variable older deployments set; AWS_REGION is set by the runtime
        region = env.get("region") or env.get("AWS_REGION") or DEFAULT_REGION
        return cls(
            region=region,
            table_name=env.get("TABLE_NAME") or DEFAULT_TABLE_NAME,
            endpoint_url=env.get("AWS_ENDPOINT_URL") or None,
            log_level=_log_level(env.get("LOG_LEVEL")),
        )


def _log_level(value: Optional[str]) -> str:
    # Unknown names fall back to INFO instead of failing logger setup
    level = (value or "INFO").strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return "INFO"
