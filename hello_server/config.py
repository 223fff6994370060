from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

HOST = "127.0.0.1"
DEFAULT_PORT = 3000

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def parse_port(raw: Optional[str]) -> int:
    """Read a port the way a lenient integer parse would.

    Leading whitespace and trailing garbage are ignored ("8080abc" -> 8080).
    Values with no leading digits fall back to DEFAULT_PORT. Range checks are
    left to Settings.
    """
    if raw is None:
        return DEFAULT_PORT
    match = _LEADING_INT.match(raw)
    if not match:
        return DEFAULT_PORT
    return int(match.group(1))


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = HOST
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    # None drains in-flight requests without a deadline
    shutdown_timeout: Optional[float] = Field(None, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(port=parse_port(env.get("PORT")))
