"""Settings: environment variables and explicit overrides in one object.

Priority chain (highest to lowest):
  1. Init kwargs: overrides passed to :meth:`ValidatedObjectSettings.from_env`
  2. Env vars: ``VALIDATED_OBJECT_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic_settings import BaseSettings


class ValidatedObjectSettings(BaseSettings):
    """Runtime settings for logging around validation.

    Attributes:
        verbose: Log failed validation passes at DEBUG.
        log_json: Emit JSON lines instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VALIDATED_OBJECT_",
    }

    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> ValidatedObjectSettings:
        """Read env vars, letting *overrides* win over them."""
        return cls(**overrides)

    @property
    def log_level(self) -> int:
        """Level for the ``validated_object`` logger: DEBUG when verbose, else WARNING."""
        return logging.DEBUG if self.verbose else logging.WARNING
