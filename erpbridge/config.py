"""Runtime settings."""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

from .errors import RuleValidationError

ENV_PREFIX = "ERPBRIDGE_"
INT_FIELDS = ("extraction_concurrency", "event_history_capacity", "default_timeout_ms")


@dataclass
class Settings:
    """Process-wide settings, read from ``ERPBRIDGE_*`` variables."""
    log_level: str = "INFO"
    log_format: str = "text"  # text | json
    checkpoint_dir: str = "./checkpoints"
    connection_env_prefix: str = "SAP_CONN"
    extraction_concurrency: int = 4
    event_history_capacity: int = 1000
    default_timeout_ms: int = 30000
    mode: str = "mock"  # mock | live
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ])

    def __post_init__(self):
        errors = []
        self.mode = str(self.mode).lower()
        if self.mode not in ("mock", "live"):
            errors.append(f"mode must be mock or live, got {self.mode!r}")
        if self.log_format not in ("text", "json"):
            errors.append(f"log_format must be text or json, got {self.log_format!r}")
        for name in INT_FIELDS:
            if getattr(self, name) < 1:
                errors.append(f"{name} must be positive")
        if errors:
            raise RuleValidationError("Invalid settings", errors)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables, falling back to defaults.

        Raises:
            RuleValidationError: A variable holds an unusable value
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None:
                continue
            if f.name == "cors_origins":
                values[f.name] = [o.strip() for o in raw.split(",") if o.strip()]
            elif f.name in INT_FIELDS:
                try:
                    values[f.name] = int(raw)
                except ValueError:
                    raise RuleValidationError("Invalid settings", [f"{ENV_PREFIX}{f.name.upper()} is not an integer: {raw!r}"]) from None
            else:
                values[f.name] = raw
        return cls(**values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
