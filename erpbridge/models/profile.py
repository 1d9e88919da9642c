"""Connection profile models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class RunMode(str, Enum):
    """Whether a run talks to a real system or serves fixtures."""
    LIVE = "live"
    MOCK = "mock"


class AuthKind(str, Enum):
    """How an adapter authenticates against its source system."""
    BASIC = "basic"
    OAUTH2 = "oauth2"
    NONE = "none"


@dataclass
class Credentials:
    """Secret material for a profile. Held in memory only."""
    username: Optional[str] = field(default=None, repr=False)
    password: Optional[str] = field(default=None, repr=False)
    client_id: Optional[str] = field(default=None, repr=False)
    client_secret: Optional[str] = field(default=None, repr=False)
    token_url: Optional[str] = None


@dataclass
class AdapterProfile:
    """A named connection configuration."""
    name: str
    source_system: str = "SAP"
    base_url: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    auth_kind: AuthKind = AuthKind.NONE
    credential_ref: Optional[str] = field(default=None, repr=False)
    credentials: Optional[Credentials] = field(default=None, repr=False)
    mode: RunMode = RunMode.MOCK
    client: Optional[str] = None
    timeout_ms: Optional[int] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.auth_kind = AuthKind(self.auth_kind)
        self.mode = RunMode(self.mode)

    @property
    def url(self) -> Optional[str]:
        """Base URL, derived from host and port when not given directly."""
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.host:
            return f"https://{self.host}:{self.port}" if self.port else f"https://{self.host}"
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation. Credentials are never included."""
        return {
            "name": self.name,
            "source_system": self.source_system,
            "base_url": self.url,
            "auth_kind": self.auth_kind.value,
            "mode": self.mode.value,
            "client": self.client,
            "timeout_ms": self.timeout_ms,
            "options": self.options,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdapterProfile":
        """Create from dictionary."""
        creds = data.get("credentials")
        if isinstance(creds, dict):
            creds = Credentials(**creds)
        return cls(
            name=data["name"],
            source_system=data.get("source_system", data.get("sourceSystem", "SAP")),
            base_url=data.get("base_url", data.get("baseUrl")),
            host=data.get("host"),
            port=data.get("port"),
            auth_kind=data.get("auth_kind", data.get("authKind", AuthKind.NONE)),
            credential_ref=data.get("credential_ref", data.get("credentialRef")),
            credentials=creds,
            mode=data.get("mode", RunMode.MOCK),
            client=data.get("client"),
            timeout_ms=data.get("timeout_ms", data.get("timeoutMs")),
            options=data.get("options", {}),
        )
