"""Named connection profiles and cached adapter connections."""

import logging
import os
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .base import BaseSourceAdapter
from .registry import SourceAdapterRegistry, adapter_registry
from ..errors import BridgeError, RuleValidationError, SourceConnectionError
from ..models.profile import AdapterProfile, AuthKind, Credentials, RunMode

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "SAP_CONN"

# Longest first so CLIENT_SECRET wins over a shorter suffix.
ENV_FIELDS = (
    "CLIENT_SECRET",
    "CLIENT_ID",
    "TOKEN_URL",
    "BASE_URL",
    "USERNAME",
    "PASSWORD",
    "TIMEOUT_MS",
    "SYSTEM",
    "CLIENT",
    "MODE",
)

BASIC_FIELDS = ("BASE_URL", "USERNAME", "PASSWORD")
OAUTH_FIELDS = ("BASE_URL", "TOKEN_URL", "CLIENT_ID", "CLIENT_SECRET")


def _split_env_key(rest: str) -> Optional[tuple]:
    """Split ``<NAME>_<FIELD>`` into (name, field) using the known field list."""
    for field_name in ENV_FIELDS:
        suffix = f"_{field_name}"
        if rest.endswith(suffix) and len(rest) > len(suffix):
            return rest[: -len(suffix)], field_name
    return None


def profile_from_env_fields(name: str, values: Dict[str, str], prefix: str) -> Optional[AdapterProfile]:
    """
    Build a profile from collected env fields, or None if no auth field set is complete.

    Raises:
        RuleValidationError: ``TIMEOUT_MS`` is not an integer
    """
    timeout_ms = None
    if values.get("TIMEOUT_MS"):
        try:
            timeout_ms = int(values["TIMEOUT_MS"])
        except ValueError:
            raise RuleValidationError(
                f"Invalid connection settings for {name.lower()}",
                [f"{prefix}_{name}_TIMEOUT_MS is not an integer: {values['TIMEOUT_MS']!r}"],
            ) from None

    if all(values.get(f) for f in OAUTH_FIELDS):
        auth_kind = AuthKind.OAUTH2
        credentials = Credentials(
            client_id=values["CLIENT_ID"],
            client_secret=values["CLIENT_SECRET"],
            token_url=values["TOKEN_URL"],
        )
    elif all(values.get(f) for f in BASIC_FIELDS):
        auth_kind = AuthKind.BASIC
        credentials = Credentials(username=values["USERNAME"], password=values["PASSWORD"])
    else:
        return None

    return AdapterProfile(
        name=name.lower(),
        source_system=values.get("SYSTEM", "SAP").upper(),
        base_url=values["BASE_URL"],
        auth_kind=auth_kind,
        credential_ref=f"env:{prefix}_{name}",
        credentials=credentials,
        mode=values.get("MODE", RunMode.LIVE.value).lower(),
        client=values.get("CLIENT"),
        timeout_ms=timeout_ms,
    )


class ConnectionManager:
    """
    Owns connection profiles and the live adapters created from them.

    Adapters are created lazily on the first ``get`` and cached per
    profile name until ``disconnect_all``. Profiles without their own
    timeout get ``default_timeout_ms``.
    """

    def __init__(self, registry: Optional[SourceAdapterRegistry] = None, default_timeout_ms: Optional[int] = None):
        self.registry = registry or adapter_registry
        self.default_timeout_ms = default_timeout_ms
        self._profiles: Dict[str, AdapterProfile] = {}
        self._connections: Dict[str, BaseSourceAdapter] = {}

    def add_profile(self, profile: AdapterProfile) -> None:
        self._profiles[profile.name] = profile
        logger.debug(f"Profile added: {profile.name} ({profile.source_system})")

    def load_profiles(self, profiles: Mapping[str, Dict[str, Any]]) -> None:
        """Add profiles from a name to config-dict mapping."""
        for name, config in profiles.items():
            self.add_profile(AdapterProfile.from_dict({**config, "name": name}))

    def load_from_env(self, prefix: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> List[str]:
        """
        Materialize profiles from ``<PREFIX>_<NAME>_<FIELD>`` variables.

        Args:
            prefix: Variable prefix, ``SAP_CONN`` by default
            environ: Variables to scan, ``os.environ`` by default

        Returns:
            Names of the profiles whose basic or OAuth field set was complete
        """
        prefix = (prefix or DEFAULT_ENV_PREFIX).rstrip("_")
        environ = os.environ if environ is None else environ
        collected: Dict[str, Dict[str, str]] = {}

        for key, value in environ.items():
            if not key.startswith(f"{prefix}_"):
                continue
            parts = _split_env_key(key[len(prefix) + 1:])
            if parts is None:
                logger.debug(f"Ignoring unrecognized connection variable {key}")
                continue
            name, field_name = parts
            collected.setdefault(name, {})[field_name] = value

        loaded = []
        for name, values in collected.items():
            try:
                profile = profile_from_env_fields(name, values, prefix)
            except RuleValidationError as e:
                logger.warning(f"{e.message}: {'; '.join(e.errors)}; skipped")
                continue
            if profile is None:
                logger.warning(f"Incomplete connection settings for {name.lower()}; skipped")
                continue
            self.add_profile(profile)
            loaded.append(profile.name)

        logger.info(f"Loaded {len(loaded)} connection profile(s) from environment")
        return loaded

    def get(self, name: str) -> BaseSourceAdapter:
        """
        Return the adapter for a profile, creating it on first use.

        Raises:
            SourceConnectionError: No profile with that name exists
        """
        if name in self._connections:
            return self._connections[name]

        profile = self._profiles.get(name)
        if profile is None:
            raise SourceConnectionError(f"No connection profile found for '{name}'", profile=name)

        if profile.timeout_ms is None and self.default_timeout_ms:
            profile = replace(profile, timeout_ms=self.default_timeout_ms)
        adapter = self.registry.create(profile.source_system, profile=profile)
        self._connections[name] = adapter
        return adapter

    def has(self, name: str) -> bool:
        return name in self._profiles

    def list_profiles(self) -> List[str]:
        return list(self._profiles)

    def get_profile(self, name: str) -> Optional[AdapterProfile]:
        return self._profiles.get(name)

    async def connect_all(self) -> Dict[str, Dict[str, Any]]:
        """Connect every profile; failures are reported per profile."""
        results: Dict[str, Dict[str, Any]] = {}
        for name in self._profiles:
            try:
                await self.get(name).connect()
                results[name] = {"status": "connected"}
                logger.info(f"Connected: {name}")
            except BridgeError as e:
                results[name] = {"status": "error", "error": e.message}
                logger.warning(f"Connection failed: {name}: {e.message}")
        return results

    async def health_check(self) -> Dict[str, Any]:
        """
        Health-check every profile.

        Returns:
            Dict with ``overall`` (healthy, degraded, unhealthy or
            no_connections), ``total``, ``healthy`` and ``perProfile``
        """
        per_profile: Dict[str, Dict[str, Any]] = {}
        healthy = 0

        for name in self._profiles:
            checked_at = datetime.now(timezone.utc).isoformat()
            try:
                result = await self.get(name).health_check()
            except BridgeError as e:
                result = {"healthy": False, "latencyMs": None, "details": {"code": e.code, "error": e.message}}
            per_profile[name] = {**result, "checkedAt": checked_at}
            if result["healthy"]:
                healthy += 1

        total = len(self._profiles)
        if total == 0:
            overall = "no_connections"
        elif healthy == total:
            overall = "healthy"
        elif healthy > 0:
            overall = "degraded"
        else:
            overall = "unhealthy"

        return {"overall": overall, "total": total, "healthy": healthy, "perProfile": per_profile}

    def telemetry(self) -> Dict[str, Dict[str, Any]]:
        return {name: conn.telemetry.to_dict() for name, conn in self._connections.items()}

    async def disconnect_all(self) -> None:
        """Disconnect and forget every cached adapter."""
        for name, conn in self._connections.items():
            try:
                await conn.disconnect()
                logger.debug(f"Disconnected: {name}")
            except BridgeError as e:
                logger.warning(f"Disconnect failed for {name}: {e.message}")
        self._connections.clear()

    @property
    def size(self) -> int:
        return len(self._connections)

    @property
    def profile_count(self) -> int:
        return len(self._profiles)
