from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional

try:
    import streamlit as st
except ImportError:  # pragma: no cover - streamlit not available during some tests
    st = None

from supabase import Client, create_client


logger = logging.getLogger(__name__)

URL_OVERRIDE_KEY = "SUPABASE_URL_OVERRIDE"
ANON_KEY_OVERRIDE_KEY = "SUPABASE_ANON_KEY_OVERRIDE"


@dataclass(frozen=True)
class SupabaseSettings:
    """Connection strings resolved for the Supabase client."""

    url: str = ""
    anon_key: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.url and self.anon_key and self.url.startswith("http"))

    @property
    def is_empty(self) -> bool:
        return not self.url and not self.anon_key


class SupabaseConfigError(RuntimeError):
    """Raised when Supabase configuration is missing or invalid."""


def _supabase_secrets() -> Dict[str, Any]:
    if st is None:
        return {}
    try:
        return dict(st.secrets.get("supabase", {}))
    except Exception:
        # No secrets.toml at all is a normal deployment.
        return {}


def _session_override(override_key: str) -> str:
    if st is None:
        return ""
    try:
        value = st.session_state.get(override_key)
    except Exception:
        return ""
    return str(value) if value else ""


def _config_value(override_key: str, secret_key: str, env_key: str) -> str:
    # First non-empty raw value wins; trimming happens afterwards, so a
    # whitespace-only override still shadows secrets and environment.
    value = _session_override(override_key)
    if not value:
        secrets = _supabase_secrets()
        value = str(secrets.get(secret_key) or "")
    if not value:
        value = os.getenv(env_key) or ""
    return value.strip()


def resolve_settings() -> SupabaseSettings:
    """Resolve URL and anon key: session override, then secrets, then environment."""

    return SupabaseSettings(
        url=_config_value(URL_OVERRIDE_KEY, "url", "SUPABASE_URL"),
        anon_key=_config_value(ANON_KEY_OVERRIDE_KEY, "anon_key", "SUPABASE_ANON_KEY"),
    )


def set_overrides(url: str, anon_key: str) -> None:
    if st is None:
        raise SupabaseConfigError("Session overrides require a running Streamlit session")
    st.session_state[URL_OVERRIDE_KEY] = url.strip()
    st.session_state[ANON_KEY_OVERRIDE_KEY] = anon_key.strip()


def clear_overrides() -> None:
    if st is None:
        return
    st.session_state.pop(URL_OVERRIDE_KEY, None)
    st.session_state.pop(ANON_KEY_OVERRIDE_KEY, None)


def has_overrides() -> bool:
    return bool(_session_override(URL_OVERRIDE_KEY) or _session_override(ANON_KEY_OVERRIDE_KEY))


@lru_cache(maxsize=8)
def _create_cached(url: str, anon_key: str) -> Client:
    return create_client(url, anon_key)


def init_client(url: str, anon_key: str) -> Optional[Client]:
    """Build a client for the given settings, or return None and log why not.

    Never raises: an incomplete configuration is a warning, a failing
    ``create_client`` is an error, and both leave the caller without a handle.
    """

    settings = SupabaseSettings(url=(url or "").strip(), anon_key=(anon_key or "").strip())
    if not settings.is_valid:
        if not settings.is_empty:
            logger.warning("Supabase configuration is incomplete or invalid.")
        return None

    try:
        return _create_cached(settings.url, settings.anon_key)
    except Exception as exc:
        logger.error("Failed to initialize Supabase client: %s", exc)
        return None


def get_client() -> Optional[Client]:
    settings = resolve_settings()
    return init_client(settings.url, settings.anon_key)


def require_client() -> Client:
    client = get_client()
    if client is None:
        raise SupabaseConfigError(
            "Supabase configuration missing. Set SUPABASE_URL and SUPABASE_ANON_KEY, "
            "add 'url' and 'anon_key' to st.secrets['supabase'], or enter an override in the sidebar."
        )
    return client


def fetch_table(name: str, client: Optional[Client] = None) -> List[Dict[str, Any]]:
    """Return every row of a table as a list of dicts."""

    client = client or require_client()
    try:
        response = client.table(name).select("*").execute()
    except Exception as exc:
        raise RuntimeError(f"Failed to query Supabase table '{name}'") from exc
    return list(response.data or [])


def supabase_disabled() -> bool:
    secrets = _supabase_secrets()
    secret_value = secrets.get("disable")
    if isinstance(secret_value, bool):
        disable_flag = secret_value
    elif isinstance(secret_value, str):
        disable_flag = secret_value.lower() in {"1", "true", "yes"}
    else:
        disable_flag = False

    if disable_flag:
        return True

    env_value = os.getenv("SUPABASE_DISABLE")
    if env_value is None:
        return False
    return env_value.lower() in {"1", "true", "yes"}
