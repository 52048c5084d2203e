"""Config models for lazy loaders.

Cells take their configuration from constructor arguments. This module
provides Pydantic models for callers that keep loader settings in files or
the environment, plus the helper that turns the accepted TTL forms into a
single ``timedelta`` representation.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Optional, Union

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TTLLike = Union[timedelta, int, float, None]


def normalize_ttl(ttl: TTLLike) -> Optional[timedelta]:
    """Convert a TTL given as seconds or ``timedelta`` into a ``timedelta``.

    Parameters
    ----------
    ttl: TTLLike
        ``None`` (never expire), a ``timedelta`` or a number of seconds.

    Returns
    -------
    Optional[timedelta]
        The normalized TTL, or ``None`` when no expiry applies.

    Raises
    ------
    ValueError
        If the TTL is negative, not finite, or too large for a ``timedelta``.
    TypeError
        If the TTL is of an unsupported type.
    """
    if ttl is None:
        return None
    if isinstance(ttl, bool):
        raise TypeError("ttl must be a timedelta, a number of seconds or None")
    if isinstance(ttl, timedelta):
        result = ttl
    elif isinstance(ttl, (int, float)):
        if not math.isfinite(ttl):
            raise ValueError(f"ttl must be finite (got {ttl})")
        try:
            result = timedelta(seconds=ttl)
        except OverflowError as exc:
            raise ValueError(f"ttl is too large (got {ttl})") from exc
    else:
        raise TypeError("ttl must be a timedelta, a number of seconds or None")
    if result < timedelta(0):
        raise ValueError(f"ttl must not be negative (got {result})")
    return result


class LoaderConfig(BaseModel):
    """Configuration for a single lazy loader.

    Attributes
    ----------
    ttl_seconds: Optional[float]
        Time-to-live after a successful load. ``None`` loads once and never
        expires on its own.
    name: Optional[str]
        Label used in log records. Defaults to the cell class name.
    """

    ttl_seconds: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Seconds a loaded value stays fresh",
    )
    name: Optional[str] = Field(None, description="Label used in log records")

    @property
    def ttl(self) -> Optional[timedelta]:
        """TTL as a ``timedelta`` (or ``None``)."""
        return normalize_ttl(self.ttl_seconds)


class LazyLoadSettings(BaseSettings):
    """Environment-driven settings and .env support.

    Attributes
    ----------
    log_level: str
        Logging level name (e.g., "DEBUG", "INFO"). Defaults to "INFO".
    default_ttl_seconds: Optional[float]
        TTL applied to loaders built from these settings. Defaults to no expiry.
    pool_maxsize: int
        Maximum number of cells retained by a loader pool.
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="LAZYLOAD_")

    log_level: str = Field("INFO")
    default_ttl_seconds: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    pool_maxsize: int = Field(1024, ge=1)

    def loader_config(self, name: Optional[str] = None) -> LoaderConfig:
        """Build a :class:`LoaderConfig` carrying the default TTL."""
        return LoaderConfig(ttl_seconds=self.default_ttl_seconds, name=name)
