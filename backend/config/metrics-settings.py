"""
Metrics Settings

Retention configuration for the in-process performance metrics store.
Each series keeps at most ``max_points`` observations, none older than
``window_ms`` milliseconds.

Usage:
    from backend.config import get_metrics_settings

    # Default 1000 points / 24h window
    settings = get_metrics_settings()

    # Short window for load testing
    settings = get_metrics_settings(profile="load_test", max_points=500)
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

ONE_HOUR_MS = 60 * 60 * 1000
ONE_DAY_MS = 24 * ONE_HOUR_MS


class MetricsSettings(BaseModel):
    """
    Sliding window retention settings for metric series.

    Both limits are enforced on every write: the count limit first,
    then the age limit.
    """

    model_config = ConfigDict(frozen=True)

    max_points: int = Field(
        default=1000,
        ge=1,
        description="Maximum data points retained per series",
    )

    window_ms: int = Field(
        default=ONE_DAY_MS,
        ge=1,
        description="Maximum age of a retained data point in milliseconds",
    )

    version: str = Field(
        default="1.0.0",
        description="Version string reported alongside metrics",
    )


# Pre-configured profiles for common deployments
METRICS_PROFILES: Dict[str, MetricsSettings] = {
    # Default: 1000 points over the last 24 hours
    "default": MetricsSettings(),
    # Development: small window so dashboards react quickly
    "development": MetricsSettings(
        max_points=200,
        window_ms=ONE_HOUR_MS,
    ),
    # Load testing: many points over a short span
    "load_test": MetricsSettings(
        max_points=10_000,
        window_ms=15 * 60 * 1000,
    ),
}


def get_metrics_settings(
    profile: Optional[str] = None,
    max_points: Optional[int] = None,
    window_ms: Optional[int] = None,
    **overrides: Any,
) -> MetricsSettings:
    """
    Build metrics settings from a profile plus explicit overrides.

    Args:
        profile: Profile name (default, development, load_test)
        max_points: Override maximum points per series
        window_ms: Override retention window in milliseconds
        **overrides: Additional field overrides (e.g. version)

    Returns:
        Validated MetricsSettings

    Raises:
        ValueError: If the profile is unknown or an override is out of range
    """
    profile = profile or "default"
    if profile not in METRICS_PROFILES:
        raise ValueError(
            f"Unknown metrics profile '{profile}'. "
            f"Available: {', '.join(sorted(METRICS_PROFILES))}"
        )

    values = METRICS_PROFILES[profile].model_dump()
    if max_points is not None:
        values["max_points"] = max_points
    if window_ms is not None:
        values["window_ms"] = window_ms
    values.update(overrides)

    # Re-validate so overrides obey the same bounds as the profiles
    return MetricsSettings(**values)
