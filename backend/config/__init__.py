"""
Backend Configuration Module

Provides retention settings for the in-process metrics store.
"""

# Import with underscore module name for Python compatibility
import importlib.util
import os

# Load the kebab-case module
_module_path = os.path.join(os.path.dirname(__file__), "metrics-settings.py")
_spec = importlib.util.spec_from_file_location("metrics_settings", _module_path)
_module = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(_module)

# Re-export main items
MetricsSettings = _module.MetricsSettings
METRICS_PROFILES = _module.METRICS_PROFILES
ONE_DAY_MS = _module.ONE_DAY_MS
get_metrics_settings = _module.get_metrics_settings

__all__ = [
    "MetricsSettings",
    "METRICS_PROFILES",
    "ONE_DAY_MS",
    "get_metrics_settings",
]
