"""
Pipeline configuration.
"""

from .settings import PipelineSettings, SettingsLoader

__all__ = [
    "PipelineSettings",
    "SettingsLoader",
]
