"""
Configuration management module.
"""

from .settings import InspectionSettings, ConfigurationError, SOURCE_KINDS

__all__ = ['InspectionSettings', 'ConfigurationError', 'SOURCE_KINDS']
