"""
Utility modules for configuration, normalization and date handling.
"""
from .config import Config, ConfigurationError
from .normalizer import CategoryNormalizer
from .dates import DateFormatter
from .enricher import ProfileEnricher

__all__ = ['Config', 'ConfigurationError', 'CategoryNormalizer', 'DateFormatter', 'ProfileEnricher']
