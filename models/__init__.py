"""Data models for OpenVerse."""

from models.config_models import Config, CredentialsConfig
from models.data_models import Aral, validate_resources

__all__ = [
    "Config",
    "CredentialsConfig",
    "Aral",
    "validate_resources",
]
