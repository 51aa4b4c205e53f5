"""
Configuration Management for the Material Store

Settings are merged with a 3-tier precedence hierarchy:
environment → user → system defaults (settings/defaults.yaml, then the
built-in pydantic defaults).
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://fakestoreapi.com/products"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class CatalogConfig(BaseModel):
    """Remote catalog endpoint settings"""
    model_config = ConfigDict(extra='forbid')

    endpoint_url: HttpUrl = Field(
        default=DEFAULT_CATALOG_URL, validate_default=True, description="Product listing endpoint"
    )
    timeout: float = Field(default=30.0, ge=1.0, le=120.0, description="Request timeout (seconds)")


class CheckoutConfig(BaseModel):
    """Checkout summary pricing"""
    model_config = ConfigDict(extra='forbid')

    tax_rate: float = Field(default=0.08, ge=0.0, le=1.0, description="Sales tax applied to the subtotal")
    shipping_fee: float = Field(default=0.0, ge=0.0, description="Flat shipping fee, 0 means free")
    currency_symbol: str = Field(default="$", min_length=1, max_length=3)


class UIConfig(BaseModel):
    """UI Configuration"""
    model_config = ConfigDict(extra='forbid')

    flet_web_mode: bool = Field(default=False, description="Serve the app in a browser")
    flet_port: int = Field(default=8550, ge=1024, le=65535, description="Web server port")

    # Initial values for the view-preference store
    theme_mode: Literal["light", "dark", "system"] = Field(default="system")
    view_mode: Literal["grid", "list"] = Field(default="grid")

    tablet_breakpoint: int = Field(default=600, ge=320, le=2000, description="Width that switches to the rail layout")
    seed_color: str = Field(default="#2196F3", description="Material 3 seed color")


class SystemConfig(BaseModel):
    """Complete storefront configuration"""
    model_config = ConfigDict(extra='forbid')

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    checkout: CheckoutConfig = Field(default_factory=CheckoutConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


# env var -> (section, key, converter)
ENV_OVERRIDES = {
    'CATALOG_ENDPOINT_URL': ('catalog', 'endpoint_url', str),
    'CATALOG_TIMEOUT': ('catalog', 'timeout', float),
    'CHECKOUT_TAX_RATE': ('checkout', 'tax_rate', float),
    'CHECKOUT_SHIPPING_FEE': ('checkout', 'shipping_fee', float),
    'FLET_WEB_MODE': ('ui', 'flet_web_mode', lambda v: v.lower() in ('true', '1', 'yes', 'on')),
    'FLET_PORT': ('ui', 'flet_port', int),
}


class ConfigManager:
    """Loads and merges storefront configuration"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.cwd() / "settings"
        self._defaults: Optional[Dict[str, Any]] = None
        self._user_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load a YAML mapping, treating missing or broken files as empty"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {file_path}: top level is not a mapping")
            return {}
        return data

    def _load_defaults(self) -> Dict[str, Any]:
        if self._defaults is None:
            self._defaults = self._load_yaml_file(self.config_dir / "defaults.yaml")
        return self._defaults

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries in place"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, convert) in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            try:
                converted = convert(value)
            except ValueError:
                logger.warning(f"Ignoring {env_key}={value!r}: not a valid {config_key}")
                continue
            overrides.setdefault(section, {})[config_key] = converted
        return overrides

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → user → defaults"""
        merged = SystemConfig().model_dump()
        self._deep_merge(merged, self._load_defaults())
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def reload_config(self) -> None:
        """Clear cached files so the next get_config() re-reads them"""
        self._defaults = None
        self._user_config = None


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get the process configuration manager"""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    """Get current storefront configuration"""
    return get_config_manager().get_config(validation_level)
