"""
Configuration loader for YAML config files
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, List
import logging
import os

from vpat.errors import ConfigError
from vpat.models import ToolInfo

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    'browser': {
        'headless': True,
        'timeout': 30000,
        'viewport': {'width': 1920, 'height': 1080},
        'wait_until': 'networkidle'
    },
    'axe': {
        'version': '4.8.4',
        'script_url': 'https://cdnjs.cloudflare.com/ajax/libs/axe-core/{version}/axe.min.js',
        'timeout': 30
    },
    'vpat': {
        'standard': 'wcag22aa',
        'format': 'markdown',
        'timeout': 600,
        'tools': [
            {'name': 'axe-core', 'version': '4.8.4'},
            {'name': 'Vibium', 'version': '0.2.0'}
        ]
    },
    'logging': {
        'level': 'INFO',
        'file': 'vpat.log'
    }
}


class ConfigLoader:
    """Loads and manages configuration"""

    @staticmethod
    def load_config(config_path: str = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file

        Values from the file are merged over the built-in defaults.

        Args:
            config_path: Path to config file (defaults to config/default_config.yaml)

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If the file is not a YAML mapping or an override is malformed
        """
        if config_path is None:
            # Try default location
            default_path = Path(__file__).parent.parent / "config" / "default_config.yaml"
            if default_path.exists():
                config_path = str(default_path)
            else:
                return ConfigLoader._apply_env_overrides(ConfigLoader._get_default_config())

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        config = ConfigLoader._merge(ConfigLoader._get_default_config(), loaded)
        config = ConfigLoader._apply_env_overrides(config)

        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def get_tools(config: Dict[str, Any]) -> List[ToolInfo]:
        """
        Tools listed in generated reports

        Args:
            config: Configuration dictionary

        Returns:
            List of ToolInfo objects
        """
        tools = config.get('vpat', {}).get('tools') or []
        result = []
        for tool in tools:
            if not isinstance(tool, dict) or not tool.get('name'):
                raise ConfigError(f"Invalid tool entry in config: {tool!r}")
            result.append(ToolInfo(name=str(tool['name']), version=str(tool.get('version') or '')))
        return result

    @staticmethod
    def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge override into base"""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key] = ConfigLoader._merge(base[key], value)
            else:
                base[key] = value
        return base

    @staticmethod
    def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides"""
        # Browser settings
        if os.getenv('BROWSER_HEADLESS'):
            config.setdefault('browser', {})['headless'] = os.getenv('BROWSER_HEADLESS').lower() == 'true'

        if os.getenv('BROWSER_TIMEOUT'):
            config.setdefault('browser', {})['timeout'] = ConfigLoader._env_int('BROWSER_TIMEOUT')

        # Tool versions shown in reports
        tools = config.setdefault('vpat', {}).setdefault('tools', [])
        if os.getenv('VPAT_AXE_VERSION'):
            config.setdefault('axe', {})['version'] = os.getenv('VPAT_AXE_VERSION')
            ConfigLoader._set_tool_version(tools, 0, os.getenv('VPAT_AXE_VERSION'))

        if os.getenv('VPAT_HOST_VERSION'):
            ConfigLoader._set_tool_version(tools, 1, os.getenv('VPAT_HOST_VERSION'))

        if os.getenv('VPAT_LOG_FILE') is not None:
            config.setdefault('logging', {})['file'] = os.getenv('VPAT_LOG_FILE')

        return config

    @staticmethod
    def _set_tool_version(tools: List[Dict[str, Any]], index: int, version: str):
        if index < len(tools) and isinstance(tools[index], dict):
            tools[index]['version'] = version

    @staticmethod
    def _env_int(name: str) -> int:
        value = os.getenv(name)
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"Environment variable {name} must be an integer, got {value!r}") from None

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get a fresh copy of the default configuration"""
        return copy.deepcopy(DEFAULT_CONFIG)
