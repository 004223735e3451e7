"""
Configuration loader for the chain-rule elimination toolkit.
"""
import os
import yaml
from pathlib import Path
from typing import Dict, Any
from dotenv import load_dotenv


DEFAULT_CONFIG: Dict[str, Any] = {
    'logging': {
        'level': 'INFO',
        'console_level': 'WARNING',
        'format': "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}",
        'log_file': './logs/chainfree.log',
    },
    'elimination': {
        'deduplicate': False,
    },
    'formatting': {
        'empty_marker': 'ε',
    },
}


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_path: str = None):
        """Initialize configuration."""
        # Load environment variables
        load_dotenv()

        if config_path is None:
            config_path = os.getenv('CHAINFREE_CONFIG') or \
                Path(__file__).parent.parent / "config" / "config.yaml"
        self.config_path = Path(config_path)

        # Start from defaults, then layer the YAML file on top
        self.config = _merge(DEFAULT_CONFIG, {})
        if self.config_path.exists():
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self.config = _merge(self.config, yaml.safe_load(f) or {})

        # Override with environment variables where applicable
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load environment variable overrides."""
        if os.getenv('CHAINFREE_LOG_LEVEL'):
            self.config['logging']['level'] = os.getenv('CHAINFREE_LOG_LEVEL')

        if os.getenv('CHAINFREE_LOG_FILE') is not None:
            self.config['logging']['log_file'] = os.getenv('CHAINFREE_LOG_FILE')

        if os.getenv('CHAINFREE_DEDUPLICATE'):
            flag = os.getenv('CHAINFREE_DEDUPLICATE').strip().lower()
            self.config['elimination']['deduplicate'] = flag in ('1', 'true', 'yes', 'on')

    def get(self, key_path: str, default=None):
        """Get configuration value using dot notation (e.g., 'logging.level')."""
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.config.get('logging', {})

    def get_elimination_config(self) -> Dict[str, Any]:
        """Get chain-rule elimination configuration."""
        return self.config.get('elimination', {})

    def get_formatting_config(self) -> Dict[str, Any]:
        """Get text formatting configuration."""
        return self.config.get('formatting', {})


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of base with override merged in, section by section."""
    merged = {}
    for key, value in base.items():
        merged[key] = dict(value) if isinstance(value, dict) else value
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


# Global configuration instance
config = Config()
