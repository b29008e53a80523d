#!/usr/bin/env python3
"""
Configuration Management Module
Handles loading and validating configuration files

Created: 2025
"""

import copy
import json
import os
from typing import Any, Dict, List, Optional

from .face_detector import BACKENDS

DEFAULT_CONFIG_FILE = "face_crop.json"


class ConfigManager:
    """Configuration manager for the face crop tool"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager
        Args:
            config_path: Path to configuration file
        """
        self.config_path = config_path or DEFAULT_CONFIG_FILE
        self.config = self._get_default_config()
        self.load_errors: List[str] = []
        self.errors: List[str] = []

        if os.path.exists(self.config_path):
            self.load_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            "output_suffix": "_cropped",
            "jpeg_quality": 95,
            "png_compression": 3,
            "detector": {
                "backend": "cascade",
                "model_path": None,
                "min_face_size": 20,
                "scale_factor": 1.25,
                "min_neighbors": 5,
                "score_threshold": 0.9,
                "nms_threshold": 0.3,
            },
        }

    def load_config(self) -> bool:
        """
        Load configuration from file
        Returns:
            True if loaded successfully
        """
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded_config = json.load(f)

            if not isinstance(loaded_config, dict):
                raise ValueError("top-level JSON value must be an object")

            # Update default config with loaded values
            self._deep_update(self.config, loaded_config)

            print(f"⚙️  Configuration loaded from {self.config_path}")
            return True

        except (OSError, ValueError) as e:
            self.load_errors.append(f"Error loading configuration {self.config_path}: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value
        Args:
            key: Configuration key (supports dot notation, e.g., 'detector.min_face_size')
            default: Default value if key not found
        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self.config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any):
        """
        Set configuration value
        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def section(self, key: str) -> Dict[str, Any]:
        """Copy of a nested section, e.g. ``section('detector')``."""
        value = self.get(key, {})
        return copy.deepcopy(value) if isinstance(value, dict) else {}

    def _deep_update(self, base_dict: Dict, update_dict: Dict):
        """
        Deep update dictionary
        Args:
            base_dict: Base dictionary to update
            update_dict: Dictionary with updates
        """
        for key, value in update_dict.items():
            if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                self._deep_update(base_dict[key], value)
            else:
                base_dict[key] = value

    def validate_config(self) -> bool:
        """
        Validate configuration values
        Returns:
            True if configuration is valid; problems are kept in ``self.errors``
        """
        errors = list(self.load_errors)

        backend = self.get('detector.backend')
        if backend not in BACKENDS:
            errors.append(f"detector.backend must be one of {', '.join(BACKENDS)} (got {backend!r})")
        elif backend == "yunet" and not self.get('detector.model_path'):
            errors.append("detector.model_path is required for the yunet backend")

        if not self._is_number(self.get('detector.min_face_size')) or self.get('detector.min_face_size') <= 0:
            errors.append("detector.min_face_size must be positive")

        if not self._is_number(self.get('detector.scale_factor')) or self.get('detector.scale_factor') <= 1.0:
            errors.append("detector.scale_factor must be greater than 1.0")

        if not self._is_number(self.get('detector.min_neighbors')) or self.get('detector.min_neighbors') < 0:
            errors.append("detector.min_neighbors must not be negative")

        for key in ('detector.score_threshold', 'detector.nms_threshold'):
            value = self.get(key)
            if not self._is_number(value) or not 0 <= value <= 1:
                errors.append(f"{key} must be between 0 and 1")

        quality = self.get('jpeg_quality')
        if not self._is_number(quality) or not 0 <= quality <= 100:
            errors.append("jpeg_quality must be between 0 and 100")

        compression = self.get('png_compression')
        if not self._is_number(compression) or not 0 <= compression <= 9:
            errors.append("png_compression must be between 0 and 9")

        suffix = self.get('output_suffix')
        if not isinstance(suffix, str) or not suffix:
            errors.append("output_suffix must be a non-empty string")

        self.errors = errors
        return not errors

    @staticmethod
    def _is_number(value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def print_config(self):
        """Print current configuration"""
        print("=== Current Configuration ===")
        self._print_dict(self.config, indent=0)

    def _print_dict(self, d: Dict, indent: int):
        """Recursively print dictionary"""
        for key, value in d.items():
            if isinstance(value, dict):
                print("  " * indent + f"{key}:")
                self._print_dict(value, indent + 1)
            else:
                print("  " * indent + f"{key}: {value}")
