#!/usr/bin/env python3
"""
Configuration Management Module
Handles loading and validating configuration files

Created: 2025
"""

import json
import os
import sys
from typing import Dict, Any, Optional

MIN_SCALE_FACTOR = 1.05


class ConfigManager:
    """Configuration manager for the face mask generator"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager
        Args:
            config_path: Path to configuration file
        """
        self.config_path = config_path or "config.json"
        self.config = self._get_default_config()
        self.loaded = False

        if os.path.exists(self.config_path):
            self.loaded = self.load_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            "detection": {
                "min_size": 20,
                "max_size": 1000,
                "shift_factor": 0.1,
                "scale_factor": 1.1,
                "angle": 0.0,
                "iou_threshold": 0.2
            },
            "quality_threshold": 5.0,
            "perturbations": 63,
            "perturb_seed": 0,
            "eye_offsets": {
                "row": 0.075,
                "left_col": 0.175,
                "right_col": 0.185,
                "scale": 0.25
            },
            "mask": {
                "path": "assets/facemask.png",
                "coverage": 0.75,
                "horizontal_correction": 1.0
            },
            "models": {
                "face_cascade": "haarcascade_frontalface_default.xml",
                "eye_cascade": "haarcascade_eye.xml",
                "landmark_dir": None,
                "landmark_cascades": {
                    "mouth": "haarcascade_smile.xml"
                }
            },
            "output": {
                "jpeg_quality": 100
            },
            "spinner": {
                "message": "Processing...",
                "interval": 0.1
            },
            "show_markers": False
        }

    def load_config(self) -> bool:
        """
        Load configuration from file
        Returns:
            True if loaded successfully
        """
        try:
            with open(self.config_path, 'r') as f:
                loaded_config = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Error loading configuration: {e}", file=sys.stderr)
            return False

        # Update default config with loaded values
        self._deep_update(self.config, loaded_config)

        print(f"Configuration loaded from {self.config_path}")
        return True

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value
        Args:
            key: Configuration key (supports dot notation, e.g., 'detection.iou_threshold')
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

    def validation_errors(self) -> list:
        errors = []

        if self.get('detection.scale_factor', 0) <= MIN_SCALE_FACTOR:
            errors.append(f"detection.scale_factor must be greater than {MIN_SCALE_FACTOR}")

        if self.get('detection.min_size', 0) <= 0:
            errors.append("detection.min_size must be positive")

        if self.get('detection.max_size', 0) < self.get('detection.min_size', 0):
            errors.append("detection.max_size must not be smaller than detection.min_size")

        if not 0 < self.get('detection.shift_factor', 0) <= 1:
            errors.append("detection.shift_factor must be in (0, 1]")

        if not 0 <= self.get('detection.angle', 0) <= 1:
            errors.append("detection.angle must be between 0 and 1")

        if not 0 <= self.get('detection.iou_threshold', 0) <= 1:
            errors.append("detection.iou_threshold must be between 0 and 1")

        if self.get('perturbations', 0) <= 0:
            errors.append("perturbations must be positive")

        if not 1 <= self.get('output.jpeg_quality', 0) <= 100:
            errors.append("output.jpeg_quality must be between 1 and 100")

        if self.get('spinner.interval', 0) <= 0:
            errors.append("spinner.interval must be positive")

        return errors

    def validate_config(self) -> bool:
        """
        Validate configuration values
        Returns:
            True if configuration is valid
        """
        errors = self.validation_errors()

        if errors:
            print("Configuration validation errors:", file=sys.stderr)
            for error in errors:
                print(f"  - {error}", file=sys.stderr)
            return False

        return True

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
