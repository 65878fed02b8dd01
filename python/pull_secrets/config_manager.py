#!/usr/bin/env python3
"""
Configuration Manager for registry pull secret resolution

This module handles loading and managing configuration from config.yaml
and environment variables.
"""

import logging
import os
import re
from typing import Any, Dict, List

import yaml

TRUTHY = ("true", "1", "yes")


class ConfigValidationError(Exception):
    """Raised when configuration validation fails"""


def _env_flag(name: str):
    """Return True/False for a set environment variable, None when unset"""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in TRUTHY


class ConfigManager:
    """Manages configuration for pull secret resolution"""

    def __init__(self, config_file: str = None, validate: bool = True):
        """Initialize ConfigManager

        Args:
            config_file: Path to configuration YAML file (defaults to ../config.yaml or CONFIG_FILE env var)
            validate: If True, validate configuration on initialization
        """
        # Allow override via environment variable for containerized deployments
        if config_file is None:
            config_file = os.environ.get("CONFIG_FILE", "../config.yaml")
        self.config_file = config_file
        self.config = self._load_config()

        if validate:
            self.validate_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file with defaults"""
        default_config = {
            "kubernetes": {
                "namespace": "default",
                "running_pods_only": True,
            },
            "credentials": {
                # Pick the entry whose host matches the image registry before falling back to the first one
                "match_registry_host": True,
                "secret_types": ["kubernetes.io/dockercfg", "kubernetes.io/dockerconfigjson"],
                "data_keys": [".dockerconfigjson", ".dockercfg"],
            },
        }

        try:
            if os.path.exists(self.config_file):
                with open(self.config_file, "r") as f:
                    user_config = yaml.safe_load(f) or {}
                return self._merge_config(default_config, user_config)
            else:
                logging.debug(f"Config file {self.config_file} not found, using defaults")
                return default_config
        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Error loading config file: {e}")
            return default_config

    def _merge_config(self, default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge user config with defaults"""
        result = default.copy()
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    # Kubernetes configuration
    def get_namespace(self) -> str:
        """Get default namespace from environment or config"""
        return os.environ.get("PULL_SECRETS_NAMESPACE") or self.config["kubernetes"]["namespace"]

    def get_running_pods_only(self) -> bool:
        """Whether pod discovery only inspects pods in the Running phase"""
        flag = _env_flag("PULL_SECRETS_RUNNING_PODS_ONLY")
        if flag is not None:
            return flag
        return bool(self.config["kubernetes"].get("running_pods_only", True))

    def get_pod_field_selector(self):
        """Field selector used when listing pods, or None to list all pods"""
        return "status.phase=Running" if self.get_running_pods_only() else None

    # Credentials configuration
    def get_match_registry_host(self) -> bool:
        """Whether dockercfg entries are matched against the image registry host"""
        flag = _env_flag("PULL_SECRETS_MATCH_REGISTRY_HOST")
        if flag is not None:
            return flag
        return bool(self.config["credentials"].get("match_registry_host", True))

    def get_secret_types(self) -> List[str]:
        """Secret types trusted to carry registry credentials"""
        return list(self.config["credentials"].get("secret_types") or [])

    def get_data_keys(self) -> List[str]:
        """Secret data keys read for dockercfg payloads, in priority order"""
        return list(self.config["credentials"].get("data_keys") or [])

    def validate_config(self) -> None:
        """Validate configuration values

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        errors = []

        namespace = self.get_namespace()
        if not namespace or not str(namespace).strip():
            errors.append("Namespace is required and cannot be empty")
        elif not self._is_valid_k8s_name(str(namespace)):
            errors.append(
                f"Namespace '{namespace}' is not a valid Kubernetes name (lowercase alphanumeric and hyphens only)"
            )

        secret_types = self.get_secret_types()
        if not secret_types:
            errors.append("credentials.secret_types must list at least one secret type")
        elif not all(isinstance(t, str) and t.strip() for t in secret_types):
            errors.append(f"credentials.secret_types must contain non-empty strings, got: {secret_types}")

        data_keys = self.get_data_keys()
        if not data_keys:
            errors.append("credentials.data_keys must list at least one data key")
        elif not all(isinstance(k, str) and k.strip() for k in data_keys):
            errors.append(f"credentials.data_keys must contain non-empty strings, got: {data_keys}")

        if errors:
            error_msg = "Configuration validation failed:\n  " + "\n  ".join(errors)
            logging.error(error_msg)
            raise ConfigValidationError(error_msg)

    def _is_valid_k8s_name(self, name: str) -> bool:
        """Validate Kubernetes resource name format"""
        if not name:
            return False
        # Kubernetes names: lowercase alphanumeric and hyphens, max 63 chars for namespaces
        pattern = r"^[a-z0-9]([a-z0-9\-]*[a-z0-9])?$"
        return bool(re.match(pattern, name)) and len(name) <= 63

    def print_config(self):
        """Print current configuration"""
        print("Current Configuration:")
        print(f"  Config File: {self.config_file}")
        print(f"  Namespace: {self.get_namespace()}")
        print(f"  Running Pods Only: {self.get_running_pods_only()}")
        print(f"  Match Registry Host: {self.get_match_registry_host()}")
        print(f"  Secret Types: {', '.join(self.get_secret_types())}")
        print(f"  Data Keys: {', '.join(self.get_data_keys())}")


# Global config manager instance
# Validation can be disabled by setting SKIP_CONFIG_VALIDATION=true environment variable
config_manager = ConfigManager(
    validate=os.environ.get("SKIP_CONFIG_VALIDATION", "").lower() not in TRUTHY
)
