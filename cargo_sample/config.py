#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

logger = logging.getLogger("cargo_sample")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. CARGO_SAMPLE_CONFIG environment variable
    2. ~/.cargo-sample/ directory
    """
    if 'CARGO_SAMPLE_CONFIG' in os.environ:
        path = Path(os.environ['CARGO_SAMPLE_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.cargo-sample'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists() and path.stat().st_size > 0:
            return path

    # If no file exists, return default path for saving
    return config_dir / 'config.json'


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    config = get_default_config()

    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                import yaml
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            config = merge_configs(config, file_config)
        except Exception as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    config = apply_env_overrides(config)

    return config


def save_config(config, config_path=None):
    """Save configuration to file.

    The format follows the file suffix: .toml, .yaml/.yml, or JSON otherwise.

    Returns:
        Path the configuration was written to
    """
    config_path = Path(config_path) if config_path else get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    if config_path.suffix.lower() in ['.toml']:
        # tomllib is read-only
        import toml
        with open(config_path, 'w') as f:
            toml.dump(config, f)
    elif config_path.suffix.lower() in ['.yaml', '.yml']:
        import yaml
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def get_default_config():
    """Get default configuration."""
    return {
        "general": {
            "manifest_filename": "Cargo.toml",
            "examples_directory": "examples",
            "default_output": ".",
        },
        "git": {
            "timeout_seconds": 300,
            "temp_prefix": "cargo-sample-",
        },
        "cargo": {
            "timeout_seconds": 300,
        },
        "resolver": {
            "add_dependency": True,
        },
        "merge": {
            "identity_section": "package",
            "identity_key": "name",
            "dependency_sections": ["dependencies"],
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s",
        },
    }


def configure_logging(config, debug=False):
    """Set up root logging from the [logging] config section."""
    if debug:
        level = logging.DEBUG
        fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    else:
        log_config = config.get("logging", {})
        level = getattr(logging, str(log_config.get("level", "WARNING")).upper(), logging.WARNING)
        fmt = log_config.get("format", "%(levelname)s: %(message)s")

    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def _convert_env_value(value, current):
    if isinstance(current, list):
        return [item.strip() for item in value.split(',') if item.strip()]
    if value.lower() in ('true', 'yes', 'on'):
        return True
    if value.lower() in ('false', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: CARGO_SAMPLE_SECTION_KEY
    For example: CARGO_SAMPLE_GIT_TIMEOUT_SECONDS=60

    List values are given comma-separated:
    CARGO_SAMPLE_MERGE_DEPENDENCY_SECTIONS=dependencies,dev-dependencies
    """
    env_prefix = "CARGO_SAMPLE_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            if i + best_match_len == len(key_parts):
                current_level[matched_key] = _convert_env_value(value, current_level[matched_key])
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                # Path conflict: env var is longer than the config path
                break

    return config
