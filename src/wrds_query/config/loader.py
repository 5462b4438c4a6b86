"""
Configuration loader for YAML files.
"""

from pathlib import Path
from typing import Union
import yaml

from .schema import ConnectionSettings


def load_settings(config_path: Union[str, Path]) -> ConnectionSettings:
    """
    Load and validate connection settings from a YAML file.

    The fields may sit at the top level or under a ``connection`` key.
    
    Args:
        config_path: Path to the YAML configuration file.
        
    Returns:
        Validated ConnectionSettings object.
        
    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If YAML parsing fails.
        pydantic.ValidationError: If config validation fails.
    """
    config_path = Path(config_path)
    
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    if not isinstance(raw_config, dict):
        raise ValueError(f"Expected a mapping in {config_path}, got {type(raw_config).__name__}")

    if "connection" in raw_config:
        raw_config = raw_config["connection"] or {}
    
    return ConnectionSettings(**raw_config)
