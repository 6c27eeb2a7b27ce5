"""
Configuration and environment loading utilities.
"""

import os
from enum import Enum
from typing import List, Optional, Union, Dict, Any
from pathlib import Path
import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


def get_env(key: str, default: str = None) -> str:
    """
    Get an environment variable or raise ConfigError if it's missing and no default is provided.
    """
    value = os.getenv(key, default)
    if value is None:
        raise ConfigError(f"Missing required environment variable: {key}")
    return value


# --- Config Models ---


class MembershipMode(str, Enum):
    MULTISET = "multiset"
    SET = "set"


class MediatorConfig(BaseModel):
    name: str
    membership: MembershipMode = MembershipMode.MULTISET
    members: List[str] = Field(default_factory=list)


class SendConfig(BaseModel):
    sender: str
    mediator: str
    message: str


class OutputConfig(BaseModel):
    events_dir: Optional[str] = None


class ScenarioConfig(BaseModel):
    name: str
    colleagues: List[str]
    mediators: List[MediatorConfig] = Field(default_factory=list)
    sends: List[SendConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Loaders ---


def _load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except Exception as e:
        raise ConfigError(f"Failed to parse YAML file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def load_scenario_config(path: Union[str, Path]) -> ScenarioConfig:
    data = _load_yaml(path)
    return ScenarioConfig(**data)
