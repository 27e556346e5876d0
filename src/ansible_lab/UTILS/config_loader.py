"""
Loading of the lab configuration from a YAML file and ANSIBLE_LAB_* environment variables.
"""
import os
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from ..MODELS.lab_config import LabConfig

ENV_PREFIX = "ANSIBLE_LAB_"


def load_yaml_overrides(path: str) -> Dict[str, Any]:
    """
    Reads field overrides from a YAML file. An empty file yields no overrides.

    :raises ValueError: If the document is not valid YAML or not a mapping.
    """
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Configuration file {path} is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return data


def env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """
    Collects ``ANSIBLE_LAB_<FIELD>`` variables for known fields.
    ``packages`` is whitespace separated; pydantic coerces the rest.
    """
    overrides: Dict[str, Any] = {}
    for field in LabConfig.model_fields:
        value = environ.get(ENV_PREFIX + field.upper())
        if value is None:
            continue
        overrides[field] = value.split() if field == "packages" else value
    return overrides


def load_config(config_file: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None,
                dotenv_path: Optional[str] = None) -> LabConfig:
    """
    Builds the lab configuration.
    Precedence: defaults, then the YAML file, then the environment
    (after loading a .env file into it).

    :param config_file: Optional YAML file with overrides.
    :param environ: Environment to read, ``os.environ`` if omitted.
    :param dotenv_path: .env file to load; searched from the working directory if omitted.
    """
    values: Dict[str, Any] = {}
    if config_file:
        values.update(load_yaml_overrides(config_file))

    if environ is None:
        load_dotenv(dotenv_path or os.path.join(os.getcwd(), ".env"))
        environ = os.environ
    values.update(env_overrides(environ))

    return LabConfig(**values)
