"""Configuration loading utilities.

This module loads YAML configuration files and turns their ``metrics``
section into a :class:`MetricsConfig`.
"""

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from .types import MetricsConfig


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Parameters
    ----------
    path : str | Path
        Path to the YAML configuration file.

    Returns
    -------
    dict[str, Any]
        Configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    yaml.YAMLError
        If the YAML is malformed.

    Examples
    --------
    >>> cfg = load_config("conf/metrics.yaml")
    >>> cfg["metrics"]["periods_per_year"]
    252
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        config = yaml.safe_load(f)

    return config if config is not None else {}


def get_nested(config: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """
    Get a nested value from a configuration dictionary.

    Parameters
    ----------
    config : dict[str, Any]
        Configuration dictionary.
    *keys : str
        Sequence of keys to traverse.
    default : Any, optional
        Default value if key path doesn't exist.

    Returns
    -------
    Any
        The value at the nested key path, or default.

    Examples
    --------
    >>> cfg = {"metrics": {"window": 60}}
    >>> get_nested(cfg, "metrics", "window")
    60
    >>> get_nested(cfg, "metrics", "missing", default=20)
    20
    """
    result = config
    for key in keys:
        if isinstance(result, dict) and key in result:
            result = result[key]
        else:
            return default
    return result


def metrics_config_from_dict(values: dict[str, Any]) -> MetricsConfig:
    """
    Build a MetricsConfig from a plain dictionary.

    Raises
    ------
    ValueError
        If ``values`` contains keys MetricsConfig does not know, or a
        value fails validation.
    """
    known = {f.name for f in fields(MetricsConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown metrics config keys: {', '.join(unknown)}")
    return MetricsConfig(**values)


def metrics_config_from_file(
    path: str | Path,
    section: str = "metrics",
) -> MetricsConfig:
    """
    Load a MetricsConfig from a section of a YAML file.

    A missing section yields the defaults.

    Examples
    --------
    >>> cfg = metrics_config_from_file("conf/metrics.yaml")
    >>> cfg.periods_per_year
    252
    """
    values = get_nested(load_config(path), section, default={})
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ValueError(f"Config section '{section}' must be a mapping")
    return metrics_config_from_dict(values)
