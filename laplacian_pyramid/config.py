"""Pyramid settings loaded from ``laplacian_pyramid.toml``.

Example file:

    [pyramid]
    depth = 5
    quantization = 1.0
    a = 1.0
    edge = "asymmetric"

Lookup order: ``LAPLACIAN_PYRAMID_CONFIG`` env var, explicit path,
``./laplacian_pyramid.toml``, ``~/laplacian_pyramid.toml``. Without any file
the defaults below apply.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Literal, cast

from pydantic import BaseModel, Field

# TOML loading for Python 3.11+ and older
try:
    import tomllib  # type: ignore[import-not-found, unused-ignore]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef, unused-ignore]

from laplacian_pyramid.core.kernel import DEFAULT_A
from laplacian_pyramid.pyramid import DEFAULT_DEPTH, DEFAULT_QUANTIZATION

logger = logging.getLogger(__name__)

CONFIG_ENV = "LAPLACIAN_PYRAMID_CONFIG"
CONFIG_NAME = "laplacian_pyramid.toml"


class PyramidSettings(BaseModel):
    """Validated pyramid parameters.

    Attributes:
        depth: Number of pyramid levels
        quantization: Detail plane step size (0 = lossless)
        a: Centre weight of the smoothing kernel
        edge: Border policy for reduce/expand
    """

    model_config = {"extra": "forbid"}

    depth: int = Field(default=DEFAULT_DEPTH, ge=1)
    quantization: float = Field(default=DEFAULT_QUANTIZATION, ge=0.0, allow_inf_nan=False)
    a: float = Field(default=DEFAULT_A, allow_inf_nan=False)
    edge: Literal["asymmetric", "replicate"] = "asymmetric"


def _resolve_config_path(config_path: str | None) -> str | None:
    """Resolve configuration path from env, explicit path, or defaults."""
    env_config = os.environ.get(CONFIG_ENV)
    if env_config:
        return env_config
    if config_path:
        return config_path
    candidates = [
        CONFIG_NAME,
        os.path.expanduser(f"~/{CONFIG_NAME}"),
    ]
    for candidate in candidates:
        if os.path.exists(candidate):
            return candidate
    return None


def load_settings(config_path: str | None = None) -> PyramidSettings:
    """Load pyramid settings.

    Args:
        config_path: Explicit TOML path (env var still takes precedence)

    Returns:
        PyramidSettings, defaults when no config file is found

    Raises:
        FileNotFoundError: If an explicit or env path does not exist
        ValueError: If the file is not valid TOML
        pydantic.ValidationError: If the ``[pyramid]`` table is invalid
    """
    resolved_path = _resolve_config_path(config_path)
    if resolved_path is None:
        return PyramidSettings()
    if not os.path.exists(resolved_path):
        raise FileNotFoundError(
            f"Config file not found at {resolved_path}. Set {CONFIG_ENV} or create {CONFIG_NAME}"
        )
    with open(resolved_path, "rb") as f:
        try:
            config = cast(dict[str, Any], tomllib.load(f))
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid config file {resolved_path}: {exc}") from exc
    logger.debug("Loaded pyramid config from %s", resolved_path)
    return PyramidSettings(**config.get("pyramid", {}))
