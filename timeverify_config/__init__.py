"""
timeverify_config -- single public entrypoint for engine configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a validated, frozen ``EngineConfig``;
    ``timeverify_config.bridges`` turns it into engine and kernel rules.

Architecture position:
    Configuration -- YAML-driven, validated on load.
    Sits above ``timeverify_kernel`` and ``timeverify_engines`` and below
    ``timeverify_services``.  Neither the kernel nor the engines may import
    from ``timeverify_config``.

Invariants enforced:
    - Single entrypoint: all runtime config flows through ``get_active_config()``.
    - A configuration that fails validation is never returned.
    - Deterministic checksum: the same YAML document always produces the
      same ``EngineConfig.checksum``.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ConfigurationError`` -- missing keys, malformed values or
      structural validation failures.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``TIMEVERIFY_CONFIG_TRACE`` log entry containing the config_id,
    version and checksum.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from timeverify_config.loader import load_yaml_file, parse_engine_config
from timeverify_config.schema import EngineConfig
from timeverify_config.validator import ConfigValidationResult, validate_engine_config
from timeverify_kernel.exceptions import ConfigurationError

_logger = logging.getLogger("timeverify.config")

# Packaged default configuration
DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | None = None) -> EngineConfig:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - The returned ``EngineConfig`` has passed structural validation.
        - A ``TIMEVERIFY_CONFIG_TRACE`` log entry is emitted on every
          successful call.

    Non-goals:
        - Does NOT cache; services hold the returned config for their
          lifetime.

    Args:
        config_path: Override path to a YAML file.  Defaults to the
            packaged ``defaults.yaml``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the document cannot be parsed or fails
            validation.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    try:
        data = load_yaml_file(path)
        config = parse_engine_config(data)
    except yaml.YAMLError as exc:
        raise ConfigurationError("document", f"invalid YAML in {path}: {exc}") from exc
    except KeyError as exc:
        raise ConfigurationError("document", f"missing key {exc} in {path}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError("document", f"malformed value in {path}: {exc}") from exc

    validation = validate_engine_config(config)
    if not validation.is_valid:
        section, _ = validation.errors[0]
        raise ConfigurationError(
            section,
            "; ".join(f"[{s}] {msg}" for s, msg in validation.errors),
        )

    _logger.info(
        "TIMEVERIFY_CONFIG_TRACE",
        extra={
            "trace_type": "TIMEVERIFY_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
        },
    )
    return config


__all__ = [
    "ConfigValidationResult",
    "DEFAULT_CONFIG_PATH",
    "EngineConfig",
    "get_active_config",
    "validate_engine_config",
]
