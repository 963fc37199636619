"""Configuration loading: vault registry plus engine settings."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from date_tags.constants import CONFIG_ENV_VAR, CONFIG_PATH
from date_tags.data_models import VaultConfiguration, VaultMetadata
from date_tags.settings import DateTagSettings

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else CONFIG_PATH


def load_settings(raw: object) -> DateTagSettings:
    """Build settings from the ``settings`` section of the configuration file.

    A missing section yields all defaults; invalid individual values fall back
    to their defaults instead of failing the whole load.

    Raises:
        ValueError: If the section is present but not a mapping.
    """
    if raw is None:
        return DateTagSettings()
    if not isinstance(raw, dict):
        raise ValueError("The 'settings' section must be a mapping of option names to values")
    return DateTagSettings.model_validate(raw)


def load_vault_configuration(config_path: Optional[Path] = None) -> VaultConfiguration:
    """Load and validate the configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to
            ``$DATE_TAGS_CONFIG`` or ``date_tags.yaml`` next to the package.

    Returns:
        A :class:`VaultConfiguration` containing normalized vault metadata, the
        configured default vault name and the engine settings.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    config_path = config_path or default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Date tags configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = Path(raw_path).expanduser().resolve(strict=False)
        description = (entry.get("description") or "").strip()

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=description,
            exists=resolved_path.is_dir(),
        )

    default_vault = raw_config.get("default")
    if default_vault is None and len(processed) == 1:
        default_vault = next(iter(processed))
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Configuration must specify a 'default' vault present in the mapping")

    settings = load_settings(raw_config.get("settings"))
    logger.debug("Loaded %d vault(s) from %s", len(processed), config_path)
    return VaultConfiguration(default_vault=default_vault, vaults=processed, settings=settings)


@lru_cache(maxsize=1)
def get_configuration() -> VaultConfiguration:
    """Return the process-wide configuration, loading it on first use."""
    return load_vault_configuration()


def resolve_vault(vault: Optional[str], configuration: Optional[VaultConfiguration] = None) -> VaultMetadata:
    """Resolve which vault an operation targets, falling back to the default.

    Raises:
        ValueError: If the supplied ``vault`` name is not recognized.
    """
    configuration = configuration or get_configuration()
    return configuration.get(vault or configuration.default_vault)
