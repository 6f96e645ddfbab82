"""Cascade settings — loads lookup configuration from a YAML file.

``CascadeSettings`` says where dictionary files live, how lookup keys
are split and how chatty logging is. The CLI reads it, then overlays
its own flags.

Example ``dictcascade.yaml``:

    delimiter: "."
    directory: locales
    sort_directory: true
    log_level: INFO
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List

import yaml

from dictcascade.models.cascade import Cascade
from dictcascade.util.errors import ConfigError, DictionaryIOError

log = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = "dictcascade.yaml"


@dataclass
class CascadeSettings:
    """Where dictionaries come from and how keys are split.

    Every field has a default so the tool runs without a settings file.
    """

    # -- Lookup ------------------------------------------------------
    delimiter: str = "."

    # -- Sources -----------------------------------------------------
    # Explicit files win over ``directory`` when both are set.
    paths: List[str] = field(default_factory=list)
    directory: str = ""
    sort_directory: bool = True

    # -- Logging -----------------------------------------------------
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Raise ConfigError if any field has an unusable value."""
        if not isinstance(self.delimiter, str) or not self.delimiter:
            raise ConfigError("delimiter must be a non-empty string")
        if not isinstance(self.paths, list) or not all(isinstance(p, str) for p in self.paths):
            raise ConfigError("paths must be a list of strings")
        if not isinstance(self.directory, str):
            raise ConfigError("directory must be a string")
        if not isinstance(self.sort_directory, bool):
            raise ConfigError("sort_directory must be true or false")
        if str(self.log_level).upper() not in logging.getLevelNamesMapping():
            raise ConfigError(f"unknown log level {self.log_level!r}")


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> CascadeSettings:
    """Load settings from a YAML file.

    Keys the file leaves out keep their ``CascadeSettings`` value and
    keys it does not know are skipped. An absent file is not an error:
    it is reported at WARNING and an all-default instance comes back.

    Raises:
        ConfigError: If the file is not a YAML mapping or a value is invalid.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Settings not found at %s, using defaults", p)
        return CascadeSettings()

    try:
        with p.open() as f:
            raw = yaml.safe_load(f) or {}
    except OSError as exc:
        raise DictionaryIOError(exc.strerror or str(exc), p) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", p) from exc
    if not isinstance(raw, dict):
        raise ConfigError("settings file must contain a mapping", p)

    log.info("Loaded settings from %s (%d keys)", p, len(raw))

    known = {f.name for f in fields(CascadeSettings)}
    settings = CascadeSettings(**{k: v for k, v in raw.items() if k in known})
    try:
        settings.validate()
    except ConfigError as exc:
        exc.path = p
        raise
    return settings


def build_cascade(settings: CascadeSettings) -> Cascade:
    """Build the cascade described by ``settings``.

    Explicit ``paths`` take precedence; otherwise every file in
    ``directory`` is loaded.

    Raises:
        ConfigError: If neither paths nor a directory is configured.
    """
    settings.validate()
    if settings.paths:
        return Cascade.from_paths(settings.paths, settings.delimiter)
    if settings.directory:
        return Cascade.from_directory(
            settings.directory, settings.delimiter, sort=settings.sort_directory,
        )
    raise ConfigError("no dictionary sources configured (set paths or directory)")
