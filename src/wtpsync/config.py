"""Read optional wtpsync settings from .wtpsync.toml or pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from wtpsync.errors import ConfigurationError
from wtpsync.model import DeploymentAttribute, ProjectKind, Scope
from wtpsync.policy import (
    DEFAULT_POLICY,
    WEB_INF_LIB,
    DeploymentPolicy,
    PolicyRule,
    get_policy,
)
from wtpsync.scopes import ScopeMapper

logger = logging.getLogger(__name__)

CONFIG_FILE = ".wtpsync.toml"


@dataclass
class SyncConfig:
    policy: DeploymentPolicy = DEFAULT_POLICY
    extra_scopes: dict[str, Scope] = field(default_factory=dict)

    def scope_mapper(self) -> ScopeMapper:
        return ScopeMapper(self.extra_scopes)


def _read_table(path: Path, *keys: str) -> dict | None:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return None
    for key in keys:
        data = data.get(key)
        if not isinstance(data, dict):
            return None
    return data


def find_settings(directory: Path) -> dict | None:
    """Return the raw settings table for *directory*, if any."""
    # Try .wtpsync.toml first
    local = directory / CONFIG_FILE
    if local.exists():
        return _read_table(local, "wtpsync")

    # Fall back to [tool.wtpsync] in pyproject.toml
    pyproject = directory / "pyproject.toml"
    if pyproject.exists():
        return _read_table(pyproject, "tool", "wtpsync")

    return None


def load_config(
    directory: Path | None = None, *, config_path: Path | None = None
) -> SyncConfig:
    """Load settings from *config_path*, or discover them in *directory*."""
    if config_path is not None:
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        settings = _read_table(config_path, "wtpsync")
    elif directory is not None:
        settings = find_settings(directory)
    else:
        settings = None

    if not settings:
        return SyncConfig()
    return parse_settings(settings)


def _enum_value(enum_cls, value: object, what: str):
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(
            f"Invalid {what} {value!r} (expected one of: {allowed})"
        ) from None


def parse_settings(settings: dict) -> SyncConfig:
    """Turn a ``[wtpsync]`` table into a :class:`SyncConfig`."""
    policy = get_policy(str(settings.get("policy", DEFAULT_POLICY.name)))

    extra_scopes: dict[str, Scope] = {}
    scopes = settings.get("scopes") or {}
    if not isinstance(scopes, dict):
        raise ConfigurationError("[wtpsync.scopes] must be a table")
    for configuration, scope in scopes.items():
        extra_scopes[configuration] = _enum_value(Scope, scope, "scope")

    overrides: dict[tuple[ProjectKind, Scope], PolicyRule] = {}
    for rule in settings.get("rules") or []:
        if not isinstance(rule, dict):
            raise ConfigurationError("Each [[wtpsync.rules]] entry must be a table")
        kind = _enum_value(ProjectKind, rule.get("kind"), "project kind")
        scope = _enum_value(Scope, rule.get("scope"), "scope")
        attribute = _enum_value(
            DeploymentAttribute, rule.get("attribute", "none"), "deployment attribute"
        )
        module = rule.get("module", False)
        if isinstance(module, bool):
            module_path = WEB_INF_LIB if module else None
        else:
            module_path = str(module)
        overrides[(kind, scope)] = PolicyRule(attribute, module_path)

    if overrides:
        logger.debug("Applying %d policy rule overrides", len(overrides))
    return SyncConfig(policy=policy.with_overrides(overrides), extra_scopes=extra_scopes)
