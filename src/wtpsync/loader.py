"""Load a resolved build snapshot (YAML or JSON) into :class:`BuildSnapshot`."""

from __future__ import annotations

import logging
from pathlib import Path

from wtpsync.errors import SnapshotError
from wtpsync.model import BuildSnapshot, Coordinate, ProjectSpec, ResolvedEntry

logger = logging.getLogger(__name__)


def load_snapshot(path: Path) -> BuildSnapshot:
    """Read and parse the snapshot at *path*."""
    import yaml

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise SnapshotError(f"Could not read build snapshot {path}: {e}") from e

    snapshot = parse_snapshot(data)
    logger.debug("Loaded %d projects from %s", len(snapshot.projects), path)
    return snapshot


def parse_snapshot(data: object) -> BuildSnapshot:
    """Build a :class:`BuildSnapshot` from already-decoded data."""
    if not isinstance(data, dict) or not isinstance(data.get("projects"), list):
        raise SnapshotError("Build snapshot must be a mapping with a 'projects' list")

    projects: list[ProjectSpec] = []
    seen: set[str] = set()
    for raw in data["projects"]:
        spec = _parse_project(raw)
        if spec.path in seen:
            raise SnapshotError(f"Duplicate project path {spec.path!r}")
        seen.add(spec.path)
        projects.append(spec)
    return BuildSnapshot(projects=tuple(projects))


def _optional_str(raw: dict, key: str, where: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, float):
        # YAML reads 1.10 as 1.1
        raise SnapshotError(f"{where}: {key!r} must be quoted, got number {value!r}")
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise SnapshotError(f"{where}: {key!r} must be a string")
    return value


def _parse_project(raw: object) -> ProjectSpec:
    if not isinstance(raw, dict):
        raise SnapshotError("Each project must be a mapping")

    path = raw.get("path")
    if not isinstance(path, str) or not path:
        raise SnapshotError("Project is missing a 'path'")

    name = raw.get("name") or path.rsplit(":", 1)[-1] or path
    plugins = raw.get("plugins", [])
    if not isinstance(plugins, list) or not all(isinstance(p, str) for p in plugins):
        raise SnapshotError(f"{path}: 'plugins' must be a list of strings")

    configurations_raw = raw.get("configurations", {}) or {}
    if not isinstance(configurations_raw, dict):
        raise SnapshotError(f"{path}: 'configurations' must be a mapping")

    configurations: dict[str, tuple[ResolvedEntry, ...]] = {}
    for conf_name, entries in configurations_raw.items():
        if not isinstance(entries, list):
            raise SnapshotError(f"{path}: configuration {conf_name!r} must be a list")
        configurations[str(conf_name)] = tuple(
            _parse_entry(entry, f"{path}/{conf_name}") for entry in entries
        )

    return ProjectSpec(
        path=path,
        name=str(name),
        plugins=tuple(plugins),
        configurations=configurations,
        deploy_name=_optional_str(raw, "deployName", path),
        source_compatibility=_optional_str(raw, "sourceCompatibility", path),
        java_source_dir=_optional_str(raw, "javaSourceDir", path),
        web_app_dir=_optional_str(raw, "webAppDirName", path),
    )


def _parse_entry(raw: object, where: str) -> ResolvedEntry:
    # Bare strings are shorthand for a direct external artifact.
    if isinstance(raw, str):
        raw = {"id": raw}
    if not isinstance(raw, dict):
        raise SnapshotError(f"{where}: entries must be mappings or strings")

    artifact = raw.get("id")
    project_ref = raw.get("project")
    if (artifact is None) == (project_ref is None):
        raise SnapshotError(f"{where}: entry needs exactly one of 'id' or 'project'")

    failure = raw.get("unresolved")
    if failure is True:
        failure = "unresolved"
    elif failure is False:
        failure = None

    transitive = raw.get("transitive", False)
    if not isinstance(transitive, bool):
        raise SnapshotError(f"{where}: 'transitive' must be true or false")

    coordinate = None
    if artifact is not None:
        try:
            coordinate = Coordinate.parse(str(artifact))
        except ValueError as e:
            raise SnapshotError(f"{where}: {e}") from e

    return ResolvedEntry(
        coordinate=coordinate,
        project_ref=str(project_ref) if project_ref is not None else None,
        transitive=transitive,
        failure=str(failure) if failure is not None else None,
    )
