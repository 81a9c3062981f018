"""Orchestrator: validate graph → classify → map scopes → decide → assemble."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from wtpsync.analysis import project_graph
from wtpsync.classify import classify
from wtpsync.classpath import build_classpath
from wtpsync.component import assemble_component
from wtpsync.config import load_config
from wtpsync.errors import ConfigurationError, WtpSyncError
from wtpsync.facets import resolve_facets
from wtpsync.loader import load_snapshot
from wtpsync.model import BuildSnapshot, ProjectDescriptors, ProjectSpec
from wtpsync.natures import resolve_natures
from wtpsync.policy import DEFAULT_POLICY, DeploymentPolicy
from wtpsync.scheduler import run_in_dependency_order
from wtpsync.scopes import ScopeMapper

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Descriptors per project path, plus the projects that failed."""

    descriptors: dict[str, ProjectDescriptors] = field(default_factory=dict)
    failures: dict[str, WtpSyncError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def generate_descriptors(
    spec: ProjectSpec,
    *,
    upstream: Mapping[str, ProjectDescriptors] | None = None,
    policy: DeploymentPolicy = DEFAULT_POLICY,
    scope_mapper: ScopeMapper | None = None,
) -> ProjectDescriptors:
    """Compute all descriptors for one project.

    *upstream* holds the already generated descriptors of every sub-project
    *spec* depends on; sub-project references use their ``deployName``.
    Raises on the first unresolved dependency, so no partial descriptor is
    ever returned.
    """
    upstream = upstream or {}
    scope_mapper = scope_mapper or ScopeMapper()

    def resolve_deploy_name(ref: str) -> str:
        try:
            return upstream[ref].project.deploy_name
        except KeyError:
            raise ConfigurationError(
                f"Project {spec.path} refers to {ref}, which has not been generated"
            ) from None

    project = classify(spec)
    dependencies = scope_mapper.map_dependencies(spec)
    decided = policy.decide_all(project, dependencies)

    return ProjectDescriptors(
        project=project,
        classpath=build_classpath(decided, resolve_deploy_name),
        component=assemble_component(project, decided, resolve_deploy_name),
        facets=resolve_facets(project.kind, spec.source_compatibility),
        natures=resolve_natures(project.kind),
    )


def sync(
    snapshot: BuildSnapshot,
    *,
    policy: DeploymentPolicy = DEFAULT_POLICY,
    scope_mapper: ScopeMapper | None = None,
    max_workers: int = 1,
) -> SyncResult:
    """Generate descriptors for every project of *snapshot*.

    Raises :class:`ConfigurationError` (including
    :class:`~wtpsync.errors.DependencyCycleError`) before generating anything
    if the project graph is invalid.  Per-project failures are collected in
    :attr:`SyncResult.failures`.
    """
    graph = project_graph(snapshot)
    scope_mapper = scope_mapper or ScopeMapper()
    specs = {spec.path: spec for spec in snapshot.projects}

    def _task(path: str, upstream: Mapping[str, ProjectDescriptors]) -> ProjectDescriptors:
        return generate_descriptors(
            specs[path], upstream=upstream, policy=policy, scope_mapper=scope_mapper
        )

    descriptors, failures = run_in_dependency_order(
        graph, _task, max_workers=max_workers
    )
    for path, error in failures.items():
        logger.error("%s: %s", path, error)

    logger.debug(
        "Sync finished: %d projects generated, %d failed",
        len(descriptors),
        len(failures),
    )
    return SyncResult(descriptors=descriptors, failures=failures)


def run(
    snapshot_path: Path,
    *,
    project: str | None = None,
    config_path: Path | None = None,
    max_workers: int = 1,
) -> SyncResult:
    """Load *snapshot_path* and its settings, then run :func:`sync`.

    With *project*, only that project's descriptors are kept (its
    sub-projects are still evaluated first).
    """
    snapshot_path = snapshot_path.resolve()
    config = load_config(snapshot_path.parent, config_path=config_path)
    snapshot = load_snapshot(snapshot_path)

    if project is not None and snapshot.get(project) is None:
        raise ConfigurationError(f"No project {project!r} in {snapshot_path}")

    logger.debug("Policy: %r, projects: %d", config.policy, len(snapshot.projects))

    result = sync(
        snapshot,
        policy=config.policy,
        scope_mapper=config.scope_mapper(),
        max_workers=max_workers,
    )
    if project is not None:
        result = SyncResult(
            descriptors={
                p: d for p, d in result.descriptors.items() if p == project
            },
            failures={p: e for p, e in result.failures.items() if p == project},
        )
    return result
