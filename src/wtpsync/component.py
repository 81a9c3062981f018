"""Assemble the WTP component (deployment assembly) of a project."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Sequence

from wtpsync.model import (
    Component,
    Dependency,
    DeploymentDecision,
    OriginKind,
    Project,
    ProjectKind,
    WbModule,
    WbResource,
)

logger = logging.getLogger(__name__)

WEB_INF_CLASSES = "/WEB-INF/classes"
ROOT = "/"


def _resources(project: Project) -> tuple[WbResource, ...]:
    if project.kind is ProjectKind.WEB_APPLICATION:
        java_root, web_root = project.source_roots
        return (
            WbResource(java_root, WEB_INF_CLASSES),
            WbResource(web_root, ROOT),
        )
    return tuple(WbResource(root, ROOT) for root in project.source_roots)


def module_references(
    decided: Sequence[tuple[Dependency, DeploymentDecision]],
    resolve_deploy_name: Callable[[str], str],
) -> list[str]:
    """What the module or classpath entry of each dependency refers to.

    Sub-projects are referred to by their ``deployName`` and artifacts by
    file name.  Artifacts sharing a file name (``util-1.0.jar`` from two
    groups) are prefixed with their group so every reference stays unique.
    """
    file_names = Counter(
        dependency.coordinate.file_name
        for dependency, _ in decided
        if dependency.origin is OriginKind.LIB
    )
    references: list[str] = []
    for dependency, _ in decided:
        if dependency.origin is OriginKind.PROJECT:
            references.append(resolve_deploy_name(dependency.project_ref))
            continue
        coordinate = dependency.coordinate
        if file_names[coordinate.file_name] > 1:
            logger.debug(
                "%s clashes with another artifact's file name, prefixing group",
                coordinate.key,
            )
            references.append(f"{coordinate.group}-{coordinate.file_name}")
        else:
            references.append(coordinate.file_name)
    return references


def assemble_component(
    project: Project,
    decided: Sequence[tuple[Dependency, DeploymentDecision]],
    resolve_deploy_name: Callable[[str], str],
) -> Component | None:
    """Build the component for *project* from its deployment decisions.

    Returns None for projects of unrecognized kind.
    """
    if project.kind is None:
        return None

    modules: list[WbModule] = []
    if project.kind is ProjectKind.WEB_APPLICATION:
        references = module_references(decided, resolve_deploy_name)
        for (dependency, decision), reference in zip(decided, references):
            if decision.module_path is None:
                continue
            modules.append(
                WbModule(
                    reference=reference,
                    deployed_at=decision.module_path,
                    origin_kind=dependency.origin,
                )
            )

    component = Component(
        deploy_name=project.deploy_name,
        resources=_resources(project),
        modules=tuple(modules),
        context_path=(
            project.deploy_name
            if project.kind is ProjectKind.WEB_APPLICATION
            else None
        ),
    )
    logger.debug(
        "%s: component with %d resources, %d modules",
        project.path,
        len(component.resources),
        len(component.modules),
    )
    return component
