"""Classify projects by their applied plugins."""

from __future__ import annotations

import logging

from wtpsync.model import Project, ProjectKind, ProjectSpec

logger = logging.getLogger(__name__)

JAVA_SOURCE_DIR = "src/main/java"
WEB_APP_DIR = "src/main/webapp"

# Plugin ids that make a project deployable as a web application.
_WEB_PLUGINS = {"war"}

# Plugin ids that make a project a plain Java library.
_JAVA_PLUGINS = {"java", "java-library"}


def detect_kind(plugins: tuple[str, ...] | list[str]) -> ProjectKind | None:
    """Return the project kind implied by *plugins*, or None if unrecognized."""
    applied = set(plugins)
    if applied & _WEB_PLUGINS:
        return ProjectKind.WEB_APPLICATION
    if applied & _JAVA_PLUGINS:
        return ProjectKind.JAVA_LIBRARY
    return None


def canonical_source_roots(
    kind: ProjectKind | None,
    *,
    java_source_dir: str | None = None,
    web_app_dir: str | None = None,
) -> tuple[str, ...]:
    """Return the ordered source roots a project of *kind* deploys."""
    if kind is None:
        return ()
    java_root = java_source_dir or JAVA_SOURCE_DIR
    if kind is ProjectKind.WEB_APPLICATION:
        return (java_root, web_app_dir or WEB_APP_DIR)
    return (java_root,)


def classify(spec: ProjectSpec) -> Project:
    """Build the normalized :class:`Project` for *spec*."""
    kind = detect_kind(spec.plugins)
    if kind is None:
        logger.info(
            "Project %s has no recognized Java plugin (%s); "
            "generating classpath only",
            spec.path,
            ", ".join(spec.plugins) or "none applied",
        )

    return Project(
        path=spec.path,
        kind=kind,
        source_roots=canonical_source_roots(
            kind,
            java_source_dir=spec.java_source_dir,
            web_app_dir=spec.web_app_dir,
        ),
        deploy_name=spec.deploy_name or spec.name,
    )
