"""Deployment policy: decide how each dependency is represented in the descriptors.

A policy is a plain table keyed by ``(ProjectKind, Scope)``.  The dependency's
origin never selects a row; it only changes what a component module refers to
(see :mod:`wtpsync.component`).  Tables are data, so a corrected mapping can be
registered or loaded from configuration without touching the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from wtpsync.errors import ConfigurationError
from wtpsync.model import (
    Dependency,
    DeploymentAttribute,
    DeploymentDecision,
    Project,
    ProjectKind,
    Scope,
)

logger = logging.getLogger(__name__)

WEB_INF_LIB = "/WEB-INF/lib"


@dataclass(frozen=True)
class PolicyRule:
    """One row of the table: the classpath attribute and optional module path."""

    attribute: DeploymentAttribute
    module_path: str | None = None


PolicyTable = Mapping[tuple[ProjectKind, Scope], PolicyRule]

DEFAULT_RULES: dict[tuple[ProjectKind, Scope], PolicyRule] = {
    (ProjectKind.JAVA_LIBRARY, Scope.COMPILE): PolicyRule(DeploymentAttribute.DEPLOYED),
    # "runtime-only" drops this marker.
    (ProjectKind.JAVA_LIBRARY, Scope.PROVIDED): PolicyRule(DeploymentAttribute.DEPLOYED),
    (ProjectKind.JAVA_LIBRARY, Scope.TEST): PolicyRule(DeploymentAttribute.NONE),
    (ProjectKind.WEB_APPLICATION, Scope.COMPILE): PolicyRule(
        DeploymentAttribute.EXCLUDED, WEB_INF_LIB
    ),
    (ProjectKind.WEB_APPLICATION, Scope.PROVIDED): PolicyRule(
        DeploymentAttribute.EXCLUDED, WEB_INF_LIB
    ),
    (ProjectKind.WEB_APPLICATION, Scope.TEST): PolicyRule(
        DeploymentAttribute.EXCLUDED, WEB_INF_LIB
    ),
}

RUNTIME_ONLY_RULES: dict[tuple[ProjectKind, Scope], PolicyRule] = {
    **DEFAULT_RULES,
    (ProjectKind.JAVA_LIBRARY, Scope.PROVIDED): PolicyRule(DeploymentAttribute.NONE),
    (ProjectKind.WEB_APPLICATION, Scope.PROVIDED): PolicyRule(DeploymentAttribute.EXCLUDED),
    (ProjectKind.WEB_APPLICATION, Scope.TEST): PolicyRule(DeploymentAttribute.EXCLUDED),
}


class DeploymentPolicy:
    """Validated decision table."""

    def __init__(self, rules: PolicyTable, name: str = "custom") -> None:
        self.name = name
        self.rules = dict(rules)
        _validate(self.rules, name)

    def __repr__(self) -> str:
        return f"DeploymentPolicy({self.name!r})"

    def rule_for(self, kind: ProjectKind, scope: Scope) -> PolicyRule:
        return self.rules[(kind, scope)]

    def decide(self, project: Project, dependency: Dependency) -> DeploymentDecision:
        """Return the decision for *dependency* in *project*.

        Projects of unrecognized kind have no deployment model: every
        dependency gets :attr:`DeploymentAttribute.NONE` and no module.
        """
        if project.kind is None:
            return DeploymentDecision(DeploymentAttribute.NONE)
        rule = self.rule_for(project.kind, dependency.scope)
        return DeploymentDecision(rule.attribute, rule.module_path)

    def decide_all(
        self, project: Project, dependencies: Iterable[Dependency]
    ) -> list[tuple[Dependency, DeploymentDecision]]:
        decided = [(dep, self.decide(project, dep)) for dep in dependencies]
        logger.debug(
            "%s: %s policy decided %d dependencies, %d as modules",
            project.path,
            self.name,
            len(decided),
            sum(1 for _, d in decided if d.module_path is not None),
        )
        return decided

    def with_overrides(
        self, overrides: Mapping[tuple[ProjectKind, Scope], PolicyRule]
    ) -> DeploymentPolicy:
        """Return a new policy with some rows replaced."""
        if not overrides:
            return self
        return DeploymentPolicy({**self.rules, **overrides}, name=f"{self.name}+overrides")


def _validate(rules: Mapping[tuple[ProjectKind, Scope], PolicyRule], name: str) -> None:
    missing = [
        f"{kind.value}/{scope.value}"
        for kind in ProjectKind
        for scope in Scope
        if (kind, scope) not in rules
    ]
    if missing:
        raise ConfigurationError(
            f"Deployment policy {name!r} has no rule for: {', '.join(missing)}"
        )

    for (kind, scope), rule in rules.items():
        row = f"{kind.value}/{scope.value}"
        if kind is ProjectKind.JAVA_LIBRARY and rule.module_path is not None:
            raise ConfigurationError(
                f"Deployment policy {name!r}: library rule {row} cannot add a "
                "component module"
            )
        if (
            kind is ProjectKind.WEB_APPLICATION
            and rule.attribute is DeploymentAttribute.DEPLOYED
        ):
            raise ConfigurationError(
                f"Deployment policy {name!r}: web rule {row} cannot mark the "
                "classpath entry deployed; use a component module instead"
            )


DEFAULT_POLICY = DeploymentPolicy(DEFAULT_RULES, name="default")
RUNTIME_ONLY_POLICY = DeploymentPolicy(RUNTIME_ONLY_RULES, name="runtime-only")

POLICIES: dict[str, DeploymentPolicy] = {
    DEFAULT_POLICY.name: DEFAULT_POLICY,
    RUNTIME_ONLY_POLICY.name: RUNTIME_ONLY_POLICY,
}


def get_policy(name: str) -> DeploymentPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown deployment policy {name!r} (known: {', '.join(sorted(POLICIES))})"
        ) from None
