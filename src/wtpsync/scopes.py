"""Map dependency configurations to scopes and merge duplicate declarations."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from wtpsync.errors import UnresolvedDependencyError
from wtpsync.model import Dependency, ProjectSpec, ResolvedEntry, Scope

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATION_SCOPES: dict[str, Scope] = {
    # compile-time and runtime classpath
    "compile": Scope.COMPILE,
    "implementation": Scope.COMPILE,
    "api": Scope.COMPILE,
    "runtime": Scope.COMPILE,
    "runtimeOnly": Scope.COMPILE,
    # supplied by the container at runtime
    "providedCompile": Scope.PROVIDED,
    "providedRuntime": Scope.PROVIDED,
    "compileOnly": Scope.PROVIDED,
    "compileOnlyApi": Scope.PROVIDED,
    # test only
    "testCompile": Scope.TEST,
    "testRuntime": Scope.TEST,
    "testImplementation": Scope.TEST,
    "testRuntimeOnly": Scope.TEST,
    "testCompileOnly": Scope.TEST,
}


def _identity(entry: ResolvedEntry) -> str:
    if entry.project_ref is not None:
        return entry.project_ref
    return entry.coordinate.key


class ScopeMapper:
    """Tag each resolved entry of a project with its scope.

    *extra_scopes* adds to (or overrides) the default configuration mapping.
    """

    def __init__(self, extra_scopes: Mapping[str, Scope] | None = None) -> None:
        self.configuration_scopes = dict(DEFAULT_CONFIGURATION_SCOPES)
        if extra_scopes:
            self.configuration_scopes.update(extra_scopes)

    def scope_for(self, configuration: str) -> Scope | None:
        return self.configuration_scopes.get(configuration)

    def map_dependencies(self, spec: ProjectSpec) -> tuple[Dependency, ...]:
        """Return the deduplicated dependencies of *spec*.

        Configurations are visited in scope precedence order (and declaration
        order within a scope), so the result order is independent of how the
        collaborator happened to order its configurations.  An entry seen under
        several configurations keeps its most visible scope.

        Raises :class:`UnresolvedDependencyError` on the first entry the
        resolver failed on.
        """
        scoped: list[tuple[Scope, str]] = []
        for configuration in spec.configurations:
            scope = self.scope_for(configuration)
            if scope is None:
                logger.debug(
                    "%s: ignoring configuration %r (no scope mapping)",
                    spec.path,
                    configuration,
                )
                continue
            scoped.append((scope, configuration))
        scoped.sort(key=lambda item: item[0].precedence)

        merged: dict[str, Dependency] = {}
        for scope, configuration in scoped:
            for entry in spec.configurations[configuration]:
                if entry.failure is not None:
                    raise UnresolvedDependencyError(
                        spec.path, entry.notation, entry.failure
                    )
                identity = _identity(entry)
                existing = merged.get(identity)
                if existing is None:
                    merged[identity] = Dependency(
                        identity=identity,
                        scope=scope,
                        coordinate=entry.coordinate,
                        project_ref=entry.project_ref,
                        transitive=entry.transitive,
                    )
                    continue
                # Already recorded under an equally or more visible scope;
                # only directness can still change.
                if existing.transitive and not entry.transitive:
                    merged[identity] = Dependency(
                        identity=identity,
                        scope=existing.scope,
                        coordinate=existing.coordinate,
                        project_ref=existing.project_ref,
                        transitive=False,
                    )

        dependencies = tuple(merged.values())
        logger.debug(
            "%s: %d dependencies (%d direct)",
            spec.path,
            len(dependencies),
            sum(1 for d in dependencies if not d.transitive),
        )
        return dependencies
