"""Data model for resolved build input and the generated IDE descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProjectKind(Enum):
    """Deployment role of a project."""

    JAVA_LIBRARY = "java-library"
    WEB_APPLICATION = "web-application"


class Scope(Enum):
    """Visibility of a dependency, ordered by precedence (most visible first)."""

    COMPILE = "compile"
    PROVIDED = "provided"
    TEST = "test"

    @property
    def precedence(self) -> int:
        return _SCOPE_PRECEDENCE[self]


_SCOPE_PRECEDENCE = {Scope.COMPILE: 0, Scope.PROVIDED: 1, Scope.TEST: 2}


class OriginKind(Enum):
    LIB = "lib"
    PROJECT = "project"


class DeploymentAttribute(Enum):
    DEPLOYED = "deployed"
    EXCLUDED = "excluded"
    NONE = "none"


class DeploymentLocation(Enum):
    CLASSPATH_ATTRIBUTE = "classpath-attribute"
    COMPONENT_MODULE = "component-module"


# ---------------------------------------------------------------------------
# Build snapshot input
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Coordinate:
    """External artifact coordinates: ``group:name:version[:classifier]``."""

    group: str
    name: str
    version: str
    classifier: str | None = None
    extension: str = "jar"

    @classmethod
    def parse(cls, notation: str) -> Coordinate:
        parts = notation.split(":")
        if len(parts) not in (3, 4) or not all(parts):
            raise ValueError(f"Invalid artifact notation: {notation!r}")
        classifier = parts[3] if len(parts) == 4 else None
        return cls(group=parts[0], name=parts[1], version=parts[2], classifier=classifier)

    @property
    def key(self) -> str:
        base = f"{self.group}:{self.name}:{self.version}"
        return f"{base}:{self.classifier}" if self.classifier else base

    @property
    def file_name(self) -> str:
        """The artifact's file name, e.g. ``guava-18.0.jar``."""
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.name}-{self.version}{suffix}.{self.extension}"


@dataclass(frozen=True)
class ResolvedEntry:
    """One entry of a configuration's resolved dependency list.

    Exactly one of ``coordinate`` and ``project_ref`` is set.  ``failure``
    holds the resolver's message when the entry could not be resolved.
    """

    coordinate: Coordinate | None = None
    project_ref: str | None = None
    transitive: bool = False
    failure: str | None = None

    @property
    def notation(self) -> str:
        if self.coordinate is not None:
            return self.coordinate.key
        return self.project_ref or "<unknown>"


@dataclass(frozen=True)
class ProjectSpec:
    """A project as handed over by the build/resolution collaborator."""

    path: str
    name: str
    plugins: tuple[str, ...] = ()
    configurations: dict[str, tuple[ResolvedEntry, ...]] = field(default_factory=dict)
    deploy_name: str | None = None
    source_compatibility: str | None = None
    java_source_dir: str | None = None
    web_app_dir: str | None = None

    @property
    def project_refs(self) -> list[str]:
        """Paths of sub-projects this project depends on, in declaration order."""
        refs: list[str] = []
        for entries in self.configurations.values():
            for entry in entries:
                if entry.project_ref is not None and entry.project_ref not in refs:
                    refs.append(entry.project_ref)
        return refs


@dataclass(frozen=True)
class BuildSnapshot:
    """All projects of one build, in declaration order."""

    projects: tuple[ProjectSpec, ...] = ()

    def get(self, path: str) -> ProjectSpec | None:
        for spec in self.projects:
            if spec.path == path:
                return spec
        return None


# ---------------------------------------------------------------------------
# Normalized model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Project:
    path: str
    kind: ProjectKind | None
    source_roots: tuple[str, ...]
    deploy_name: str


@dataclass(frozen=True)
class Dependency:
    """A resolved dependency edge after scope mapping and deduplication."""

    identity: str
    scope: Scope
    coordinate: Coordinate | None = None
    project_ref: str | None = None
    transitive: bool = False

    @property
    def origin(self) -> OriginKind:
        return OriginKind.PROJECT if self.project_ref is not None else OriginKind.LIB


@dataclass(frozen=True)
class DeploymentDecision:
    attribute: DeploymentAttribute
    module_path: str | None = None

    @property
    def locations(self) -> frozenset[DeploymentLocation]:
        locations: set[DeploymentLocation] = set()
        if self.attribute is not DeploymentAttribute.NONE:
            locations.add(DeploymentLocation.CLASSPATH_ATTRIBUTE)
        if self.module_path is not None:
            locations.add(DeploymentLocation.COMPONENT_MODULE)
        return frozenset(locations)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClasspathEntry:
    entry_id: str
    origin_kind: OriginKind
    attribute: DeploymentAttribute = DeploymentAttribute.NONE


@dataclass(frozen=True)
class WbResource:
    source_root: str
    deployed_at: str


@dataclass(frozen=True)
class WbModule:
    reference: str
    deployed_at: str
    origin_kind: OriginKind = OriginKind.LIB


@dataclass(frozen=True)
class Component:
    deploy_name: str
    resources: tuple[WbResource, ...] = ()
    modules: tuple[WbModule, ...] = ()
    context_path: str | None = None


@dataclass(frozen=True)
class Facet:
    name: str
    version: str | None = None


@dataclass(frozen=True)
class FacetSet:
    fixed: frozenset[str] = frozenset()
    installed: frozenset[Facet] = frozenset()

    @property
    def installed_ids(self) -> frozenset[str]:
        return frozenset(f.name for f in self.installed)


@dataclass(frozen=True)
class ProjectNatures:
    natures: tuple[str, ...] = ()
    build_commands: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectDescriptors:
    """Everything generated for one project in a sync pass."""

    project: Project
    classpath: tuple[ClasspathEntry, ...]
    component: Component | None
    facets: FacetSet
    natures: ProjectNatures
