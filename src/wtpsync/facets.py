"""Resolve the WTP facet set of a project."""

from __future__ import annotations

from wtpsync.model import Facet, FacetSet, ProjectKind

JAVA_FACET = "jst.java"
WEB_FACET = "jst.web"
UTILITY_FACET = "jst.utility"

DEFAULT_JAVA_VERSION = "1.6"
WEB_FACET_VERSION = "2.4"
UTILITY_FACET_VERSION = "1.0"


def resolve_facets(
    kind: ProjectKind | None, source_compatibility: str | None = None
) -> FacetSet:
    """Return the fixed and installed facets for a project of *kind*.

    The ``jst.java`` facet is installed at the project's source compatibility.
    Unrecognized projects get no facets.
    """
    java = Facet(JAVA_FACET, source_compatibility or DEFAULT_JAVA_VERSION)

    if kind is ProjectKind.WEB_APPLICATION:
        return FacetSet(
            fixed=frozenset({JAVA_FACET, WEB_FACET}),
            installed=frozenset({Facet(WEB_FACET, WEB_FACET_VERSION), java}),
        )
    if kind is ProjectKind.JAVA_LIBRARY:
        return FacetSet(
            fixed=frozenset({JAVA_FACET}),
            installed=frozenset({Facet(UTILITY_FACET, UTILITY_FACET_VERSION), java}),
        )
    return FacetSet()
