"""Build classpath entries annotated with deployment markers."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from wtpsync.component import module_references
from wtpsync.model import (
    ClasspathEntry,
    Dependency,
    DeploymentDecision,
    OriginKind,
)


def build_classpath(
    decided: Sequence[tuple[Dependency, DeploymentDecision]],
    resolve_deploy_name: Callable[[str], str],
) -> tuple[ClasspathEntry, ...]:
    """Return one entry per dependency, in dependency order.

    Library entries are identified by artifact file name and project entries
    by ``/<deployName>``.  Entries decided ``NONE`` carry no marker but are
    still emitted since the IDE needs them to compile.
    """
    entries: list[ClasspathEntry] = []
    references = module_references(decided, resolve_deploy_name)
    for (dependency, decision), reference in zip(decided, references):
        if dependency.origin is OriginKind.PROJECT:
            reference = f"/{reference}"
        entries.append(
            ClasspathEntry(
                entry_id=reference,
                origin_kind=dependency.origin,
                attribute=decision.attribute,
            )
        )
    return tuple(entries)
