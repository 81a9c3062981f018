"""Project natures and build commands for WTP-enabled Java projects."""

from __future__ import annotations

from wtpsync.model import ProjectKind, ProjectNatures

JAVA_NATURES = (
    "org.eclipse.jdt.core.javanature",
    "org.eclipse.wst.common.project.facet.core.nature",
    "org.eclipse.wst.common.modulecore.ModuleCoreNature",
    "org.eclipse.jem.workbench.JavaEMFNature",
)

JAVA_BUILD_COMMANDS = (
    "org.eclipse.jdt.core.javabuilder",
    "org.eclipse.wst.common.project.facet.core.builder",
    "org.eclipse.wst.validation.validationbuilder",
)


def resolve_natures(kind: ProjectKind | None) -> ProjectNatures:
    # Both recognized kinds are faceted Java projects.
    if kind is None:
        return ProjectNatures()
    return ProjectNatures(natures=JAVA_NATURES, build_commands=JAVA_BUILD_COMMANDS)
