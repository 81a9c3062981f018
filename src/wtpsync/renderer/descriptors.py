"""Render descriptors to the plain shapes handed to the serialization layer."""

from __future__ import annotations

import json

from wtpsync.model import (
    ClasspathEntry,
    Component,
    DeploymentAttribute,
    FacetSet,
    ProjectDescriptors,
    ProjectNatures,
)


def _classpath_entry_to_dict(entry: ClasspathEntry) -> dict:
    d: dict = {"entryId": entry.entry_id, "originKind": entry.origin_kind.name}
    if entry.attribute is not DeploymentAttribute.NONE:
        d["deploymentAttribute"] = entry.attribute.name
    return d


def _component_to_dict(component: Component) -> dict:
    d: dict = {
        "deployName": component.deploy_name,
        "resources": [
            {"sourceRoot": r.source_root, "deployedAt": r.deployed_at}
            for r in component.resources
        ],
        "modules": [
            {
                "reference": m.reference,
                "deployedAt": m.deployed_at,
                "originKind": m.origin_kind.name,
            }
            for m in component.modules
        ],
    }
    if component.context_path is not None:
        d["contextPath"] = component.context_path
    return d


def _facets_to_dict(facets: FacetSet) -> dict:
    return {
        "fixedFacets": sorted(facets.fixed),
        "installedFacets": sorted(facets.installed_ids),
        "facetVersions": {
            f.name: f.version for f in sorted(facets.installed, key=lambda f: f.name)
        },
    }


def _natures_to_dict(natures: ProjectNatures) -> dict:
    return {
        "natures": list(natures.natures),
        "buildCommands": list(natures.build_commands),
    }


def descriptors_to_dict(descriptors: ProjectDescriptors) -> dict:
    """Convert one project's descriptors to JSON-compatible data."""
    project = descriptors.project
    return {
        "project": project.path,
        "kind": project.kind.value if project.kind is not None else None,
        "classpath": [_classpath_entry_to_dict(e) for e in descriptors.classpath],
        "component": (
            _component_to_dict(descriptors.component)
            if descriptors.component is not None
            else None
        ),
        "facets": _facets_to_dict(descriptors.facets),
        "projectDescription": _natures_to_dict(descriptors.natures),
    }


def render_json(descriptors: dict[str, ProjectDescriptors], indent: int = 2) -> str:
    """Serialize the descriptors of a whole sync pass; stable across runs."""
    data = {path: descriptors_to_dict(d) for path, d in descriptors.items()}
    return json.dumps(data, indent=indent, sort_keys=True)
