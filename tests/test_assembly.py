"""Tests for the component assembler, classpath builder, facets and natures."""

import pytest

from conftest import GUAVA
from wtpsync.classify import classify
from wtpsync.classpath import build_classpath
from wtpsync.component import assemble_component
from wtpsync.facets import resolve_facets
from wtpsync.loader import parse_snapshot
from wtpsync.model import (
    DeploymentAttribute,
    Facet,
    OriginKind,
    ProjectKind,
    ProjectSpec,
    WbResource,
)
from wtpsync.natures import JAVA_NATURES, resolve_natures
from wtpsync.policy import DEFAULT_POLICY, RUNTIME_ONLY_POLICY
from wtpsync.scopes import ScopeMapper


def _decide(spec: ProjectSpec, policy=DEFAULT_POLICY):
    project = classify(spec)
    return project, policy.decide_all(project, ScopeMapper().map_dependencies(spec))


def _deploy_names(ref: str) -> str:
    return ref.lstrip(":")


def _same_name_artifacts_spec() -> ProjectSpec:
    snapshot = parse_snapshot(
        {
            "projects": [
                {
                    "path": ":shop",
                    "plugins": ["war"],
                    "configurations": {
                        "compile": ["com.a:util:1.0", "com.b:util:1.0", GUAVA]
                    },
                }
            ]
        }
    )
    return snapshot.get(":shop")


class TestComponent:
    """Tests for assemble_component."""

    def test_library_component(self, java_spec: ProjectSpec) -> None:
        project, decided = _decide(java_spec)
        component = assemble_component(project, decided, _deploy_names)
        assert component.deploy_name == "java"
        assert component.resources == (WbResource("src/main/java", "/"),)
        assert component.modules == ()
        assert component.context_path is None

    def test_web_component(self, web_spec: ProjectSpec) -> None:
        project, decided = _decide(web_spec)
        component = assemble_component(project, decided, _deploy_names)
        assert component.deploy_name == "web"
        assert component.context_path == "web"
        assert component.resources == (
            WbResource("src/main/java", "/WEB-INF/classes"),
            WbResource("src/main/webapp", "/"),
        )
        assert [(m.reference, m.deployed_at, m.origin_kind) for m in component.modules] == [
            ("commons-lang3-3.0.jar", "/WEB-INF/lib", OriginKind.LIB),
            ("java", "/WEB-INF/lib", OriginKind.PROJECT),
            ("javax.servlet-api-3.1.0.jar", "/WEB-INF/lib", OriginKind.LIB),
            ("junit-4.11.jar", "/WEB-INF/lib", OriginKind.LIB),
            ("hamcrest-core-1.3.jar", "/WEB-INF/lib", OriginKind.LIB),
        ]

    def test_modules_with_same_file_name_stay_distinct(self) -> None:
        project, decided = _decide(_same_name_artifacts_spec())
        component = assemble_component(project, decided, _deploy_names)
        assert [m.reference for m in component.modules] == [
            "com.a-util-1.0.jar",
            "com.b-util-1.0.jar",
            "guava-18.0.jar",
        ]

    def test_web_component_runtime_only(self, web_spec: ProjectSpec) -> None:
        project, decided = _decide(web_spec, RUNTIME_ONLY_POLICY)
        component = assemble_component(project, decided, _deploy_names)
        assert [m.reference for m in component.modules] == [
            "commons-lang3-3.0.jar",
            "java",
        ]

    def test_project_module_uses_deploy_name(self, web_spec: ProjectSpec) -> None:
        project, decided = _decide(web_spec)
        component = assemble_component(project, decided, lambda ref: "core-lib")
        assert "core-lib" in [m.reference for m in component.modules]

    def test_unrecognized_has_no_component(self) -> None:
        spec = ProjectSpec(path=":docs", name="docs")
        project, decided = _decide(spec)
        assert assemble_component(project, decided, _deploy_names) is None


class TestClasspath:
    """Tests for build_classpath."""

    def test_library_classpath(self, java_spec: ProjectSpec) -> None:
        _, decided = _decide(java_spec)
        entries = {e.entry_id: e.attribute for e in build_classpath(decided, _deploy_names)}
        assert entries == {
            "guava-18.0.jar": DeploymentAttribute.DEPLOYED,
            "javax.servlet-api-3.1.0.jar": DeploymentAttribute.DEPLOYED,
            "junit-4.11.jar": DeploymentAttribute.NONE,
            "hamcrest-core-1.3.jar": DeploymentAttribute.NONE,
        }

    def test_web_classpath_all_excluded(self, web_spec: ProjectSpec) -> None:
        _, decided = _decide(web_spec)
        entries = build_classpath(decided, _deploy_names)
        assert len(entries) == 5
        assert all(e.attribute is DeploymentAttribute.EXCLUDED for e in entries)
        project_entries = [e for e in entries if e.origin_kind is OriginKind.PROJECT]
        assert [e.entry_id for e in project_entries] == ["/java"]

    def test_one_entry_per_dependency(self, java_spec: ProjectSpec) -> None:
        _, decided = _decide(java_spec)
        assert len(build_classpath(decided, _deploy_names)) == len(decided)

    def test_same_file_name_from_two_groups(self) -> None:
        spec = _same_name_artifacts_spec()
        _, decided = _decide(spec)
        entries = [e.entry_id for e in build_classpath(decided, _deploy_names)]
        assert entries == ["com.a-util-1.0.jar", "com.b-util-1.0.jar", "guava-18.0.jar"]


class TestFacets:
    """Tests for resolve_facets."""

    def test_library(self) -> None:
        facets = resolve_facets(ProjectKind.JAVA_LIBRARY)
        assert facets.fixed == {"jst.java"}
        assert facets.installed_ids == {"jst.utility", "jst.java"}

    def test_web(self) -> None:
        facets = resolve_facets(ProjectKind.WEB_APPLICATION)
        assert facets.fixed == {"jst.java", "jst.web"}
        assert facets.installed_ids == {"jst.web", "jst.java"}

    @pytest.mark.parametrize(
        ("compatibility", "expected"), [(None, "1.6"), ("1.8", "1.8")]
    )
    def test_java_facet_version(self, compatibility, expected) -> None:
        facets = resolve_facets(ProjectKind.WEB_APPLICATION, compatibility)
        assert Facet("jst.java", expected) in facets.installed
        assert Facet("jst.web", "2.4") in facets.installed

    def test_unrecognized(self) -> None:
        facets = resolve_facets(None)
        assert facets.fixed == frozenset()
        assert facets.installed == frozenset()


class TestNatures:
    """Tests for resolve_natures."""

    @pytest.mark.parametrize("kind", list(ProjectKind))
    def test_java_kinds(self, kind: ProjectKind) -> None:
        natures = resolve_natures(kind)
        assert natures.natures == JAVA_NATURES
        assert "org.eclipse.jdt.core.javabuilder" in natures.build_commands

    def test_unrecognized(self) -> None:
        assert resolve_natures(None).natures == ()
