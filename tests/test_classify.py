"""Tests for project classification."""

import logging

from wtpsync.classify import canonical_source_roots, classify, detect_kind
from wtpsync.model import ProjectKind, ProjectSpec


class TestDetectKind:
    """Tests for detect_kind."""

    def test_war_is_web_application(self) -> None:
        assert detect_kind(["war", "eclipse-wtp"]) is ProjectKind.WEB_APPLICATION

    def test_war_wins_over_java(self) -> None:
        assert detect_kind(["java", "war"]) is ProjectKind.WEB_APPLICATION

    def test_java_is_library(self) -> None:
        assert detect_kind(["java"]) is ProjectKind.JAVA_LIBRARY
        assert detect_kind(["java-library"]) is ProjectKind.JAVA_LIBRARY

    def test_unrecognized(self) -> None:
        assert detect_kind(["eclipse-wtp"]) is None
        assert detect_kind([]) is None


class TestSourceRoots:
    """Tests for canonical_source_roots."""

    def test_library_roots(self) -> None:
        assert canonical_source_roots(ProjectKind.JAVA_LIBRARY) == ("src/main/java",)

    def test_web_roots(self) -> None:
        assert canonical_source_roots(ProjectKind.WEB_APPLICATION) == (
            "src/main/java",
            "src/main/webapp",
        )

    def test_relocated_web_app_dir_keeps_count(self) -> None:
        roots = canonical_source_roots(
            ProjectKind.WEB_APPLICATION, web_app_dir="web"
        )
        assert roots == ("src/main/java", "web")

    def test_unrecognized_has_no_roots(self) -> None:
        assert canonical_source_roots(None) == ()


class TestClassify:
    """Tests for classify."""

    def test_deploy_name_defaults_to_name(self, web_spec: ProjectSpec) -> None:
        project = classify(web_spec)
        assert project.deploy_name == "web"
        assert project.kind is ProjectKind.WEB_APPLICATION

    def test_deploy_name_override(self) -> None:
        spec = ProjectSpec(path=":web", name="web", plugins=("war",), deploy_name="shop")
        assert classify(spec).deploy_name == "shop"

    def test_unrecognized_is_reported(self, caplog) -> None:
        spec = ProjectSpec(path=":docs", name="docs", plugins=("base",))
        with caplog.at_level(logging.INFO, logger="wtpsync"):
            project = classify(spec)
        assert project.kind is None
        assert project.source_roots == ()
        assert ":docs" in caplog.text
