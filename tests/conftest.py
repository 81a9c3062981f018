"""Pytest fixtures for wtpsync tests."""

from pathlib import Path

import pytest

from wtpsync.loader import parse_snapshot
from wtpsync.model import BuildSnapshot, ProjectSpec

GUAVA = "com.google.guava:guava:18.0"
SERVLET_API = "javax.servlet:javax.servlet-api:3.1.0"
COMMONS_LANG3 = "org.apache.commons:commons-lang3:3.0"
JUNIT = "junit:junit:4.11"
HAMCREST = "org.hamcrest:hamcrest-core:1.3"


def java_project_data() -> dict:
    return {
        "path": ":java",
        "plugins": ["java", "eclipse-wtp"],
        "sourceCompatibility": "1.6",
        "configurations": {
            "compile": [{"id": GUAVA}],
            "providedCompile": [{"id": SERVLET_API}],
            "testCompile": [{"id": JUNIT}, {"id": HAMCREST, "transitive": True}],
        },
    }


def web_project_data() -> dict:
    return {
        "path": ":web",
        "plugins": ["war", "eclipse-wtp"],
        "sourceCompatibility": "1.6",
        "configurations": {
            "compile": [{"id": COMMONS_LANG3}, {"project": ":java"}],
            "providedCompile": [{"id": SERVLET_API}],
            "testCompile": [{"id": JUNIT}, {"id": HAMCREST, "transitive": True}],
        },
    }


@pytest.fixture
def snapshot() -> BuildSnapshot:
    """A web project depending on a Java library project."""
    return parse_snapshot({"projects": [web_project_data(), java_project_data()]})


@pytest.fixture
def java_spec(snapshot: BuildSnapshot) -> ProjectSpec:
    return snapshot.get(":java")


@pytest.fixture
def web_spec(snapshot: BuildSnapshot) -> ProjectSpec:
    return snapshot.get(":web")


SNAPSHOT_YAML = f"""\
projects:
  - path: ":web"
    plugins: [war, eclipse-wtp]
    sourceCompatibility: "1.6"
    configurations:
      compile:
        - {COMMONS_LANG3}
        - {{project: ":java"}}
      providedCompile: ["{SERVLET_API}"]
      testCompile:
        - {JUNIT}
        - {{id: "{HAMCREST}", transitive: true}}
  - path: ":java"
    plugins: [java, eclipse-wtp]
    sourceCompatibility: "1.6"
    configurations:
      compile: ["{GUAVA}"]
      providedCompile: ["{SERVLET_API}"]
      testCompile:
        - {JUNIT}
        - {{id: "{HAMCREST}", transitive: true}}
"""


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    """The same build as ``snapshot``, written as YAML."""
    path = tmp_path / "build-snapshot.yaml"
    path.write_text(SNAPSHOT_YAML)
    return path
