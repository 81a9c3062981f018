"""Exceptions raised while generating descriptors."""

from __future__ import annotations


class WtpSyncError(Exception):
    """Base class for all wtpsync errors."""


class ConfigurationError(WtpSyncError):
    """Invalid build configuration, policy table or config file."""


class SnapshotError(WtpSyncError):
    """The build snapshot could not be read or is malformed."""


class DependencyCycleError(ConfigurationError):
    """The project dependency graph contains at least one cycle."""

    def __init__(self, cycles: list[list[str]]) -> None:
        self.cycles = cycles
        rendered = "; ".join(" -> ".join(c + c[:1]) for c in cycles)
        super().__init__(f"Project dependency cycle: {rendered}")


class UnresolvedDependencyError(WtpSyncError):
    """A dependency of a project could not be resolved."""

    def __init__(self, project: str, dependency: str, reason: str | None = None) -> None:
        self.project = project
        self.dependency = dependency
        self.reason = reason
        message = f"Could not resolve {dependency} for project {project}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UpstreamFailureError(WtpSyncError):
    """A sub-project this project depends on failed to generate."""

    def __init__(self, project: str, upstream: str) -> None:
        self.project = project
        self.upstream = upstream
        super().__init__(
            f"Skipped project {project}: dependency {upstream} failed to generate"
        )
