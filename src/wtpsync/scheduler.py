"""Evaluate per-project work in dependency order, optionally in parallel."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import TypeVar

from wtpsync.analysis import topological_order
from wtpsync.errors import UpstreamFailureError, WtpSyncError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# task(path, results of the projects *path* depends on) -> result
Task = Callable[[str, Mapping[str, T]], T]


def run_in_dependency_order(
    graph: dict[str, list[str]],
    task: Task,
    *,
    max_workers: int = 1,
) -> tuple[dict[str, T], dict[str, WtpSyncError]]:
    """Run *task* once per project, each after all of its dependencies.

    A project whose task raises :class:`WtpSyncError` is recorded as failed,
    and every project depending on it (directly or not) fails with
    :class:`UpstreamFailureError` without running.  Other exceptions
    propagate.

    Both returned dicts are keyed in topological order regardless of
    *max_workers*.
    """
    order = topological_order(graph)
    if max_workers <= 1:
        results, failures = _run_serial(graph, order, task)
    else:
        results, failures = _run_parallel(graph, order, task, max_workers)

    return (
        {p: results[p] for p in order if p in results},
        {p: failures[p] for p in order if p in failures},
    )


def _failed_upstream(
    path: str, graph: dict[str, list[str]], failures: Mapping[str, WtpSyncError]
) -> UpstreamFailureError | None:
    for dep in graph[path]:
        if dep in failures:
            return UpstreamFailureError(path, dep)
    return None


def _run_serial(graph, order, task):
    results: dict = {}
    failures: dict[str, WtpSyncError] = {}
    for path in order:
        upstream_error = _failed_upstream(path, graph, failures)
        if upstream_error is not None:
            failures[path] = upstream_error
            continue
        try:
            results[path] = task(path, {dep: results[dep] for dep in graph[path]})
        except WtpSyncError as e:
            failures[path] = e
    return results, failures


def _run_parallel(graph, order, task, max_workers):
    results: dict = {}
    failures: dict[str, WtpSyncError] = {}
    remaining = {path: len(set(graph[path])) for path in order}
    dependents: dict[str, list[str]] = {path: [] for path in order}
    for path in order:
        for dep in set(graph[path]):
            dependents[dep].append(path)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        running: dict[Future, str] = {}

        def _settle(path: str) -> None:
            # Release dependents of a finished project; skip those whose
            # upstream failed without submitting them.
            pending = [path]
            while pending:
                done_path = pending.pop()
                for dependent in dependents[done_path]:
                    remaining[dependent] -= 1
                    if remaining[dependent]:
                        continue
                    upstream_error = _failed_upstream(dependent, graph, failures)
                    if upstream_error is not None:
                        failures[dependent] = upstream_error
                        pending.append(dependent)
                    else:
                        _submit(dependent)

        def _submit(path: str) -> None:
            upstream = {dep: results[dep] for dep in graph[path]}
            running[pool.submit(task, path, upstream)] = path

        for path in order:
            if remaining[path] == 0:
                _submit(path)

        while running:
            done, _ = wait(running, return_when=FIRST_COMPLETED)
            for future in done:
                path = running.pop(future)
                try:
                    results[path] = future.result()
                except WtpSyncError as e:
                    failures[path] = e
                _settle(path)

    logger.debug(
        "Parallel run finished: %d generated, %d failed", len(results), len(failures)
    )
    return results, failures
