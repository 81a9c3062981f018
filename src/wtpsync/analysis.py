"""Project graph analysis: cycle detection and topological ordering."""

from __future__ import annotations

from wtpsync.errors import ConfigurationError, DependencyCycleError
from wtpsync.model import BuildSnapshot


def project_graph(snapshot: BuildSnapshot) -> dict[str, list[str]]:
    """Map each project path to the paths of the sub-projects it depends on.

    Raises :class:`ConfigurationError` if a project refers to a path that is
    not part of the build.
    """
    paths = {spec.path for spec in snapshot.projects}
    graph: dict[str, list[str]] = {}
    for spec in snapshot.projects:
        refs = spec.project_refs
        unknown = [ref for ref in refs if ref not in paths]
        if unknown:
            raise ConfigurationError(
                f"Project {spec.path} depends on unknown project(s): {', '.join(unknown)}"
            )
        graph[spec.path] = refs
    return graph


def find_cycles(graph: dict[str, list[str]]) -> list[list[str]]:
    """Return the dependency cycles in *graph* using Tarjan's algorithm.

    Each returned list is a strongly-connected component of mutually
    reachable project paths.  A project depending on itself is reported as a
    single-element cycle.  The walk keeps its own stack of
    ``(node, next edge)`` frames, so chain depth is not bounded by the
    interpreter's recursion limit.
    """
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    on_stack: set[str] = set()
    stack: list[str] = []
    sccs: list[list[str]] = []
    counter = 0

    for root in graph:
        if root in index:
            continue
        work: list[tuple[str, int]] = [(root, 0)]
        while work:
            v, i = work[-1]
            if i == 0:
                index[v] = lowlink[v] = counter
                counter += 1
                stack.append(v)
                on_stack.add(v)

            deps = graph[v]
            if i < len(deps):
                work[-1] = (v, i + 1)
                w = deps[i]
                if w not in graph:
                    continue
                if w not in index:
                    work.append((w, 0))
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[v])

            if lowlink[v] == index[v]:
                scc: list[str] = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    scc.append(w)
                    if w == v:
                        break
                if len(scc) >= 2 or v in graph[v]:
                    sccs.append(list(reversed(scc)))

    return sccs


def check_acyclic(graph: dict[str, list[str]]) -> None:
    cycles = find_cycles(graph)
    if cycles:
        raise DependencyCycleError(cycles)


def topological_order(graph: dict[str, list[str]]) -> list[str]:
    """Return project paths with every dependency before its dependents.

    Ties are broken by the order projects appear in *graph*, so the result
    is stable for an unchanged build.
    """
    check_acyclic(graph)

    position = {path: i for i, path in enumerate(graph)}
    remaining = {path: len(set(deps)) for path, deps in graph.items()}
    dependents: dict[str, list[str]] = {path: [] for path in graph}
    for path, deps in graph.items():
        for dep in set(deps):
            dependents[dep].append(path)

    ready = sorted((p for p, n in remaining.items() if n == 0), key=position.get)
    order: list[str] = []
    while ready:
        path = ready.pop(0)
        order.append(path)
        for dependent in dependents[path]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                ready.append(dependent)
        ready.sort(key=position.get)
    return order
