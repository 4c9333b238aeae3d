#!/usr/bin/env python3
"""Decompose a small hand-made curve network with logging + sanity checks."""

from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path

# ---------------------------------------------------------------------
# Import setup (dev fallback)
# ---------------------------------------------------------------------
# Preferred: install package via `pip install -e .`
# Fallback: add ./core to sys.path for local dev runs.
CORE_DIR = Path(__file__).resolve().parent.parent / "core"
if str(CORE_DIR) not in sys.path:
    sys.path.insert(0, str(CORE_DIR))

from shapely.geometry import LineString  # noqa: E402
from curvenet.builders import graph_from_lines  # noqa: E402
from curvenet.pipeline import PipelineConfig, decompose_graph  # noqa: E402
from curvenet.schemas import curves_to_network  # noqa: E402


# ---------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG,
    format="%(levelname)s: %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@contextmanager
def log_step(name: str):
    """Log step entry/exit + duration."""
    logger.info("→ %s", name)
    start = time.time()
    try:
        yield
    finally:
        logger.info("← %s (%.2fs)", name, time.time() - start)


def sample_lines() -> list[LineString]:
    """A ring, a cross through its centre and a loose stroke."""
    return [
        LineString([(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)]),
        LineString([(2, -2), (2, 0), (2, 2), (2, 4), (2, 6)]),
        LineString([(-2, 2), (0, 2), (2, 2), (4, 2), (6, 2)]),
        LineString([(8, 0), (9, 1), (10, 0.5)]),
    ]


def main() -> int:
    with log_step("Build graph"):
        graph = graph_from_lines(sample_lines(), snap_tolerance=1e-6)
    junctions = [v for v in graph.vertex_indices() if graph.is_junction_vertex(v)]
    logger.info("Graph: %d vertices, %d edges, %d junctions",
                graph.vertex_count, graph.edge_count, len(junctions))

    with log_step("Decompose"):
        curves, resolved = decompose_graph(graph, PipelineConfig(stub_fraction=0.95))

    # Sanity checks
    leftover = [v for v in graph.vertex_indices() if graph.valence(v) > 2]
    if leftover:
        logger.error("Vertices still above valence 2: %s", leftover)
        return 1
    if curves.edge_count != graph.edge_count:
        logger.error("Curves cover %d edges, graph has %d", curves.edge_count, graph.edge_count)
        return 1

    network = curves_to_network(curves, junctions_resolved=resolved)
    for record in network.loops + network.paths:
        logger.info("  %s %-4s points=%d length=%.2f closed=%s", record.id, record.kind,
                    len(record.coordinates), record.length, record.closed)

    print(network.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
