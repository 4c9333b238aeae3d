"""Graph repair and curve extraction pipeline."""

from typing import FrozenSet, Literal, Optional, Set, Tuple
from pydantic import BaseModel, Field
import logging
import time

from .graph import CurveGraph
from .curves import Curves
from .extract import extract_curves
from .junctions import disconnect_junctions
from .smoothing import smooth_vertices
from .valence import classify_vertices

logger = logging.getLogger(__name__)


class IsolatedVertexError(ValueError):
    """Graph has vertices without edges and the pipeline was told to reject them."""


class PipelineConfig(BaseModel):
    """Options for decompose_graph."""
    resolve_junctions: bool = True
    stub_fraction: float = Field(0.99, ge=0.0, le=1.0)
    smooth_iterations: int = Field(0, ge=0)
    smooth_alpha: float = 0.5
    isolated_vertices: Literal["ignore", "reject"] = "ignore"


def check_isolated_vertices(
    graph: CurveGraph,
    policy: str,
    stage: str,
    known: FrozenSet[int] = frozenset()
) -> Set[int]:
    """
    Apply the isolated-vertex policy to graph.

    Raises IsolatedVertexError under the "reject" policy, otherwise warns.
    Vertices in known were already reported and are skipped.

    Returns:
        All isolated vertex ids of graph
    """
    all_isolated = classify_vertices(graph).isolated
    isolated = all_isolated - known
    if not isolated:
        return all_isolated
    if policy == "reject":
        raise IsolatedVertexError(
            f"Graph has {len(isolated)} isolated vertices {stage}: {sorted(isolated)[:10]}"
        )
    logger.warning("decompose_graph: ignoring %d isolated vertices %s", len(isolated), stage)
    return all_isolated


def decompose_graph(
    graph: CurveGraph,
    config: Optional[PipelineConfig] = None
) -> Tuple[Curves, int]:
    """
    Repair junctions in graph and split it into loops and paths.

    Process:
    1. Check for isolated vertices (ignored or rejected per config)
    2. Optionally disconnect junctions, leaving only valence 1 and 2 vertices,
       then check again: a junction whose edges all point the same way ends
       up with no edges at all
    3. Optionally smooth valence-2 vertices
    4. Extract curves

    The graph is modified in place by steps 2 and 3; pass graph.copy() to
    keep the original.

    Args:
        graph: Graph to decompose
        config: Pipeline options, defaults to PipelineConfig()

    Returns:
        Tuple of (curves, number of junctions resolved)
    """
    if config is None:
        config = PipelineConfig()

    start_time = time.time()
    logger.info(f"decompose_graph: {graph.vertex_count} vertices, {graph.edge_count} edges")

    isolated = check_isolated_vertices(graph, config.isolated_vertices, "in input")

    junctions_resolved = 0
    if config.resolve_junctions:
        junctions_resolved = disconnect_junctions(graph, stub_fraction=config.stub_fraction)
        check_isolated_vertices(graph, config.isolated_vertices,
                                "after junction resolution", known=frozenset(isolated))

    if config.smooth_iterations > 0:
        smooth_vertices(graph, alpha=config.smooth_alpha, iterations=config.smooth_iterations)

    curves = extract_curves(graph)

    elapsed = time.time() - start_time
    logger.info("decompose_graph: %d loops, %d paths, %d junctions resolved in %.3fs",
                len(curves.loops), len(curves.paths), junctions_resolved, elapsed)
    return curves, junctions_resolved
