"""T2.03: Character Classification. ★★

Threshold flags on the averaged metrics, a complexity band, the topology
type (when the topology summary ran) and anchor-count flags.
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, transform
from glyphshape.models.analysis import CharacterClassification
from glyphshape.models.topology import AnchorKind, TopologySummary

SIMPLE_COMPLEXITY = 0.1
MODERATE_COMPLEXITY = 0.3
MULTIPLE_JUNCTIONS = 2  # strictly more than this
MANY_CORNERS = 4


def complexity_level(score: float) -> str:
    if score < SIMPLE_COMPLEXITY:
        return "simple"
    if score < MODERATE_COMPLEXITY:
        return "moderate"
    return "complex"


def topology_type(summary: TopologySummary | None) -> str | None:
    if summary is None:
        return None
    if summary.components > 1:
        return "disconnected"
    if summary.holes == 0:
        return "solid"
    if summary.holes == 1:
        return "single_hole"
    return "multiple_holes"


@transform(
    id="T2.03",
    layer=Layer.REGION_ANALYSIS,
    dependencies=["T2.02"],
    description="Classify the character from aggregated metrics and topology",
)
def character_classification(ctx: CharacterContext) -> None:
    metrics = ctx.metrics
    if metrics is None:
        return

    config = ctx.config
    char = ctx.character
    ctx.classification = CharacterClassification(
        is_circular=metrics.average_circularity > config.circularity_threshold,
        is_linear=metrics.average_linearity > config.linearity_threshold,
        is_rectangular=metrics.average_rectangularity > config.rectangularity_threshold,
        complexity_level=complexity_level(metrics.medial_axis_complexity),
        topology_type=topology_type(char.topology),
        has_multiple_junctions=len(char.anchors_by_kind(AnchorKind.JUNCTION)) > MULTIPLE_JUNCTIONS,
        has_many_corners=len(char.anchors_by_kind(AnchorKind.CORNER)) > MANY_CORNERS,
        significant_anchors=sum(
            1 for a in char.anchors if a.strength >= config.anchor_detection_threshold
        ),
    )
