"""T2.02: Character Metrics. ★★

Averages the fragment metrics and adds glyph-level complexity measures:
anchor density per foreground pixel and a medial-axis complexity score
(points + 2 * branches + length) / bounding-box area.
"""

from __future__ import annotations

from collections import Counter

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, transform
from glyphshape.models.analysis import CharacterMetrics
from glyphshape.models.character import Character


def medial_axis_complexity(char: Character) -> float:
    if not char.medial_axis:
        return 0.0
    area = char.bbox_width * char.bbox_height
    if area == 0:
        return 0.0
    length = sum(b.length for b in char.branches)
    return (len(char.medial_axis) + 2 * len(char.branches) + length) / area


@transform(
    id="T2.02",
    layer=Layer.REGION_ANALYSIS,
    dependencies=["T2.01", "T0.01", "T0.02"],
    description="Aggregate fragment metrics into character metrics",
)
def character_metrics(ctx: CharacterContext) -> None:
    analyses = ctx.region_analyses
    char = ctx.character
    metrics = CharacterMetrics(
        medial_axis_complexity=medial_axis_complexity(char),
        skeleton_branch_count=len(char.branches),
    )

    if analyses:
        n = len(analyses)
        metrics.average_circularity = sum(a.circularity for a in analyses) / n
        metrics.average_linearity = sum(a.linearity for a in analyses) / n
        metrics.average_rectangularity = sum(a.rectangularity for a in analyses) / n
        metrics.total_area = float(sum(a.moments.m00 for a in analyses))
        metrics.region_count = n
        kinds = Counter(a.descriptor.kind.value for a in analyses if a.descriptor is not None)
        metrics.shape_distribution = dict(sorted(kinds.items()))

    if metrics.total_area > 0:
        metrics.anchor_density = len(char.anchors) / metrics.total_area

    ctx.metrics = metrics
