"""T2.01: Region Descriptors. ★★★

Each fragment gets its own moments, Hu vector, moment-derived metrics and a
shape descriptor (None for fragments too small to classify).
"""

from __future__ import annotations

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, transform
from glyphshape.engine.shape_classifier import compute_shape_descriptor
from glyphshape.models.analysis import RegionAnalysis
from glyphshape.models.region import BinaryRegion
from glyphshape.utils.moments import (
    circularity,
    compute_moments,
    ellipse_axis_ratio,
    hu_invariants,
    linearity,
    rectangularity,
)


def analyze_region(index: int, region: BinaryRegion) -> RegionAnalysis:
    moments = compute_moments(region.mask)
    hu = hu_invariants(moments)
    return RegionAnalysis(
        index=index,
        pixel_count=region.pixel_count,
        moments=moments,
        hu=[float(v) for v in hu],
        circularity=circularity(hu),
        linearity=linearity(hu),
        rectangularity=rectangularity(hu),
        ellipse_ratio=ellipse_axis_ratio(moments),
        descriptor=compute_shape_descriptor(region),
    )


@transform(
    id="T2.01",
    layer=Layer.REGION_ANALYSIS,
    dependencies=["T1.03"],
    description="Moments, Hu metrics and shape descriptor per fragment",
)
def region_descriptors(ctx: CharacterContext) -> None:
    ctx.region_analyses = [analyze_region(i, r) for i, r in enumerate(ctx.regions)]
