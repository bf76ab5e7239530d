"""Public entry points handed to recognition and feature-extraction callers.

All functions are synchronous and CPU-bound. A Character must not be shared
between concurrent calls; the CharacterConfig it carries can be.
"""

from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np
from numpy.typing import NDArray

from glyphshape.engine import shape_classifier
from glyphshape.engine.anchors import detect_anchors
from glyphshape.engine.config import CharacterConfig
from glyphshape.engine.context import CharacterContext
from glyphshape.engine.decomposer import decompose
from glyphshape.engine.pipeline import create_pipeline
from glyphshape.engine.skeleton import compute_medial_axis, summarize_topology
from glyphshape.models.character import Character
from glyphshape.models.region import BinaryRegion
from glyphshape.models.shape import Moments, ShapeDescriptor
from glyphshape.models.topology import CharacterTopology
from glyphshape.utils import moments as moment_utils

logger = logging.getLogger(__name__)


def compute_moments(region: BinaryRegion) -> Moments:
    return moment_utils.compute_moments(region.mask)


def compute_hu_invariants(moments: Moments) -> NDArray[np.float64]:
    return moment_utils.hu_invariants(moments)


def compute_shape_descriptor(region: BinaryRegion) -> ShapeDescriptor | None:
    """Shape kind, fill and kind-specific payload; None when there is too little to classify."""
    return shape_classifier.compute_shape_descriptor(region)


def analyze_character_topology(char: Character) -> CharacterTopology:
    """Recompute anchors, medial axis and topology summary from a clean slate.

    Results are also stored on the character. An empty character yields an
    empty result.
    """
    char.clear_analysis_results()
    if char.is_empty:
        return CharacterTopology()

    anchors = detect_anchors(char)
    branches = compute_medial_axis(char)
    char.topology = summarize_topology(char)
    return CharacterTopology(
        anchors=list(anchors),
        medial_axis=list(char.medial_axis),
        branches=list(branches),
        summary=char.topology,
    )


def decompose_character(char: Character) -> list[BinaryRegion]:
    """Partition the character's foreground into fragments, in split order."""
    return decompose(char)


def decompose_characters(
    chars: list[Character],
    config: CharacterConfig | None = None,
) -> list[list[BinaryRegion]]:
    """Decompose independent characters; output order follows input order.

    Uses a thread pool when ``enable_parallel_processing`` is set. The switch is
    read from ``config`` when given, otherwise from the first character.
    """
    if len(chars) < 2:
        return [decompose(c) for c in chars]
    config = config or chars[0].config
    if not config.enable_parallel_processing:
        return [decompose(c) for c in chars]

    with ThreadPoolExecutor() as executor:
        return list(executor.map(decompose, chars))


def comprehensive_analysis(char: Character) -> CharacterContext:
    """Run every registered transform: structure, decomposition and fragment analysis.

    Failing transforms are recorded in ``ctx.errors`` and do not stop the run.
    """
    char.clear_analysis_results()
    ctx = CharacterContext(character=char)
    if char.is_empty:
        return ctx
    return create_pipeline().run(ctx)


def analysis_summary(ctx: CharacterContext) -> dict[str, Any]:
    """Plain-dict digest of a comprehensive analysis for downstream consumers."""
    char = ctx.character
    anchor_kinds: dict[str, int] = {}
    for anchor in char.anchors:
        anchor_kinds[anchor.kind.value] = anchor_kinds.get(anchor.kind.value, 0) + 1

    summary: dict[str, Any] = {
        "size": {"width": char.width, "height": char.height},
        "pixel_count": char.pixel_count,
        "bounding_box": char.bounding_box(),
        "anchor_count": len(char.anchors),
        "anchor_kinds": anchor_kinds,
        "region_count": len(ctx.regions),
    }
    if char.hu is not None:
        summary["hu"] = char.hu.tolist()
    if char.topology is not None:
        summary["topology"] = {
            "components": char.topology.components,
            "holes": char.topology.holes,
            "euler_number": char.topology.euler_number,
            "branch_count": char.topology.branch_count,
            "medial_axis_length": char.topology.medial_axis_length,
        }
    if ctx.classification is not None:
        summary["classification"] = dataclasses.asdict(ctx.classification)
    if ctx.metrics is not None:
        summary["metrics"] = dataclasses.asdict(ctx.metrics)
    if ctx.errors:
        summary["errors"] = dict(ctx.errors)
    return summary
