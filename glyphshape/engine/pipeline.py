"""Pipeline orchestrator: runs character transforms in dependency order with config gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, TransformRegistry, get_registry

logger = logging.getLogger(__name__)

LAYER_PACKAGES = ("layer0", "layer1", "layer2")

# Transforms skipped when topology analysis is disabled
TOPOLOGY_TAG = "topology"


def register_transforms() -> None:
    """Import every layer module so the @transform decorators fire. Safe to call repeatedly."""
    for layer_name in LAYER_PACKAGES:
        package_name = f"glyphshape.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


class Pipeline:
    """Runs the registered transforms over one character."""

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: CharacterContext, requested: set[str] | None = None) -> CharacterContext:
        """Run the requested transforms (all by default) plus their dependencies."""
        start = time.perf_counter()

        skip_ids = self._gate(ctx)
        wanted = {s.id for s in self.registry.all()} if requested is None else set(requested)
        ordered = self.registry.resolve_order(wanted - skip_ids)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        ctx.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            ctx.elapsed_ms,
        )
        if ctx.elapsed_ms > ctx.config.computation_timeout:
            logger.warning(
                "Analysis took %.0fms, over the %dms limit",
                ctx.elapsed_ms,
                ctx.config.computation_timeout,
            )
        return ctx

    def run_layer(self, ctx: CharacterContext, layer: Layer) -> CharacterContext:
        """Run only transforms in a specific layer, ignoring dependencies."""
        skip_ids = self._gate(ctx)
        for spec in self.registry.get_layer(layer):
            if spec.id in skip_ids:
                continue
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx

    def _gate(self, ctx: CharacterContext) -> set[str]:
        """Transforms switched off by the character's configuration."""
        skip: set[str] = set()
        if not ctx.config.enable_topology_analysis:
            skip |= self.registry.with_tag(TOPOLOGY_TAG)
        return skip


def create_pipeline(registry: TransformRegistry | None = None) -> Pipeline:
    """Factory that makes sure every built-in transform is registered."""
    register_transforms()
    return Pipeline(registry=registry)
