"""Tests for the transform registry."""

import pytest

from glyphshape.engine.context import CharacterContext
from glyphshape.engine.registry import Layer, TransformRegistry, TransformSpec


def _noop(ctx: CharacterContext) -> None:
    pass


def test_register_and_get():
    reg = TransformRegistry()
    spec = TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop)
    reg.register(spec)
    assert reg.get("T0.01") is spec
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop))
    with pytest.raises(ValueError):
        reg.register(TransformSpec(id="T0.01", layer=Layer.DECOMPOSITION, fn=_noop))


def test_get_layer():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T1.02", layer=Layer.DECOMPOSITION, fn=_noop))
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop))
    reg.register(TransformSpec(id="T1.01", layer=Layer.DECOMPOSITION, fn=_noop))
    layer1 = reg.get_layer(Layer.DECOMPOSITION)
    assert [s.id for s in layer1] == ["T1.01", "T1.02"]


def test_with_tag():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop, tags={"topology"}))
    reg.register(TransformSpec(id="T0.02", layer=Layer.CHARACTER_STRUCTURE, fn=_noop))
    assert reg.with_tag("topology") == {"T0.01"}
    assert reg.with_tag("missing") == set()


def test_resolve_order_with_deps():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T2.01", layer=Layer.REGION_ANALYSIS, fn=_noop, dependencies=["T1.01"]))
    reg.register(TransformSpec(id="T1.01", layer=Layer.DECOMPOSITION, fn=_noop, dependencies=["T0.02"]))
    reg.register(TransformSpec(id="T0.02", layer=Layer.CHARACTER_STRUCTURE, fn=_noop))
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop))

    ids = [s.id for s in reg.resolve_order({"T2.01"})]
    assert ids == ["T0.02", "T1.01", "T2.01"]


def test_resolve_order_all():
    reg = TransformRegistry()
    for i in range(5):
        reg.register(TransformSpec(id=f"T0.0{5 - i}", layer=Layer.CHARACTER_STRUCTURE, fn=_noop))
    order = reg.resolve_order(None)
    assert [s.id for s in order] == ["T0.01", "T0.02", "T0.03", "T0.04", "T0.05"]


def test_resolve_order_ignores_unknown_ids():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop, dependencies=["T9.99"]))
    assert [s.id for s in reg.resolve_order({"T0.01", "T5.00"})] == ["T0.01"]


def test_circular_dependency_detected():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop, dependencies=["T0.02"]))
    reg.register(TransformSpec(id="T0.02", layer=Layer.CHARACTER_STRUCTURE, fn=_noop, dependencies=["T0.01"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()
