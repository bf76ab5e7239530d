"""Tests for the pipeline orchestrator."""

import logging
import time

from glyphshape.engine.config import CharacterConfig
from glyphshape.engine.context import CharacterContext
from glyphshape.engine.pipeline import TOPOLOGY_TAG, Pipeline, create_pipeline
from glyphshape.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry
from glyphshape.models.character import Character


def _noop(ctx: CharacterContext) -> None:
    pass


def _ctx(config: CharacterConfig | None = None) -> CharacterContext:
    char = Character(5, 5, config)
    char.draw(2, 2)
    return CharacterContext(character=char)


def test_pipeline_runs_transforms():
    reg = TransformRegistry()
    results = []

    def t1(ctx: CharacterContext) -> None:
        results.append("t1")

    def t2(ctx: CharacterContext) -> None:
        results.append("t2")

    reg.register(TransformSpec(id="T0.02", layer=Layer.CHARACTER_STRUCTURE, fn=t2, dependencies=["T0.01"]))
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=t1))

    ctx = Pipeline(registry=reg).run(_ctx())

    assert results == ["t1", "t2"]
    assert ctx.completed_transforms == {"T0.01", "T0.02"}
    assert ctx.elapsed_ms >= 0


def test_pipeline_handles_errors(caplog):
    reg = TransformRegistry()
    ran = []

    def fail(ctx: CharacterContext) -> None:
        raise ValueError("test error")

    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=fail))
    reg.register(TransformSpec(
        id="T1.01", layer=Layer.DECOMPOSITION, fn=lambda ctx: ran.append(1), dependencies=["T0.01"],
    ))

    with caplog.at_level(logging.WARNING, logger="glyphshape.engine.pipeline"):
        ctx = Pipeline(registry=reg).run(_ctx())

    assert ctx.errors == {"T0.01": "test error"}
    assert "T0.01" not in ctx.completed_transforms
    assert "T1.01" in ctx.completed_transforms
    assert ran == [1]
    assert "T0.01 FAILED" in caplog.text


def test_requested_subset_pulls_dependencies():
    reg = TransformRegistry()
    ran = []
    for tid, deps in (("T0.01", []), ("T0.02", []), ("T1.01", ["T0.01"])):
        reg.register(TransformSpec(
            id=tid, layer=Layer.CHARACTER_STRUCTURE, fn=lambda ctx, t=tid: ran.append(t), dependencies=deps,
        ))
    Pipeline(registry=reg).run(_ctx(), requested={"T1.01"})
    assert ran == ["T0.01", "T1.01"]


def test_topology_transforms_gated_by_config():
    reg = TransformRegistry()
    ran = []
    reg.register(TransformSpec(
        id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=lambda ctx: ran.append("topo"), tags={TOPOLOGY_TAG},
    ))
    reg.register(TransformSpec(id="T0.02", layer=Layer.CHARACTER_STRUCTURE, fn=lambda ctx: ran.append("other")))

    ctx = Pipeline(registry=reg).run(_ctx(CharacterConfig(enable_topology_analysis=False)))
    assert ran == ["other"]
    assert ctx.completed_transforms == {"T0.02"}

    ran.clear()
    Pipeline(registry=reg).run(_ctx())
    assert ran == ["topo", "other"]


def test_run_layer_only_runs_that_layer():
    reg = TransformRegistry()
    ran = []
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=lambda ctx: ran.append("T0.01")))
    reg.register(TransformSpec(id="T1.01", layer=Layer.DECOMPOSITION, fn=lambda ctx: ran.append("T1.01")))
    ctx = Pipeline(registry=reg).run_layer(_ctx(), Layer.DECOMPOSITION)
    assert ran == ["T1.01"]
    assert ctx.completed_transforms == {"T1.01"}


def test_slow_run_logs_timeout_warning(caplog, monkeypatch):
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T0.01", layer=Layer.CHARACTER_STRUCTURE, fn=_noop))
    ctx = _ctx(CharacterConfig(computation_timeout=1))

    # start, transform start, transform end, finish
    ticks = iter([0.0, 0.0, 0.0, 10.0])
    monkeypatch.setattr(time, "perf_counter", lambda: next(ticks, 10.0))

    with caplog.at_level(logging.WARNING, logger="glyphshape.engine.pipeline"):
        Pipeline(registry=reg).run(ctx)

    assert ctx.elapsed_ms == 10000.0
    assert "over the 1ms limit" in caplog.text


def test_create_pipeline_registers_builtin_transforms():
    create_pipeline()
    create_pipeline()
    reg = get_registry()
    ids = [s.id for s in reg.all()]
    for tid in ("T0.01", "T0.02", "T0.03", "T0.04", "T1.01", "T1.02", "T1.03", "T2.01", "T2.02", "T2.03"):
        assert ids.count(tid) == 1
    assert reg.with_tag(TOPOLOGY_TAG) == {"T0.03"}

    order = [s.id for s in reg.resolve_order()]
    assert order.index("T0.02") < order.index("T0.03")
    assert order.index("T0.01") < order.index("T1.01")
    assert order.index("T1.03") < order.index("T2.01")
    assert order.index("T2.02") < order.index("T2.03")
