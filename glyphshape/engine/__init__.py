"""Glyph shape analysis engine.

Transforms live in ``layer0`` (character structure), ``layer1``
(decomposition) and ``layer2`` (region analysis). Import
:mod:`glyphshape.engine.pipeline` to run them.
"""
