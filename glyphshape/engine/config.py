"""Character analysis configuration: thresholds for anchors, skeleton and decomposition."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CharacterConfig(BaseModel):
    """Immutable, validated once at construction. Safe to share across threads."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Anchor detection
    anchor_detection_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    min_anchor_distance: float = Field(default=3.0, ge=0.0)  # pixels
    curvature_threshold: float = Field(default=0.5, ge=0.0)  # radians

    # Medial axis
    medial_axis_epsilon: float = Field(default=0.1, gt=0.0)
    skeleton_pruning_threshold: float = Field(default=5.0, ge=0.0)  # polyline length

    # Region decomposition
    min_region_size: int = Field(default=4, gt=0)
    connectivity_type: int = 1  # 0 = 4-connectivity, 1 = 8-connectivity

    # Analysis switches
    enable_stroke_analysis: bool = True
    enable_topology_analysis: bool = True
    enable_junction_detection: bool = True

    # Character classification
    circularity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    linearity_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
    rectangularity_threshold: float = Field(default=0.8, ge=0.0, le=1.0)

    # Performance
    enable_parallel_processing: bool = True
    max_regions: int = Field(default=100, gt=0)
    computation_timeout: int = Field(default=5000, gt=0)  # ms, advisory

    @field_validator("connectivity_type")
    @classmethod
    def _check_connectivity(cls, v: int) -> int:
        if v not in (0, 1):
            raise ValueError("connectivity_type must be 0 (4-connected) or 1 (8-connected)")
        return v

    @property
    def foreground_connectivity(self) -> int:
        """Neighbourhood size for foreground components: 4 or 8."""
        return 8 if self.connectivity_type == 1 else 4
