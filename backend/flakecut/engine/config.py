"""Engine configuration: wedge geometry, symmetry and authoring tolerances."""

from __future__ import annotations

from dataclasses import dataclass, field

from flakecut.utils.geometry import CENTER_X, CENTER_Y, WEDGE_RADIUS, WEDGE_SPAN_DEG


@dataclass
class SnowflakeConfig:
    """Controls the symmetry group and the stroke post-processing."""

    # Rotation center and wedge
    center_x: float = CENTER_X
    center_y: float = CENTER_Y
    wedge_radius: float = WEDGE_RADIUS
    wedge_span_deg: float = WEDGE_SPAN_DEG

    # Six-fold rotation; each step is twice the wedge span so wedge + mirror tile
    rotation_angles: tuple[float, ...] = field(
        default_factory=lambda: (0.0, 60.0, 120.0, 180.0, 240.0, 300.0)
    )

    # RDP simplification epsilon (drawing units)
    rdp_epsilon: float = 2.0

    # Endpoint snapping radius (strict: distance < threshold)
    snap_threshold: float = 20.0

    # Decimal digits for baked coordinates
    precision: int = 2

    # Default stroke width for new strokes
    stroke_width: float = 2.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.center_x, self.center_y)

    @property
    def mirror_axis_x(self) -> float:
        """The wedge's 0° edge is the vertical line through the center."""
        return self.center_x
