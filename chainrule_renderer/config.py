#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
import os
from dataclasses import dataclass, field, replace

from .color import WHITE, Color, parse_hex_color, rgba

# Reference canvas the constants below were tuned for
REFERENCE_WIDTH = 900
REFERENCE_HEIGHT = 700


@dataclass(frozen=True)
class Palette:
    """Colors of every scene element."""
    background: Color = parse_hex_color('#1a1a2e')
    grid: Color = rgba(74, 85, 104, 0.3)
    axis_x: Color = parse_hex_color('#e94560')
    axis_y: Color = parse_hex_color('#4ecca3')
    axis_z: Color = parse_hex_color('#00d9ff')
    surface: Color = rgba(78, 204, 163)
    tangent_fill: Color = rgba(255, 230, 109, 0.3)
    tangent_stroke: Color = parse_hex_color('#ffe66d')
    curve: Color = parse_hex_color('#ffe66d')
    partial: Color = parse_hex_color('#ff9d76')
    velocity: Color = parse_hex_color('#ffe66d')
    total_derivative: Color = parse_hex_color('#00d9ff')
    point: Color = parse_hex_color('#e94560')
    point_outline: Color = WHITE
    domain_point: Color = rgba(233, 69, 96, 0.7)
    drop_line: Color = rgba(233, 69, 96, 0.5)
    label: Color = parse_hex_color('#e0e0f0')


@dataclass
class RenderConfig:
    """Configuration for the rendering pipeline and its backends."""
    # Viewport / projection
    width: int = REFERENCE_WIDTH
    height: int = REFERENCE_HEIGHT
    focal_length: float = 600.0

    # Camera
    initial_yaw: float = 0.8
    initial_pitch: float = 0.3
    initial_distance: float = 8.0
    min_distance: float = 3.0
    max_distance: float = 15.0
    rotate_sensitivity: float = 0.01
    zoom_sensitivity: float = 0.01

    # Surface mesh
    mesh_resolution: int = 25
    domain_extent: float = 2.0
    surface_fill_alpha: float = 0.6
    surface_stroke_alpha: float = 0.3
    surface_stroke_width: float = 0.5

    # Overlays
    grid_extent: float = 2.0
    grid_step: float = 0.5
    axis_length: float = 3.0
    tangent_plane_size: float = 0.5
    curve_t_range: float = 2.0
    curve_steps: int = 100
    vector_scale: float = 0.5
    arrow_head_length: float = 10.0
    arrow_head_angle: float = math.pi / 6
    point_radius: float = 8.0
    domain_point_radius: float = 6.0
    drop_line_dash: tuple = (5.0, 5.0)

    # Picking
    pick_step: float = 0.1
    pick_radius: float = 30.0

    # Terminal backend
    use_color: bool = True
    use_braille: bool = True

    palette: Palette = field(default_factory=Palette)

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ValueError for settings the pipeline cannot work with."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be positive, got {self.width}x{self.height}")
        if self.focal_length <= 0:
            raise ValueError(f"focal_length must be positive, got {self.focal_length}")
        if self.mesh_resolution < 1:
            raise ValueError(f"mesh_resolution must be >= 1, got {self.mesh_resolution}")
        if self.min_distance <= 0 or self.max_distance < self.min_distance:
            raise ValueError(
                f"invalid distance band [{self.min_distance}, {self.max_distance}]")
        if self.curve_steps < 1:
            raise ValueError(f"curve_steps must be >= 1, got {self.curve_steps}")
        if self.grid_step <= 0 or self.pick_step <= 0:
            raise ValueError("grid_step and pick_step must be positive")

    def for_viewport(self, width: int, height: int) -> 'RenderConfig':
        """
        Copy of this config for a surface of a different size.

        Pixel-bound constants (focal length, arrowhead length, pick radius,
        marker radii) scale with the height ratio so the scene keeps its
        framing.
        """
        ratio = height / self.height
        return replace(
            self,
            width=width,
            height=height,
            focal_length=self.focal_length * ratio,
            arrow_head_length=self.arrow_head_length * ratio,
            pick_radius=self.pick_radius * ratio,
            point_radius=self.point_radius * ratio,
            domain_point_radius=self.domain_point_radius * ratio,
            drop_line_dash=tuple(d * ratio for d in self.drop_line_dash),
        )

    @classmethod
    def detect_terminal(cls, environ=None) -> 'RenderConfig':
        """
        Autodetect terminal capabilities and return a default config.
        Checks TERM and LANG environment variables.
        """
        env = os.environ if environ is None else environ
        term = env.get('TERM', '').lower()
        lang = env.get('LANG', '').lower()

        is_dumb = term in ('dumb', 'unknown')
        is_linux_console = term == 'linux'
        supports_utf8 = 'utf-8' in lang or 'utf8' in lang

        return cls(
            use_color=not is_dumb,
            # Linux console font often lacks braille
            use_braille=supports_utf8 and not is_linux_console,
        )
