#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/renderer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math
from dataclasses import dataclass
from functools import lru_cache

from .camera import CameraState
from .chain_rule import chain_rule_values, curve_point
from .commands import execute
from .config import RenderConfig
from .mesh import SurfaceMesh
from .projection import Projection
from .scene import Scene, Style
from .surfaces import DEFAULT_SURFACE, get_surface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameState:
    """Everything one frame depends on besides the RenderConfig."""
    camera: CameraState = CameraState()
    surface_key: str = DEFAULT_SURFACE
    point_x: float = 0.0
    point_y: float = 0.0
    t_param: float = math.pi / 4
    direction_angle: float = math.pi / 2
    magnitude: float = 1.0
    show_grid: bool = True
    show_curve: bool = True
    show_tangent_plane: bool = True
    show_vectors: bool = True


@lru_cache(maxsize=16)
def surface_triangles(surface_key: str, resolution: int, extent: float):
    """Triangles of a built-in surface. Surfaces are immutable, so cached."""
    field = get_surface(surface_key)
    return tuple(SurfaceMesh.from_field(field, resolution, extent).triangles())


def _grid_ticks(extent, step):
    count = int(round(2 * extent / step))
    return [-extent + k * step for k in range(count + 1)]


class Renderer:
    """
    Stateless scene renderer.

    render(state) turns a frozen FrameState into an ordered list of draw
    commands; draw(state, surface) additionally issues them to a drawing
    surface.  Nothing is carried over between frames.

    Draw order (back to front, as layered by the chain-rule view):
      1. clear
      2. xy-plane grid
      3. axes
      4. depth-sorted, flat-shaded surface
      5. tangent plane
      6. parametric curve
      7. derivative vectors
      8. evaluation point
      9. surface label
    """

    def __init__(self, config: RenderConfig = None):
        self.config = config if config is not None else RenderConfig()

    def projection(self, camera: CameraState) -> Projection:
        cfg = self.config
        return Projection.for_viewport(camera, cfg.width, cfg.height, cfg.focal_length)

    def resolve_surface(self, key):
        field = get_surface(key)
        if field is None:
            logger.warning("unknown surface %r in frame state, drawing %r",
                           key, DEFAULT_SURFACE)
            return DEFAULT_SURFACE, get_surface(DEFAULT_SURFACE)
        return key, field

    def build_scene(self, state: FrameState) -> Scene:
        cfg = self.config
        pal = cfg.palette
        key, field = self.resolve_surface(state.surface_key)
        scene = Scene()

        # ── Grid on the xy-plane ────────────────────────────────────────
        if state.show_grid:
            g = cfg.grid_extent
            grid_style = Style(pal.grid, width=1.0)
            for t in _grid_ticks(g, cfg.grid_step):
                scene.add_segment((-g, t, 0), (g, t, 0), grid_style)
            for t in _grid_ticks(g, cfg.grid_step):
                scene.add_segment((t, -g, 0), (t, g, 0), grid_style)

        # ── Axes ────────────────────────────────────────────────────────
        a = cfg.axis_length
        scene.add_segment((0, 0, 0), (a, 0, 0), Style(pal.axis_x, width=2.0))
        scene.add_segment((0, 0, 0), (0, a, 0), Style(pal.axis_y, width=2.0))
        scene.add_segment((0, 0, 0), (0, 0, a), Style(pal.axis_z, width=2.0))

        # ── Surface ─────────────────────────────────────────────────────
        scene.add_triangles(
            surface_triangles(key, cfg.mesh_resolution, float(cfg.domain_extent)),
            Style(pal.surface, width=cfg.surface_stroke_width,
                  fill_alpha=cfg.surface_fill_alpha,
                  stroke_alpha=cfg.surface_stroke_alpha))

        px, py = state.point_x, state.point_y
        values = chain_rule_values(field, px, py, state.direction_angle, state.magnitude)
        z0 = values.z

        # ── Tangent plane ───────────────────────────────────────────────
        if state.show_tangent_plane:
            s = cfg.tangent_plane_size
            corners = []
            for cx, cy in ((px - s, py - s), (px + s, py - s),
                           (px + s, py + s), (px - s, py + s)):
                cz = z0 + values.dzdx * (cx - px) + values.dzdy * (cy - py)
                corners.append((cx, cy, cz))
            scene.add_facet(corners, fill=pal.tangent_fill,
                            stroke=pal.tangent_stroke, width=2.0)

        # ── Curve lifted onto the surface ───────────────────────────────
        if state.show_curve:
            t_start = state.t_param - cfg.curve_t_range
            t_end = state.t_param + cfg.curve_t_range
            steps = cfg.curve_steps
            points = []
            for i in range(steps + 1):
                t = t_start + (t_end - t_start) * i / steps
                x, y = curve_point(t, px, py, state.t_param,
                                   state.direction_angle, state.magnitude)
                points.append((x, y, field.evaluate(x, y)))
            scene.add_path(points, Style(pal.curve, width=3.0))

        # ── Derivative vectors ──────────────────────────────────────────
        if state.show_vectors:
            k = cfg.vector_scale
            partial = Style(pal.partial, width=3.0)
            scene.add_arrow((px, py, z0), (px + k, py, z0 + values.dzdx * k), partial)
            scene.add_arrow((px, py, z0), (px, py + k, z0 + values.dzdy * k), partial)
            scene.add_arrow((px, py, 0),
                            (px + values.dxdt * k, py + values.dydt * k, 0),
                            Style(pal.velocity, width=3.0))
            scene.add_arrow((px, py, z0),
                            (px + values.dxdt * k, py + values.dydt * k,
                             z0 + values.dzdt * k),
                            Style(pal.total_derivative, width=4.0))

        # ── Evaluation point ────────────────────────────────────────────
        scene.add_segment((px, py, 0), (px, py, z0),
                          Style(pal.drop_line, width=2.0, dash=tuple(cfg.drop_line_dash)))
        scene.add_marker((px, py, z0), cfg.point_radius,
                         fill=pal.point, stroke=pal.point_outline, width=2.0)
        scene.add_marker((px, py, 0), cfg.domain_point_radius, fill=pal.domain_point)

        scene.add_label((10, 20), field.display_name, pal.label)
        return scene

    def render(self, state: FrameState):
        """Ordered draw commands for one frame."""
        scene = self.build_scene(state)
        commands = scene.compile(self.projection(state.camera), self.config)
        logger.debug("frame: %d primitives -> %d commands", len(scene), len(commands))
        return commands

    def draw(self, state: FrameState, surface):
        """Render and issue the commands to surface; returns the commands."""
        commands = self.render(state)
        execute(commands, surface)
        return commands


def render_frame(state: FrameState, config: RenderConfig = None):
    return Renderer(config).render(state)
