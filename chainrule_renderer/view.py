#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/view.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math

from .camera import Camera
from .chain_rule import chain_rule_values
from .config import RenderConfig
from .math_utils import as_vec3
from .projection import Point2D
from .renderer import FrameState, Renderer
from .surfaces import DEFAULT_SURFACE, get_surface

logger = logging.getLogger(__name__)


class ChainRuleView:
    """
    Host-facing handle on one chain-rule visualization.

    Owns the camera and the scene settings (surface, evaluation point,
    direction, toggles) and is bound to a drawing surface.  Mutators only
    update state; the host decides when to call render().
    """

    def __init__(self, surface=None, config: RenderConfig = None):
        self.config = config if config is not None else RenderConfig()
        self.surface = surface
        self.renderer = Renderer(self.config)
        self.camera = Camera.from_config(self.config)

        self.current_function = DEFAULT_SURFACE
        self.point_x = 0.0
        self.point_y = 0.0
        self.t_param = math.pi / 4
        self.direction_angle = math.pi / 2
        self.magnitude = 1.0

        self.show_grid = True
        self.show_curve = True
        self.show_tangent_plane = True
        self.show_vectors = True

    # ── state ───────────────────────────────────────────────────────────
    def frame_state(self) -> FrameState:
        """Frozen snapshot of everything the next frame depends on."""
        return FrameState(
            camera=self.camera.state(),
            surface_key=self.current_function,
            point_x=self.point_x,
            point_y=self.point_y,
            t_param=self.t_param,
            direction_angle=self.direction_angle,
            magnitude=self.magnitude,
            show_grid=self.show_grid,
            show_curve=self.show_curve,
            show_tangent_plane=self.show_tangent_plane,
            show_vectors=self.show_vectors,
        )

    @property
    def field(self):
        return get_surface(self.current_function)

    # ── drawing ─────────────────────────────────────────────────────────
    def render(self):
        """Redraw the full scene onto the bound surface."""
        if self.surface is None:
            raise RuntimeError("ChainRuleView.render() needs a bound drawing surface")
        self.renderer.draw(self.frame_state(), self.surface)

    def resize(self, width: int, height: int):
        """Follow a resized drawing surface; camera and settings are kept."""
        self.config = self.config.for_viewport(width, height)
        self.renderer = Renderer(self.config)

    def project(self, point) -> Point2D:
        return self.renderer.projection(self.camera.state()).project(as_vec3(point))

    # ── camera input ────────────────────────────────────────────────────
    def rotate_by(self, dx: float, dy: float):
        self.camera.rotate(dx, dy, self.config.rotate_sensitivity)

    def zoom_by(self, delta: float):
        self.camera.zoom(delta, self.config.zoom_sensitivity)

    # ── scene settings ──────────────────────────────────────────────────
    def set_function(self, key) -> bool:
        """Select a built-in surface; unknown keys are ignored."""
        if get_surface(key) is None:
            logger.debug("ignoring unknown surface %r", key)
            return False
        self.current_function = key
        return True

    def set_point(self, x: float, y: float):
        self.point_x = float(x)
        self.point_y = float(y)

    def set_direction(self, angle: float, magnitude: float = 1.0):
        self.direction_angle = float(angle)
        self.magnitude = float(magnitude)

    def set_t(self, t: float):
        self.t_param = float(t)

    def toggle_grid(self):
        self.show_grid = not self.show_grid

    def toggle_curve(self):
        self.show_curve = not self.show_curve

    def toggle_tangent_plane(self):
        self.show_tangent_plane = not self.show_tangent_plane

    def toggle_vectors(self):
        self.show_vectors = not self.show_vectors

    # ── queries ─────────────────────────────────────────────────────────
    def chain_rule_values(self):
        return chain_rule_values(self.field, self.point_x, self.point_y,
                                 self.direction_angle, self.magnitude)

    def pick(self, screen_x: float, screen_y: float):
        """
        Move the evaluation point to the domain sample nearest a click.

        Samples the z = 0 plane over the grid extent; the point moves only
        when the nearest projected sample is within pick_radius pixels.
        Returns the new (x, y) or None.
        """
        cfg = self.config
        projection = self.renderer.projection(self.camera.state())
        extent = cfg.grid_extent
        count = int(round(2 * extent / cfg.pick_step))

        best = None
        best_dist = math.inf
        for i in range(count + 1):
            x = -extent + i * cfg.pick_step
            for j in range(count + 1):
                y = -extent + j * cfg.pick_step
                p = projection.project((x, y, 0.0))
                dist = math.hypot(p.x - screen_x, p.y - screen_y)
                if dist < best_dist:
                    best_dist = dist
                    best = (x, y)

        if best is None or best_dist >= cfg.pick_radius:
            return None
        self.set_point(*best)
        return best
