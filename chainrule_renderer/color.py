#
# PROJECT: chainrule-surface-renderer
# MODULE: chainrule_renderer/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from typing import NamedTuple, Optional


class Color(NamedTuple):
    """RGBA colour: 0-255 channels, alpha in [0, 1]."""
    r: int
    g: int
    b: int
    a: float = 1.0

    @property
    def rgb(self):
        return (self.r, self.g, self.b)

    def with_alpha(self, alpha: float) -> 'Color':
        return Color(self.r, self.g, self.b, max(0.0, min(1.0, float(alpha))))

    def to_css(self) -> str:
        """'#rrggbb' when opaque, otherwise an rgba() string."""
        if self.a >= 1.0:
            return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        return f"rgba({self.r}, {self.g}, {self.b}, {round(self.a, 3):g})"

    def to_mpl(self):
        """(r, g, b, a) floats in [0, 1] as matplotlib expects."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a)

    def blend_over(self, background: 'Color') -> 'Color':
        """Composite onto an opaque background, for backends without alpha."""
        a = self.a
        return Color(int(round(self.r * a + background.r * (1 - a))),
                     int(round(self.g * a + background.g * (1 - a))),
                     int(round(self.b * a + background.b * (1 - a))))


def rgba(r: int, g: int, b: int, a: float = 1.0) -> Color:
    return Color(int(r), int(g), int(b), float(a))


def parse_hex_color(hex_str) -> Optional[Color]:
    """
    Parse a hex color string to an opaque Color.
    Accepts: '#RRGGBB' or 'RRGGBB' (case-insensitive).
    Returns None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        return None
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
        return Color(r, g, b)
    except ValueError:
        return None


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)

# --- xterm-256 lookup for the terminal backend ---

# The 6x6x6 color cube occupies indices 16-231.
# Each axis has values: 0, 95, 135, 175, 215, 255
_CUBE_VALUES = [0, 95, 135, 175, 215, 255]

# ANSI 0-7 approximate RGB values
_ANSI8 = [
    (0, 0, 0),       # 0  black
    (128, 0, 0),     # 1  red
    (0, 128, 0),     # 2  green
    (128, 128, 0),   # 3  yellow
    (0, 0, 128),     # 4  blue
    (128, 0, 128),   # 5  magenta
    (0, 128, 128),   # 6  cyan
    (192, 192, 192), # 7  white
]


def _nearest_cube_val(v):
    """Find nearest index in the 6-level cube axis."""
    best_i = 0
    best_d = abs(v - _CUBE_VALUES[0])
    for i in range(1, 6):
        d = abs(v - _CUBE_VALUES[i])
        if d < best_d:
            best_d = d
            best_i = i
    return best_i


def rgb_to_xterm256(r, g, b) -> int:
    """Find the nearest xterm-256 index for an (r, g, b) color.
    Searches the 6x6x6 cube and the grayscale ramp for best match."""
    ri = _nearest_cube_val(r)
    gi = _nearest_cube_val(g)
    bi = _nearest_cube_val(b)
    cube_idx = 16 + ri * 36 + gi * 6 + bi
    cr, cg, cb = _CUBE_VALUES[ri], _CUBE_VALUES[gi], _CUBE_VALUES[bi]
    cube_dist = (r - cr) ** 2 + (g - cg) ** 2 + (b - cb) ** 2

    # Grayscale ramp 232-255: 8, 18, ..., 238
    gray_avg = (r + g + b) // 3
    gray_step = max(0, min(23, (gray_avg - 8 + 5) // 10))
    gray_idx = 232 + gray_step
    gv = 8 + gray_step * 10
    gray_dist = (r - gv) ** 2 + (g - gv) ** 2 + (b - gv) ** 2

    return gray_idx if gray_dist < cube_dist else cube_idx


def rgb_to_ansi8(r, g, b) -> int:
    """Nearest basic ANSI color index (0-7), for 8-color terminals."""
    best_idx = 0
    best_dist = (r - _ANSI8[0][0]) ** 2 + (g - _ANSI8[0][1]) ** 2 + (b - _ANSI8[0][2]) ** 2
    for i in range(1, 8):
        ar, ag, ab = _ANSI8[i]
        d = (r - ar) ** 2 + (g - ag) ** 2 + (b - ab) ** 2
        if d < best_dist:
            best_dist = d
            best_idx = i
    return best_idx
