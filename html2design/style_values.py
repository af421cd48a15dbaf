"""
Style value interpreter: CSS value strings to numbers, colours and shadows.

Every function here is pure and total. Unparseable input never raises; it
returns the documented fallback (``0`` for sizes, ``16`` for font sizes,
``None`` for colours and shadows) so callers can decide whether to skip a
property instead of applying a wrong default.
"""
import math
import re
from typing import Optional, Tuple

from .models import RGB, CornerRadii, Padding, Shadow

# Leading numeric prefix, the way a browser's parseFloat reads it
NUMBER_RE = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')

HEX_RE = re.compile(r'^#?([0-9a-f]{3}|[0-9a-f]{6})$', re.IGNORECASE)
RGB_RE = re.compile(
    r'^rgba?\(\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)'
    r'(?:\s*,\s*[\d.]+%?)?\s*\)$'
)
HSL_RE = re.compile(
    r'^hsla?\(\s*(-?\d+(?:\.\d+)?)(?:deg)?\s*,\s*(\d+(?:\.\d+)?)%\s*,\s*(\d+(?:\.\d+)?)%'
    r'(?:\s*,\s*[\d.]+%?)?\s*\)$'
)
SHADOW_RE = re.compile(
    r'(-?\d+(?:\.\d+)?)(?:px)?\s+(-?\d+(?:\.\d+)?)(?:px)?\s+(\d+(?:\.\d+)?)px\s+(.+)'
)

BASE_FONT_SIZE = 16.0
SHADOW_ALPHA = 0.1

NAMED_FONT_SIZES = {
    'xx-small': 9,
    'x-small': 10,
    'small': 13,
    'medium': 16,
    'large': 18,
    'x-large': 24,
    'xx-large': 32,
}

# `transparent` maps to white rather than "no paint". Known quirk, kept so
# existing documents keep rendering the same way.
NAMED_COLORS = {
    'black': '#000000',
    'white': '#ffffff',
    'red': '#ff0000',
    'green': '#008000',
    'blue': '#0000ff',
    'yellow': '#ffff00',
    'cyan': '#00ffff',
    'magenta': '#ff00ff',
    'silver': '#c0c0c0',
    'gray': '#808080',
    'grey': '#808080',
    'maroon': '#800000',
    'olive': '#808000',
    'lime': '#00ff00',
    'aqua': '#00ffff',
    'teal': '#008080',
    'navy': '#000080',
    'fuchsia': '#ff00ff',
    'purple': '#800080',
    'orange': '#ffa500',
    'pink': '#ffc0cb',
    'brown': '#a52a2a',
    'darkgray': '#a9a9a9',
    'darkgrey': '#a9a9a9',
    'lightgray': '#d3d3d3',
    'lightgrey': '#d3d3d3',
    'transparent': '#ffffff',
}


def parse_number(value: Optional[str]) -> Optional[float]:
    """Leading number of *value*, or None when it does not start with one."""
    if not value:
        return None
    match = NUMBER_RE.match(value)
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def parse_size(size: Optional[str]) -> float:
    """
    Convert a CSS length to pixels.

    ``em``/``rem`` are 16px, ``vh`` and ``vw`` are rough 10px/14px
    approximations, ``pt`` is 1.33px and ``%`` is returned as the bare number
    since there is no base to resolve it against. Unitless and ``px`` values
    pass through. Empty or non-numeric input gives 0.
    """
    value = parse_number(size)
    if value is None:
        return 0.0

    # `em` also covers `rem`
    if 'em' in size:
        return value * 16
    if '%' in size:
        return value
    if 'vh' in size:
        return value * 10
    if 'vw' in size:
        return value * 14
    if 'pt' in size:
        return value * 1.33

    return value


def parse_font_size(font_size: Optional[str]) -> float:
    """
    Convert a CSS font-size to pixels.

    Handles the units :func:`parse_size` does (with ``%`` relative to 16px)
    and named sizes from ``xx-small`` to ``xx-large``. Defaults to 16.
    """
    if not font_size:
        return BASE_FONT_SIZE

    size = parse_number(font_size)
    if size is None:
        return float(NAMED_FONT_SIZES.get(font_size.strip().lower(), BASE_FONT_SIZE))

    if 'em' in font_size:
        return size * 16
    if '%' in font_size:
        return (size / 100) * 16
    if 'pt' in font_size:
        return size * 1.33

    return size


def _hex_to_rgb(hex_color: str) -> Optional[RGB]:
    match = HEX_RE.match(hex_color)
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:  # short form #f00
        digits = ''.join(c * 2 for c in digits)
    r, g, b = (int(digits[i:i + 2], 16) / 255 for i in (0, 2, 4))
    return RGB(r, g, b)


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert hue/saturation/lightness in [0, 1] to RGB, snapped to 1/255 steps."""
    if s == 0:
        r = g = b = l  # achromatic
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_rgb(p, q, h + 1 / 3)
        g = _hue_to_rgb(p, q, h)
        b = _hue_to_rgb(p, q, h - 1 / 3)

    return RGB(round(r * 255) / 255, round(g * 255) / 255, round(b * 255) / 255)


def parse_color(color: Optional[str]) -> Optional[RGB]:
    """
    Convert a CSS colour to :class:`RGB`.

    Supports ``#rgb``/``#rrggbb`` (the ``#`` is optional), ``rgb()``/``rgba()``,
    ``hsl()``/``hsla()`` (alpha is ignored for both) and a small table of
    named colours. Returns None for anything else (gradients, ``currentColor``,
    ``var(...)``), which is distinct from black.
    """
    if not color:
        return None

    color = color.strip().lower()

    if color.startswith('#'):
        return _hex_to_rgb(color)

    if color.startswith('rgb'):
        match = RGB_RE.match(color)
        if match:
            r, g, b = (min(float(match.group(i)), 255) / 255 for i in (1, 2, 3))
            return RGB(r, g, b)
        return None

    if color.startswith('hsl'):
        match = HSL_RE.match(color)
        if match:
            h = (float(match.group(1)) % 360) / 360
            s = min(float(match.group(2)), 100) / 100
            l = min(float(match.group(3)), 100) / 100
            return hsl_to_rgb(h, s, l)
        return None

    if color in NAMED_COLORS:
        return _hex_to_rgb(NAMED_COLORS[color])

    # Bare hex digits without the leading '#'
    return _hex_to_rgb(color)


def parse_box_shadow(box_shadow: Optional[str]) -> Optional[Shadow]:
    """
    Parse a single ``<x>px <y>px <blur>px <color>`` shadow.

    No spread, no ``inset`` and no comma-separated lists. The colour's own
    alpha is discarded and a fixed alpha of 0.1 is used instead; this is a
    known approximation.
    """
    if not box_shadow:
        return None

    match = SHADOW_RE.search(box_shadow.strip())
    if not match:
        return None

    color = parse_color(match.group(4))
    if color is None:
        return None

    return Shadow(
        offset_x=float(match.group(1)),
        offset_y=float(match.group(2)),
        radius=float(match.group(3)),
        color=color,
        alpha=SHADOW_ALPHA,
    )


def parse_box_edges(value: Optional[str]) -> Padding:
    """Expand a 1 to 4 value box shorthand (``padding: 8px 16px``) clockwise from top."""
    parts = [parse_size(part) for part in (value or '').split()]
    if not parts:
        return Padding()
    if len(parts) == 1:
        return Padding.uniform(parts[0])
    if len(parts) == 2:
        return Padding(parts[0], parts[1], parts[0], parts[1])
    if len(parts) == 3:
        return Padding(parts[0], parts[1], parts[2], parts[1])
    return Padding(*parts[:4])


def parse_corner_radii(value: Optional[str]) -> CornerRadii:
    """Expand a ``border-radius`` shorthand clockwise from top-left."""
    parts = [parse_size(part) for part in (value or '').split('/')[0].split()]
    if not parts:
        return CornerRadii()
    if len(parts) == 1:
        return CornerRadii.uniform(parts[0])
    if len(parts) == 2:
        return CornerRadii(parts[0], parts[1], parts[0], parts[1])
    if len(parts) == 3:
        return CornerRadii(parts[0], parts[1], parts[2], parts[1])
    return CornerRadii(*parts[:4])


def parse_border(border: Optional[str]) -> Tuple[float, Optional[RGB]]:
    """
    Read width and colour from a ``border`` shorthand (``1px solid #ccc``).

    Returns ``(width, colour-or-None)``. A missing width gives 0 unless a
    style keyword is present, in which case CSS's ``medium`` (about 1px for
    design purposes) is used.
    """
    if not border:
        return 0.0, None

    width = None
    color = None
    has_style = False
    # rgb()/hsl() colours contain spaces after commas; glue them back together
    tokens = re.findall(r'\w+\([^)]*\)|\S+', border)
    for token in tokens:
        lowered = token.lower()
        if lowered == 'none':
            return 0.0, None
        if width is None and parse_number(token) is not None:
            width = parse_size(token)
        elif lowered in ('solid', 'dashed', 'dotted', 'double', 'groove', 'ridge', 'inset', 'outset'):
            has_style = True
        elif color is None:
            color = parse_color(token)

    if width is None:
        width = 1.0 if has_style or color is not None else 0.0
    return width, color


def parse_line_height(line_height: Optional[str], font_size: float) -> Optional[float]:
    """
    Line height as a percentage of the font size.

    Values above 3 are taken as pixels, smaller ones as multipliers.
    Returns None when *line_height* has no leading number.
    """
    value = parse_number(line_height)
    if value is None:
        return None
    if value > 3:
        return (value / font_size) * 100 if font_size > 0 else 100.0
    return value * 100


def finite_or(value: float, fallback: float = 0.0) -> float:
    """*value* when it is a finite, non-negative number, else *fallback*."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(value) or value < 0:
        return fallback
    return value
