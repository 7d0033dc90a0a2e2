"""Bitmap text extruded onto the coaster top.

Glyphs come from a fixed 5x7 font.  Each lit pixel becomes its own
12-triangle box; there is no outline merging.  Text is upper-cased
before lookup, spaces only advance the cursor and any other character
missing from the font renders as a solid block.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from coastercad.geometry_utils import Triangle
from coastercad.primitives import add_box
from coastercad.settings import TextAlignment, TextElement, parse_enum

GLYPH_COLUMNS = 5
GLYPH_ROWS = 7

# rows top to bottom, '#' marks a lit pixel
_GLYPH_ROWS: Mapping[str, Tuple[str, ...]] = {
    'A': ('.###.', '#...#', '#...#', '#####', '#...#', '#...#', '#...#'),
    'B': ('####.', '#...#', '#...#', '####.', '#...#', '#...#', '####.'),
    'C': ('.###.', '#...#', '#....', '#....', '#....', '#...#', '.###.'),
    'D': ('####.', '#...#', '#...#', '#...#', '#...#', '#...#', '####.'),
    'E': ('#####', '#....', '#....', '####.', '#....', '#....', '#####'),
    'F': ('#####', '#....', '#....', '####.', '#....', '#....', '#....'),
    'G': ('.###.', '#...#', '#....', '#.###', '#...#', '#...#', '.###.'),
    'H': ('#...#', '#...#', '#...#', '#####', '#...#', '#...#', '#...#'),
    'I': ('#####', '..#..', '..#..', '..#..', '..#..', '..#..', '#####'),
    'J': ('....#', '....#', '....#', '....#', '#...#', '#...#', '.###.'),
    'K': ('#...#', '#..#.', '#.#..', '##...', '#.#..', '#..#.', '#...#'),
    'L': ('#....', '#....', '#....', '#....', '#....', '#....', '#####'),
    'M': ('#...#', '##.##', '#.#.#', '#...#', '#...#', '#...#', '#...#'),
    'N': ('#...#', '##..#', '#.#.#', '#..##', '#...#', '#...#', '#...#'),
    'O': ('.###.', '#...#', '#...#', '#...#', '#...#', '#...#', '.###.'),
    'P': ('####.', '#...#', '#...#', '####.', '#....', '#....', '#....'),
    'Q': ('.###.', '#...#', '#...#', '#...#', '#.#.#', '#..#.', '.##.#'),
    'R': ('####.', '#...#', '#...#', '####.', '#.#..', '#..#.', '#...#'),
    'S': ('.###.', '#...#', '#....', '.###.', '....#', '#...#', '.###.'),
    'T': ('#####', '..#..', '..#..', '..#..', '..#..', '..#..', '..#..'),
    'U': ('#...#', '#...#', '#...#', '#...#', '#...#', '#...#', '.###.'),
    'V': ('#...#', '#...#', '#...#', '#...#', '.#.#.', '.#.#.', '..#..'),
    'W': ('#...#', '#...#', '#...#', '#.#.#', '#.#.#', '##.##', '#...#'),
    'X': ('#...#', '#...#', '.#.#.', '..#..', '.#.#.', '#...#', '#...#'),
    'Y': ('#...#', '#...#', '.#.#.', '..#..', '..#..', '..#..', '..#..'),
    'Z': ('#####', '....#', '...#.', '..#..', '.#...', '#....', '#####'),
    '0': ('.###.', '#...#', '#..##', '#.#.#', '##..#', '#...#', '.###.'),
    '1': ('..#..', '.##..', '..#..', '..#..', '..#..', '..#..', '.###.'),
    '2': ('.###.', '#...#', '....#', '..##.', '.#...', '#....', '#####'),
    '3': ('.###.', '#...#', '....#', '..##.', '....#', '#...#', '.###.'),
    '4': ('...#.', '..##.', '.#.#.', '#..#.', '#####', '...#.', '...#.'),
    '5': ('#####', '#....', '####.', '....#', '....#', '#...#', '.###.'),
    '6': ('.###.', '#....', '#....', '####.', '#...#', '#...#', '.###.'),
    '7': ('#####', '....#', '...#.', '..#..', '..#..', '..#..', '..#..'),
    '8': ('.###.', '#...#', '#...#', '.###.', '#...#', '#...#', '.###.'),
    '9': ('.###.', '#...#', '#...#', '.####', '....#', '....#', '.###.'),
    '-': ('.....', '.....', '.....', '#####', '.....', '.....', '.....'),
    '.': ('.....', '.....', '.....', '.....', '.....', '.....', '..#..'),
    '!': ('..#..', '..#..', '..#..', '..#..', '..#..', '.....', '..#..'),
}

FONT: Mapping[str, Tuple[Tuple[bool, ...], ...]] = MappingProxyType({
    ch: tuple(tuple(c == '#' for c in row) for row in rows)
    for ch, rows in _GLYPH_ROWS.items()
})

for _ch, _bitmap in FONT.items():
    if len(_bitmap) != GLYPH_ROWS or any(len(r) != GLYPH_COLUMNS for r in _bitmap):
        raise RuntimeError(f"glyph {_ch!r} is not {GLYPH_COLUMNS}x{GLYPH_ROWS}")


def lit_pixels(ch: str) -> int:
    """Number of lit pixels in the glyph for ``ch`` (0 if unknown)."""

    bitmap = FONT.get(ch.upper())
    if bitmap is None:
        return 0
    return sum(sum(row) for row in bitmap)


def _rotate(x: float, y: float, cos_a: float, sin_a: float) -> Tuple[float, float]:
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a


class TextEmbosser:
    """Turn a :class:`TextElement` into triangles.

    ``coaster_diameter`` places the top/bottom aligned variants a quarter
    diameter from the centre; ``base_height`` is the surface the text
    stands on (embossed) or sinks into (debossed).
    """

    def __init__(self, coaster_diameter: float, base_height: float) -> None:
        self.coaster_diameter = coaster_diameter
        self.base_height = base_height

    def anchor(self, element: TextElement, char_height: float, total_width: float) -> Tuple[float, float]:
        alignment = parse_enum(TextAlignment, element.alignment)
        start_x = -total_width / 2.0 + element.offset_x
        if alignment is TextAlignment.TOP_CENTER:
            start_y = self.coaster_diameter * 0.25 + element.offset_y
        elif alignment is TextAlignment.BOTTOM_CENTER:
            start_y = -self.coaster_diameter * 0.25 - char_height + element.offset_y
        else:
            start_y = -char_height / 2.0 + element.offset_y
        return start_x, start_y

    def generate(self, element: TextElement) -> List[Triangle]:
        text = (element.text or '').upper()
        triangles: List[Triangle] = []
        if not text:
            return triangles

        char_height = element.font_size
        char_width = char_height * GLYPH_COLUMNS / GLYPH_ROWS
        spacing = char_width * element.letter_spacing * 0.2
        total_width = len(text) * char_width + (len(text) - 1) * spacing
        start_x, start_y = self.anchor(element, char_height, total_width)

        if element.embossed:
            bottom_z, top_z = self.base_height, self.base_height + element.depth
        else:
            bottom_z, top_z = self.base_height - element.depth, self.base_height

        angle = math.radians(element.rotation)
        rotated = abs(element.rotation) > 0.001
        cos_a, sin_a = math.cos(angle), math.sin(angle)

        def block(x: float, y: float, w: float, h: float) -> None:
            corners: Sequence[Tuple[float, float]] = ((x, y), (x + w, y), (x + w, y + h), (x, y + h))
            if rotated:
                # pivot is the coaster origin, not the glyph
                corners = [_rotate(cx, cy, cos_a, sin_a) for cx, cy in corners]
            add_box(triangles, corners, bottom_z, top_z)

        pixel_w = char_width / GLYPH_COLUMNS
        pixel_h = char_height / GLYPH_ROWS
        cursor = start_x
        for ch in text:
            bitmap = FONT.get(ch)
            if bitmap is not None:
                for row, bits in enumerate(bitmap):
                    y = start_y + (GLYPH_ROWS - 1 - row) * pixel_h
                    for col, lit in enumerate(bits):
                        if lit:
                            block(cursor + col * pixel_w, y, pixel_w, pixel_h)
            elif ch != ' ':
                block(cursor, start_y, char_width, char_height)
            cursor += char_width + spacing

        return triangles


def generate_text(element: TextElement, coaster_diameter: float, base_height: float) -> List[Triangle]:
    return TextEmbosser(coaster_diameter, base_height).generate(element)


__all__ = [
    'FONT',
    'GLYPH_COLUMNS',
    'GLYPH_ROWS',
    'TextEmbosser',
    'generate_text',
    'lit_pixels',
]
