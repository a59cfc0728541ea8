from collections.abc import Iterator
from pathlib import Path

from PIL import Image

from halfblock.charsets import ESC, FULL_BLOCK, LOWER_HALF, OPAQUE, RESET, SPACE, UPPER_HALF
from halfblock.engine import RGB, Cell, PixelSource
from halfblock.source import load_source, source_from_image


def select_glyph(top_lit: bool, bottom_lit: bool, colour: bool) -> str:
    """Pick the block character for a cell.

    Two lit halves draw an upper half block in colour mode (the background
    shows the bottom pixel) and a full block otherwise.
    """
    if top_lit and bottom_lit:
        return UPPER_HALF if colour else FULL_BLOCK
    if top_lit:
        return UPPER_HALF
    if bottom_lit:
        return LOWER_HALF
    return SPACE


def assign_colours(cell: Cell) -> tuple[RGB | None, RGB | None]:
    """Return (foreground, background) for a cell rendered in colour."""
    if cell.top_lit and cell.bottom_lit:
        return cell.top_colour, cell.bottom_colour
    if cell.top_lit:
        return cell.top_colour, None
    if cell.bottom_lit:
        return cell.bottom_colour, None
    return None, None


def format_escape(fg: RGB | None, bg: RGB | None = None) -> str:
    """Truecolor SGR sequence for fg (and bg, in the same sequence). Empty without fg."""
    if fg is None:
        return ""
    params = f"38;2;{fg[0]};{fg[1]};{fg[2]}"
    if bg is not None:
        params += f";48;2;{bg[0]};{bg[1]};{bg[2]}"
    return f"{ESC}[{params}m"


def read_cell(source: PixelSource, x: int, y: int) -> Cell:
    """Sample column x at rows y and y + 1. A missing bottom row is unlit."""
    top_lit = source.alpha(x, y) == OPAQUE
    bottom_lit = y + 1 < source.height and source.alpha(x, y + 1) == OPAQUE
    return Cell(
        top_lit=top_lit,
        bottom_lit=bottom_lit,
        top_colour=source.colour(x, y) if top_lit else None,
        bottom_colour=source.colour(x, y + 1) if bottom_lit else None,
    )


def render_cell(cell: Cell, colour: bool) -> str:
    glyph = select_glyph(cell.top_lit, cell.bottom_lit, colour)
    if not colour:
        return glyph
    code = format_escape(*assign_colours(cell))
    if not code:
        return glyph
    return f"{code}{glyph}{RESET}"


def render_row(source: PixelSource, y: int, colour: bool) -> str:
    """Render source rows y and y + 1 as one line, without the line break.

    Alpha and colour are read a whole row at a time. The output matches
    rendering each read_cell() in turn.
    """
    top_lit = (source.alpha_row(y) == OPAQUE).tolist()
    if y + 1 < source.height:
        bottom_lit = (source.alpha_row(y + 1) == OPAQUE).tolist()
    else:
        bottom_lit = [False] * source.width

    top_colours = bottom_colours = None
    if colour:
        top_rgb = source.colour_row(y)
        if top_rgb is not None:
            top_colours = [tuple(c) for c in top_rgb.tolist()]
            if y + 1 < source.height:
                bottom_colours = [tuple(c) for c in source.colour_row(y + 1).tolist()]

    parts = []
    for x, (top, bottom) in enumerate(zip(top_lit, bottom_lit)):
        if not top and not bottom:
            parts.append(SPACE)
            continue
        cell = Cell(
            top_lit=top,
            bottom_lit=bottom,
            top_colour=top_colours[x] if top and top_colours else None,
            bottom_colour=bottom_colours[x] if bottom and bottom_colours else None,
        )
        parts.append(render_cell(cell, colour))
    return "".join(parts)


def render(source: PixelSource, colour: bool = True) -> Iterator[str]:
    """Yield one newline-terminated line per pair of source rows.

    Nothing is written anywhere; callers decide where the lines go. Calling
    it again on the same source produces the same lines.
    """
    if source.width == 0:
        return
    for y in range(0, source.height, 2):
        yield render_row(source, y, colour) + "\n"


def image_to_text(image: Image.Image | str | Path, colour: bool = True) -> str:
    if isinstance(image, Image.Image):
        source = source_from_image(image, colour=colour)
    else:
        source = load_source(image, colour=colour)
    return "".join(render(source, colour=colour))
