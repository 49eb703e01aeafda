# Fretboard diagrams as PNG files
#
# Labels are plain dicts placed on a (string, fret) grid, fret 0 being the
# open-string column left of the nut:
#   {"rc": (string, fret), "text": "R", "fill": "#FF6B6B" | [c1, c2, ...],
#    "sat": 1.0, "light": 0.0, "border_width": 3, "blend": "darken",
#    "outline": "#000000", "text_color": "#000000", "font_size": 32}
# A list of fills is drawn as equal vertical bands, left to right.

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageChops, ImageDraw, ImageFont

from .catalog import Quality
from .config import TOTAL_FRETS
from .errors import InvalidConfiguration
from .fretboard import ChordView, ModeView
from .modes import calculate_mode_pattern, scale_degree
from .pitch import interval
from .style import adjust_hsl, parse_color, resolve_style
from .tuning import STRING_COUNT, STRING_NAMES, note_name_at, is_natural_note_at

logger = logging.getLogger(__name__)

Label = Dict[str, object]

BOARD_COLOR = '#F4E7CF'
FRET_COLOR = '#8A7E6B'
NUT_COLOR = '#222222'
STRING_COLOR = '#555555'
INLAY_FRETS = (3, 5, 7, 9, 15, 17, 19, 21)
DOUBLE_INLAY_FRETS = (12, 24)

# Modal colours (1-7), by scale degree
degree_colors = {
    1: "#90C978",  # calm green
    2: "#e58c19",  # gold
    3: "#f6dd36",  # bright yellow
    4: "#4ED1C5",  # bright turquoise
    5: "#A080C6",  # purple
    6: "#6AA8D8",  # stable blue
    7: "#D14A4A",  # fierce red
}


def _fills(fill, default) -> List[Tuple[int, int, int]]:
    if isinstance(fill, (list, tuple)) and fill and not isinstance(fill[0], int):
        return [parse_color(c, default) for c in fill]
    return [parse_color(fill, default)]


def _normalize_labels(labels: Sequence[Label], default_fill, default_text, default_outline) -> List[Label]:
    """Fill in per-label defaults and drop labels without a grid position."""
    norm = []
    for item in labels:
        rc = item.get("rc")
        if rc is None:
            logger.debug("Skipping label without rc: %r", item)
            continue
        blend = (item.get("blend") or "normal").lower()
        if blend not in ("normal", "darken"):
            blend = "normal"
        norm.append({
            "rc": (int(rc[0]), int(rc[1])),
            "text": str(item.get("text", "")),
            "fills": _fills(item.get("fill"), default_fill),
            "text_color": parse_color(item.get("text_color"), default_text),
            "outline": parse_color(item.get("outline"), default_outline),
            "blend": blend,
            "sat_mult": float(item.get("sat", 1.0)),
            "light_add": float(item.get("light", 0.0)),
            "border_width": item.get("border_width"),
            "font_size": item.get("font_size"),
        })
    return norm


def _load_font(font_path, size):
    try:
        return ImageFont.truetype(font_path, size) if font_path else ImageFont.load_default()
    except OSError:
        logger.debug("Could not load font at %s, using default font.", font_path)
        return ImageFont.load_default()


def render_labels(
        output_path: str,
        labels: Sequence[Label],
        *,
        max_fret: int = TOTAL_FRETS,
        min_fret: int = 0,
        box_size: Tuple[int, int] = (70, 55),
        box_radius: int = 8,
        origin_step: Tuple[int, int] = (102, 72),
        margin: Tuple[int, int] = (60, 50),
        font_path: Optional[str] = "Arial Bold.ttf",
        font_size: int = 32,
        default_text_color: str = "#000000",
        default_outline: str = "#000000",
        outline_width: int = 2,
        scale: int = 2,
        title: Optional[str] = None,
) -> str:
    """Draw an empty neck, then every label on top of it, and save to `output_path`.

    Only frets `min_fret` to `max_fret` are drawn; the nut appears when the
    window starts at the open strings.
    """
    if not 0 <= min_fret <= max_fret:
        raise InvalidConfiguration(f"Cannot draw frets {min_fret} to {max_fret}")
    S = max(1, int(scale))
    step_x, step_y = origin_step[0] * S, origin_step[1] * S
    mx, my = margin[0] * S, margin[1] * S
    title_h = (font_size + 20) * S if title else 0

    cols = max_fret - min_fret + 1
    W = mx * 2 + cols * step_x
    H = my * 2 + (STRING_COUNT - 1) * step_y + title_h
    up = Image.new("RGBA", (W, H), parse_color(BOARD_COLOR) + (255,))
    draw = ImageDraw.Draw(up)

    def col_center_x(fret: int) -> int:
        return mx + (fret - min_fret) * step_x + step_x // 2

    def row_center_y(string: int) -> int:
        return my + title_h + string * step_y

    # neck: frets sit on the right edge of each column, the nut right of column 0
    top, bottom = row_center_y(0), row_center_y(STRING_COUNT - 1)
    for fret in range(min_fret, max_fret + 1):
        x = mx + (fret - min_fret + 1) * step_x
        colour = NUT_COLOR if fret == 0 else FRET_COLOR
        draw.line([(x, top), (x, bottom)], fill=colour, width=(6 if fret == 0 else 2) * S)
    for string in range(STRING_COUNT):
        y = row_center_y(string)
        start_x = mx + (step_x if min_fret == 0 else 0)
        draw.line([(start_x, y), (mx + cols * step_x, y)], fill=STRING_COLOR, width=(1 + string // 2) * S)
    inlay_y = (top + bottom) // 2
    r = 8 * S
    for fret in range(max(1, min_fret), max_fret + 1):
        cx = col_center_x(fret)
        if fret in INLAY_FRETS:
            draw.ellipse([cx - r, inlay_y - r, cx + r, inlay_y + r], fill=FRET_COLOR)
        elif fret in DOUBLE_INLAY_FRETS:
            for dy in (-step_y, step_y):
                draw.ellipse([cx - r, inlay_y + dy - r, cx + r, inlay_y + dy + r], fill=FRET_COLOR)

    small = _load_font(font_path, font_size * S // 2)
    for string, name in enumerate(STRING_NAMES):
        draw.text((mx // 3, row_center_y(string) - font_size * S // 4), name, font=small, fill=STRING_COLOR)
    if title:
        draw.text((mx, my // 2), title, font=_load_font(font_path, font_size * S), fill=default_text_color)

    def_box_w, def_box_h = box_size[0] * S, box_size[1] * S
    rad = (box_radius + 1) * S
    d_text = parse_color(default_text_color, (0, 0, 0))
    d_outline = parse_color(default_outline, (0, 0, 0))
    items = _normalize_labels(labels, default_fill=(255, 238, 153), default_text=d_text,
                              default_outline=d_outline)

    for lab in items:
        string, fret = lab["rc"]
        if not (0 <= string < STRING_COUNT and min_fret <= fret <= max_fret):
            continue
        cx, cy = col_center_x(fret), row_center_y(string)
        x0, y0 = cx - def_box_w // 2, cy - def_box_h // 2
        x1, y1 = x0 + def_box_w, y0 + def_box_h
        bw = max(1, int(round((lab["border_width"] or outline_width) * S)))
        fills = [adjust_hsl(c, lab["sat_mult"], lab["light_add"]) for c in lab["fills"]]

        if lab["blend"] == "darken":
            overlay = up.copy()
            ImageDraw.Draw(overlay).rounded_rectangle([x0, y0, x1, y1], radius=rad, fill=fills[0])
            up = ImageChops.darker(up, overlay)
            draw = ImageDraw.Draw(up)
        else:
            # one band per fill, clipped to the rounded box
            w, h = x1 - x0, y1 - y0
            bands = Image.new("RGBA", (w, h), (0, 0, 0, 0))
            bd = ImageDraw.Draw(bands)
            n = len(fills)
            for i, c in enumerate(fills):
                bd.rectangle([i * w // n, 0, (i + 1) * w // n, h], fill=c)
            mask = Image.new("L", (w, h), 0)
            ImageDraw.Draw(mask).rounded_rectangle((0, 0, w - 1, h - 1), radius=rad, fill=255)
            up.paste(bands, (x0, y0), mask)
        draw.rounded_rectangle([x0, y0, x1, y1], radius=rad, fill=None, outline=lab["outline"], width=bw)

        if lab["text"]:
            font = _load_font(font_path, (lab["font_size"] or font_size) * S)
            bbox = draw.textbbox((0, 0), lab["text"], font=font)
            tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
            tx = x0 + (def_box_w - tw) // 2 - bbox[0]
            ty = y0 + (def_box_h - th) // 2 - bbox[1]
            draw.text((tx, ty), lab["text"], font=font, fill=lab["text_color"])

    # Downsample (AA)
    result = up.resize((W // S, H // S), Image.LANCZOS) if S > 1 else up
    result.save(output_path)
    return output_path


def chord_labels(view: ChordView, show_pentatonic=False, show_all_notes=False,
                 max_fret: int = TOTAL_FRETS) -> List[Label]:
    """Labels for a CAGED chord: shape dots, open strings, optional overlays."""
    labels = []
    for string in range(STRING_COUNT):
        for fret in range(max_fret + 1):
            shapes = view.shapes_at(string, fret) if fret > 0 else view.open_shapes_at(string)
            if shapes:
                style = resolve_style(shapes, view.quality)
                root = view.is_root_at(string, fret)
                labels.append({
                    "rc": (string, fret),
                    "text": "R" if root else "",
                    "fill": list(style.colors),
                    "border_width": 4 if root else 2,
                })
            elif show_pentatonic and view.is_scale_tone_at(string, fret):
                # scale tones outside the chord are drawn muted
                labels.append({
                    "rc": (string, fret),
                    "text": note_name_at(string, fret),
                    "fill": "#FFFFFF",
                    "sat": 0.2,
                    "light": -0.1,
                    "border_width": 1,
                    "outline": "#999999",
                    "text_color": "#666666",
                    "font_size": 24,
                })
            elif show_all_notes and is_natural_note_at(string, fret):
                labels.append({
                    "rc": (string, fret),
                    "text": note_name_at(string, fret),
                    "fill": "#FFFFFF",
                    "blend": "darken",
                    "border_width": 1,
                    "outline": "#999999",
                    "text_color": "#666666",
                    "font_size": 24,
                })
    return labels


def mode_labels(view: ModeView, degrees=False, max_fret: int = TOTAL_FRETS) -> List[Label]:
    """Every position of the mode, coloured by scale degree, roots outlined heavier."""
    pattern = calculate_mode_pattern(view.mode, view.root, max_fret)
    labels = []
    for p in pattern.positions:
        degree = scale_degree(view.mode, p.interval)
        labels.append({
            "rc": (p.string, p.fret),
            "text": str(degree) if degrees else p.note,
            "fill": degree_colors[degree],
            "sat": 1.1 if p.is_root else 1.0,
            "border_width": 4 if p.is_root else 2,
        })
    return labels


def noteboard_labels(max_fret: int = TOTAL_FRETS) -> List[Label]:
    """Every note on the neck; naturals coloured by their degree in C major, sharps greyed."""
    labels = []
    for string in range(STRING_COUNT):
        for fret in range(max_fret + 1):
            name = note_name_at(string, fret)
            if is_natural_note_at(string, fret):
                degree = scale_degree('ionian', interval('C', name))
                labels.append({"rc": (string, fret), "text": name, "fill": degree_colors[degree],
                               "border_width": 3})
            else:
                labels.append({"rc": (string, fret), "text": name, "fill": "#FFFFFF", "blend": "darken",
                               "border_width": 1, "outline": "#999999", "text_color": "#666666"})
    return labels


def chord_title(view: ChordView) -> str:
    suffix = 'm' if view.quality is Quality.MINOR else ''
    shape = 'all shapes' if view.show_all else f"{view.shape}{suffix} shape at fret {view.offset(view.shape)}"
    return f"{view.chord}{suffix} - {shape}"
