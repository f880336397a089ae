from dataclasses import dataclass, field, replace, asdict

from .constants import (DEFAULTS, LANDSCAPE, PORTRAIT, MODE_FIXED_BOARD, MODE_CUSTOM_BORDERS,
                        PaperSize)

MODES = (MODE_FIXED_BOARD, MODE_CUSTOM_BORDERS)
ORIENTATIONS = (PORTRAIT, LANDSCAPE)


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float

    def swapped(self):
        return Dimensions(self.height, self.width)


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class BorderConfig:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0


def _default_custom_board():
    return Dimensions(*DEFAULTS["custom_board"])


def _default_manual_borders():
    return BorderConfig(*DEFAULTS["manual_borders"])


@dataclass(frozen=True)
class MountConfig:
    """
    Everything the user controls, in millimetres.

    Instances are never mutated: every edit produces a new config through
    ``update`` or one of the transition helpers below, and the geometry is
    recomputed from scratch each time.
    """
    photo_width: float = DEFAULTS["photo_width"]
    photo_height: float = DEFAULTS["photo_height"]
    photo_border: float = DEFAULTS["photo_border"]
    underlap: float = DEFAULTS["underlap"]
    mount_offset: float = DEFAULTS["mount_offset"]
    min_border_width: float = DEFAULTS["min_border_width"]
    board_preset: str = DEFAULTS["board_preset"]
    custom_board: Dimensions = field(default_factory=_default_custom_board)
    mode: str = DEFAULTS["mode"]
    manual_borders: BorderConfig = field(default_factory=_default_manual_borders)
    orientation: str = DEFAULTS["orientation"]

    def update(self, **changes):
        return replace(self, **changes)


def oriented(size, orientation):
    """Returns (width, height) of a paper size turned to match the orientation."""
    w, h = size.width, size.height
    if orientation == LANDSCAPE:
        return max(w, h), min(w, h)
    return min(w, h), max(w, h)


def toggle_orientation(config):
    new_orientation = PORTRAIT if config.orientation == LANDSCAPE else LANDSCAPE
    return replace(config,
                   orientation=new_orientation,
                   photo_width=config.photo_height,
                   photo_height=config.photo_width,
                   custom_board=config.custom_board.swapped())


def apply_photo_preset(config, size: PaperSize):
    w, h = oriented(size, config.orientation)
    return replace(config, photo_width=w, photo_height=h)


def apply_suggestion(config, suggested):
    """
    Overlays an advisor suggestion onto the config.

    ``suggested`` is a partial mapping with any of ``photo_border``,
    ``mount_offset`` and ``manual_borders`` (a BorderConfig or a dict of the
    four sides). Absent keys keep their current value; mode always becomes
    CustomBorders since the suggestion is expressed as explicit margins.
    """
    changes = {"mode": MODE_CUSTOM_BORDERS}
    for key in ("photo_border", "mount_offset"):
        if suggested.get(key) is not None:
            changes[key] = float(suggested[key])

    borders = suggested.get("manual_borders")
    if isinstance(borders, BorderConfig):
        changes["manual_borders"] = borders
    elif borders:
        current = asdict(config.manual_borders)
        current.update({k: float(v) for k, v in borders.items() if k in current and v is not None})
        changes["manual_borders"] = BorderConfig(**current)
    return replace(config, **changes)


def to_dict(config):
    return asdict(config)


def from_dict(data):
    """Builds a config from ``to_dict`` output, filling gaps from defaults."""
    base = MountConfig()
    known = {k: v for k, v in data.items() if k in base.__dataclass_fields__}

    board = known.pop("custom_board", None)
    if isinstance(board, dict):
        known["custom_board"] = Dimensions(float(board.get("width", base.custom_board.width)),
                                           float(board.get("height", base.custom_board.height)))
    borders = known.pop("manual_borders", None)
    if isinstance(borders, dict):
        sides = asdict(base.manual_borders)
        sides.update({k: float(v) for k, v in borders.items() if k in sides})
        known["manual_borders"] = BorderConfig(**sides)

    for key in ("photo_width", "photo_height", "photo_border", "underlap", "mount_offset", "min_border_width"):
        if key in known: known[key] = float(known[key])
    if known.get("mode") not in MODES: known.pop("mode", None)
    if known.get("orientation") not in ORIENTATIONS: known.pop("orientation", None)
    if "board_preset" in known: known["board_preset"] = str(known["board_preset"])
    return replace(base, **known)
