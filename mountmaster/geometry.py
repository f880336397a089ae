"""
Mount geometry.

Maps a MountConfig to the board size and the position/size of the aperture
cut into it. Coordinates are millimetres with the origin at the top-left
corner of the board and y growing downward.

Nothing here clamps: an aperture larger than its board, or an offset bigger
than the margin, yields negative margins that the preview shows as-is.
"""
from dataclasses import dataclass

from .constants import PAPER_SIZES, FALLBACK_BOARD, CUSTOM_PRESET, MODE_FIXED_BOARD
from .models import Dimensions, Position, BorderConfig, oriented


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class MountGeometry:
    board_size: Dimensions
    aperture_position: Position
    aperture_size: Dimensions
    photo_border: float = 0.0
    underlap: float = 0.0

    @property
    def borders(self):
        """Mat widths left around the aperture on each side."""
        ax, ay = self.aperture_position.x, self.aperture_position.y
        return BorderConfig(top=ay,
                            bottom=self.board_size.height - ay - self.aperture_size.height,
                            left=ax,
                            right=self.board_size.width - ax - self.aperture_size.width)

    @property
    def required_paper(self):
        return Dimensions(self.aperture_size.width + 2 * self.underlap,
                          self.aperture_size.height + 2 * self.underlap)

    @property
    def aperture_rect(self):
        return Rect(self.aperture_position.x, self.aperture_position.y,
                    self.aperture_size.width, self.aperture_size.height)

    @property
    def image_rect(self):
        """Printed image area, inset from the aperture edge by the photo border."""
        b = self.photo_border
        return Rect(self.aperture_position.x + b, self.aperture_position.y + b,
                    max(0.0, self.aperture_size.width - 2 * b),
                    max(0.0, self.aperture_size.height - 2 * b))

    @property
    def paper_rect(self):
        """Physical print, extending behind the mount by the underlap."""
        u = self.underlap
        paper = self.required_paper
        return Rect(self.aperture_position.x - u, self.aperture_position.y - u, paper.width, paper.height)


def aperture_size(config):
    return Dimensions(config.photo_width + 2 * config.photo_border,
                      config.photo_height + 2 * config.photo_border)


def find_paper_size(name, sizes=PAPER_SIZES):
    for size in sizes:
        if size.name == name: return size
    return None


def board_size(config, sizes=PAPER_SIZES):
    """Board used in FixedBoard mode: the custom size, or the preset turned to the orientation."""
    if config.board_preset == CUSTOM_PRESET:
        return config.custom_board
    preset = find_paper_size(config.board_preset, sizes)
    if preset is None:
        preset = Dimensions(*FALLBACK_BOARD)
    return Dimensions(*oriented(preset, config.orientation))


def calculate(config, sizes=PAPER_SIZES):
    aperture = aperture_size(config)

    if config.mode == MODE_FIXED_BOARD:
        board = board_size(config, sizes)
        ax = (board.width - aperture.width) / 2
        # Positive offset raises the aperture, weighting the bottom margin
        ay = (board.height - aperture.height) / 2 - config.mount_offset
    else:
        m = config.manual_borders
        board = Dimensions(aperture.width + m.left + m.right, aperture.height + m.top + m.bottom)
        ax, ay = m.left, m.top

    return MountGeometry(board_size=board, aperture_position=Position(ax, ay), aperture_size=aperture,
                         photo_border=config.photo_border, underlap=config.underlap)
