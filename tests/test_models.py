import pytest
from dataclasses import FrozenInstanceError

from mountmaster.constants import (COMMON_PHOTO_SIZES, PAPER_SIZES, LANDSCAPE, PORTRAIT,
                                   MODE_FIXED_BOARD, MODE_CUSTOM_BORDERS)
from mountmaster.geometry import calculate
from mountmaster.models import (MountConfig, BorderConfig, Dimensions, oriented, toggle_orientation,
                                apply_photo_preset, apply_suggestion, to_dict, from_dict)


def test_defaults():
    cfg = MountConfig()
    assert (cfg.photo_width, cfg.photo_height) == (203.2, 254.0)
    assert cfg.board_preset == "A2"
    assert cfg.mode == MODE_FIXED_BOARD
    assert cfg.orientation == PORTRAIT
    assert cfg.manual_borders == BorderConfig(50, 50, 50, 50)
    assert cfg.custom_board == Dimensions(420, 594)


def test_config_is_immutable():
    cfg = MountConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.photo_width = 1
    updated = cfg.update(photo_width=1)
    assert updated.photo_width == 1
    assert cfg.photo_width == 203.2


class TestOrientation:
    def test_toggle_swaps_photo_and_custom_board(self):
        cfg = MountConfig(photo_width=100, photo_height=150, custom_board=Dimensions(300, 500))
        turned = toggle_orientation(cfg)
        assert turned.orientation == LANDSCAPE
        assert (turned.photo_width, turned.photo_height) == (150, 100)
        assert turned.custom_board == Dimensions(500, 300)

    def test_toggle_is_involutive(self):
        cfg = MountConfig(photo_width=123.4, photo_height=56.7, custom_board=Dimensions(321, 654))
        assert toggle_orientation(toggle_orientation(cfg)) == cfg

    def test_preset_board_does_not_drift(self):
        cfg = MountConfig(board_preset="A3")
        for _ in range(3):
            cfg = toggle_orientation(cfg)
        assert calculate(cfg).board_size == Dimensions(420, 297)
        cfg = toggle_orientation(cfg)
        assert calculate(cfg).board_size == Dimensions(297, 420)

    @pytest.mark.parametrize("size", PAPER_SIZES)
    def test_oriented(self, size):
        w, h = oriented(size, PORTRAIT)
        assert w <= h
        lw, lh = oriented(size, LANDSCAPE)
        assert (lw, lh) == (h, w)

    def test_oriented_square(self):
        assert oriented(Dimensions(200, 200), LANDSCAPE) == (200, 200)


class TestPhotoPreset:
    def test_portrait(self):
        eight_ten = COMMON_PHOTO_SIZES[2]
        cfg = apply_photo_preset(MountConfig(photo_width=1, photo_height=1), eight_ten)
        assert (cfg.photo_width, cfg.photo_height) == (203.2, 254)

    def test_landscape(self):
        four_six = COMMON_PHOTO_SIZES[0]
        cfg = apply_photo_preset(MountConfig(orientation=LANDSCAPE), four_six)
        assert (cfg.photo_width, cfg.photo_height) == (152.4, 101.6)


class TestSuggestion:
    def test_overlay_forces_custom_borders(self):
        suggested = {"photo_border": 5.0, "mount_offset": 10.0,
                     "manual_borders": BorderConfig(top=60, bottom=75, left=55, right=55)}
        cfg = apply_suggestion(MountConfig(), suggested)
        assert cfg.mode == MODE_CUSTOM_BORDERS
        assert cfg.photo_border == 5.0
        assert cfg.mount_offset == 10.0
        assert cfg.manual_borders == BorderConfig(60, 75, 55, 55)
        # Untouched fields survive
        assert cfg.photo_width == 203.2
        assert cfg.underlap == 12.7

    def test_partial_overlay_keeps_current_values(self):
        base = MountConfig(manual_borders=BorderConfig(1, 2, 3, 4))
        cfg = apply_suggestion(base, {"manual_borders": {"top": 9, "bottom": None}})
        assert cfg.manual_borders == BorderConfig(9, 2, 3, 4)
        assert cfg.photo_border == base.photo_border

    def test_numbers_are_not_validated(self):
        cfg = apply_suggestion(MountConfig(), {"photo_border": -3, "mount_offset": 9999})
        assert cfg.photo_border == -3
        assert cfg.mount_offset == 9999


class TestDictForm:
    def test_round_trip(self):
        cfg = MountConfig(photo_width=1.5, board_preset="Custom", custom_board=Dimensions(10, 20),
                          mode=MODE_CUSTOM_BORDERS, manual_borders=BorderConfig(1, 2, 3, 4),
                          orientation=LANDSCAPE)
        assert from_dict(to_dict(cfg)) == cfg

    def test_missing_and_unknown_keys(self):
        cfg = from_dict({"photo_width": "120", "mode": "Sideways", "colour": "red",
                         "manual_borders": {"top": 5}})
        assert cfg.photo_width == 120.0
        assert cfg.mode == MODE_FIXED_BOARD
        assert cfg.manual_borders == BorderConfig(5, 50, 50, 50)

    def test_bad_number_raises(self):
        with pytest.raises(ValueError):
            from_dict({"underlap": "wide"})
