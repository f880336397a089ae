import json

import pytest

from mountmaster.constants import MODE_CUSTOM_BORDERS, LANDSCAPE
from mountmaster.models import MountConfig, BorderConfig, Dimensions
from mountmaster.project import save_project, load_project, ProjectError
from mountmaster.utils import UNIT_MM, UNIT_INCH


def test_save_and_load(tmp_path):
    path = tmp_path / "print.mount"
    cfg = MountConfig(photo_width=300, mode=MODE_CUSTOM_BORDERS, orientation=LANDSCAPE,
                      custom_board=Dimensions(600, 400), manual_borders=BorderConfig(70, 80, 60, 60))
    save_project(str(path), cfg, UNIT_MM)

    data = json.loads(path.read_text())
    assert data["unit"] == UNIT_MM
    assert data["config"]["manual_borders"]["bottom"] == 80

    loaded, unit = load_project(str(path))
    assert loaded == cfg
    assert unit == UNIT_MM


def test_unknown_unit_falls_back_to_inches(tmp_path):
    path = tmp_path / "old.mount"
    path.write_text(json.dumps({"unit": "cubit", "config": {"photo_height": 100}}))
    cfg, unit = load_project(str(path))
    assert unit == UNIT_INCH
    assert cfg.photo_height == 100


@pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"unit": "mm"}', '{"config": {"underlap": "x"}}'])
def test_invalid_files(tmp_path, content):
    path = tmp_path / "bad.mount"
    path.write_text(content)
    with pytest.raises(ProjectError):
        load_project(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(ProjectError):
        load_project(str(tmp_path / "nope.mount"))


def test_unwritable_path(tmp_path):
    with pytest.raises(ProjectError):
        save_project(str(tmp_path / "missing" / "dir" / "x.mount"), MountConfig(), UNIT_MM)
