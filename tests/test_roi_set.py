import zipfile

import numpy as np
import pytest

from golddensity import ImageInterface, RegionSelectionError, RoiSetSelector, load_roi_set, save_roi_set
from tests.conftest import square


@pytest.fixture
def regions():
    cell = square("cell", 0, 0, 39, 39)
    pyre = square("pyre", 5, 5, 14, 14)
    return [cell, pyre, cell.difference(pyre, "cell-noPyr")]


def test_roi_set_keeps_order_and_geometry(tmp_path, regions):
    path = tmp_path / "cellA_rois.zip"

    save_roi_set(str(path), regions)
    loaded = load_roi_set(str(path))

    assert zipfile.is_zipfile(path)
    assert [r.label for r in loaded] == ["cell", "pyre", "cell-noPyr"]
    for original, restored in zip(regions, loaded):
        np.testing.assert_array_equal(restored.to_mask((40, 40)), original.to_mask((40, 40)))


def test_roi_set_is_overwritten(tmp_path, regions):
    path = tmp_path / "cellA_rois.zip"
    save_roi_set(str(path), regions)

    save_roi_set(str(path), regions[:1])

    assert [r.label for r in load_roi_set(str(path))] == ["cell"]


def test_roi_set_selector_replays_saved_regions(tmp_path, config, regions):
    save_roi_set(str(tmp_path / "cellA_rois.zip"), regions)
    source = ImageInterface(config, str(tmp_path / "cellA.tif"), str(tmp_path / "cellA_seg.tif"))
    selector = RoiSetSelector()

    pyre = selector.obtain_region_boundary(np.zeros((40, 40)), "pyre", source)

    assert pyre.label == "pyre"
    np.testing.assert_array_equal(pyre.vertices, regions[1].vertices)
    with pytest.raises(RegionSelectionError):
        selector.obtain_region_boundary(np.zeros((40, 40)), "nucleus", source)


def test_roi_set_selector_finds_regions_inside_differences(tmp_path, config, regions):
    save_roi_set(str(tmp_path / "cellA_rois.zip"), [regions[2]])
    source = ImageInterface(config, str(tmp_path / "cellA.tif"), str(tmp_path / "cellA_seg.tif"))

    pyre = RoiSetSelector().obtain_region_boundary(np.zeros((40, 40)), "pyre", source)

    assert pyre.label == "pyre"


def test_roi_set_selector_without_saved_set(tmp_path, config):
    source = ImageInterface(config, str(tmp_path / "cellB.tif"), str(tmp_path / "cellB_seg.tif"))

    with pytest.raises(RegionSelectionError):
        RoiSetSelector().obtain_region_boundary(np.zeros((40, 40)), "cell", source)
