import csv

import numpy as np
import pytest

import main
from golddensity import Config, save_roi_set
from tests.conftest import blob_mask, square, write_pair


def read_rows(path):
    with open(path, newline="") as f:
        return list(csv.reader(f))


@pytest.fixture
def outlined_folder(tmp_path):
    write_pair(tmp_path, "cellA", np.full((40, 40), 128, dtype=np.uint8), blob_mask((40, 40), [(9, 9), (25, 25)]))
    cell = square("cell", 0, 0, 39, 39)
    pyre = square("pyre", 5, 5, 14, 14)
    save_roi_set(str(tmp_path / "cellA_rois.zip"), [cell, pyre, cell.difference(pyre, "cell-noPyr")])
    return tmp_path


def test_replay_with_pixel_size_and_plot(outlined_folder):
    main.main([str(outlined_folder), "--replay", "--pixel-size", "0.5", "--plot"])

    assert read_rows(outlined_folder / Config.RESULTS_FILENAME) == [
        ["ImageRois", "nbGold", "Area", "Density"],
        ["pyre", "1", "25", "0.04"],
        ["cell-noPyr", "1", "375", "0.0026666666666666666"],
    ]
    assert (outlined_folder / Config.SUMMARY_FILENAME).exists()
    assert (outlined_folder / Config.PLOT_FILENAME).exists()


def test_no_summary(outlined_folder):
    main.main([str(outlined_folder), "--replay", "--no-summary"])

    assert read_rows(outlined_folder / Config.RESULTS_FILENAME)[1] == ["pyre", "1", "100", "0.01"]
    assert not (outlined_folder / Config.SUMMARY_FILENAME).exists()
    assert not (outlined_folder / Config.PLOT_FILENAME).exists()


def test_replay_without_saved_outlines_skips_image(tmp_path):
    write_pair(tmp_path, "cellA", np.zeros((40, 40), dtype=np.uint8), np.zeros((40, 40), dtype=np.uint8))

    main.main([str(tmp_path), "--replay"])

    assert read_rows(tmp_path / Config.RESULTS_FILENAME) == [["ImageRois", "nbGold", "Area", "Density"]]


def test_parse_args_defaults():
    args = main.parse_args(["data"])

    assert args.folder == "data"
    assert args.pixel_size == Config.PIXEL_SIZE
    assert not (args.replay or args.bandpass or args.dark_particles or args.no_summary or args.plot)
