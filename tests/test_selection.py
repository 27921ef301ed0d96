import warnings

import matplotlib.pyplot as plt
import numpy as np
import pytest

from golddensity import ImageInterface, InteractiveRegionSelector, RegionSelectionError


def test_interactive_selector_without_outline(tmp_path, config):
    source = ImageInterface(config, str(tmp_path / "cellA.tif"), str(tmp_path / "cellA_seg.tif"))

    # Aggバックエンドではウィンドウが開かず、何も描かれないまま戻る
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        with pytest.raises(RegionSelectionError, match="No outline drawn for 'pyre' on cellA"):
            InteractiveRegionSelector().obtain_region_boundary(np.zeros((40, 40)), "pyre", source)

    assert plt.get_fignums() == []
