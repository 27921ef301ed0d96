import matplotlib

matplotlib.use("Agg")

import cv2
import numpy as np
import pytest

from golddensity import Config, RegionBoundary


def square(label, x0, y0, x1, y1):
    return RegionBoundary(label, [(x0, y0), (x1, y0), (x1, y1), (x0, y1)])


def blob_mask(shape, centers, half=1):
    """center ごとに (2*half+1) 四方の粒子を描いた二値マスク"""
    mask = np.zeros(shape, dtype=np.uint8)
    for x, y in centers:
        mask[y - half : y + half + 1, x - half : x + half + 1] = 255
    return mask


def write_pair(folder, name, image, mask=None):
    cv2.imwrite(str(folder / f"{name}.tif"), image)
    if mask is not None:
        cv2.imwrite(str(folder / f"{name}_seg.tif"), mask)


class StubSelector:
    """ラベルごとに固定の境界を返す"""

    def __init__(self, regions):
        self.regions = regions
        self.calls = []

    def obtain_region_boundary(self, image, label, source):
        self.calls.append((source.filename, label))
        return self.regions[label]


class StubMeasurer:
    """ラベルごとに固定の (面積, 粒子数) を返す"""

    def __init__(self, values):
        self.values = values

    def measure(self, image, region):
        return self.values[region.label]


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def cell_regions():
    return {"cell": square("cell", 0, 0, 39, 39), "pyre": square("pyre", 5, 5, 14, 14)}
