import logging
import os
from typing import Protocol

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.widgets import PolygonSelector

from golddensity.errors import RegionSelectionError
from golddensity.image_interface import ImageInterface
from golddensity.region import RegionBoundary
from golddensity.roi_set import load_roi_set

logger = logging.getLogger(__name__)


class RegionSelector(Protocol):
    """領域の境界を与える呼び出し口

    境界が得られるまでバッチ処理は止まる。テストではスタブに差し替える。
    """

    def obtain_region_boundary(self, image: np.ndarray, label: str, source: ImageInterface) -> RegionBoundary:
        ...


class InteractiveRegionSelector:
    """画像を表示し、ユーザーが多角形で囲んだ範囲を領域とする

    クリックで頂点を置き、始点をクリックして多角形を閉じたあとウィンドウを閉じると確定する。
    """

    def __init__(self, line_color: str = "r"):
        self.line_color = line_color

    def obtain_region_boundary(self, image: np.ndarray, label: str, source: ImageInterface) -> RegionBoundary:
        logger.info("Waiting for outline of '%s' on %s", label, source.filename)
        vertices: list[tuple[float, float]] = []

        def on_select(verts):
            vertices[:] = verts

        fig, ax = plt.subplots(figsize=(10, 8))
        ax.imshow(image, cmap="gray")
        ax.set_title(f"{source.filename}: outline '{label}', then close the window")
        # ウィジェットへの参照を保持しないとイベントを受け取れない
        selector = PolygonSelector(ax, on_select, props=dict(color=self.line_color, linestyle="-", linewidth=2))
        plt.show(block=True)
        selector.disconnect_events()
        plt.close(fig)

        if len(vertices) < 3:
            raise RegionSelectionError(f"No outline drawn for '{label}' on {source.filename}")
        return RegionBoundary(label, vertices)


class RoiSetSelector:
    """保存済みのROIセット (<name>_rois.zip) から同じラベルの領域を読み出す

    一度手作業で囲んだフォルダを、条件を変えて再解析するときに使う。
    """

    def __init__(self):
        self._cache: dict[str, dict[str, RegionBoundary]] = {}

    def obtain_region_boundary(self, image: np.ndarray, label: str, source: ImageInterface) -> RegionBoundary:
        path = source.roi_set_path
        if path not in self._cache:
            if not os.path.isfile(path):
                raise RegionSelectionError(f"ROI set not found: {path}")
            self._cache[path] = self._index(load_roi_set(path))

        regions = self._cache[path]
        if label not in regions:
            raise RegionSelectionError(f"ROI set {path} has no region '{label}'")
        return regions[label]

    @staticmethod
    def _index(regions: list[RegionBoundary]) -> dict[str, RegionBoundary]:
        # 差集合の領域は除外側の領域も辿って登録する
        indexed: dict[str, RegionBoundary] = {}
        pending = list(regions)
        while pending:
            region = pending.pop(0)
            indexed.setdefault(region.label, region)
            pending.extend(region.excluded)
        return indexed
