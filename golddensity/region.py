from __future__ import annotations

from dataclasses import dataclass, field

import cv2
import numpy as np


@dataclass(eq=False)
class RegionBoundary:
    """画像上の関心領域(ROI)

    多角形の内部から、excluded に含まれる領域の和集合を差し引いた範囲を表す。
    頂点は画素座標 (x, y) で保持する。
    """
    label: str
    vertices: np.ndarray
    excluded: list[RegionBoundary] = field(default_factory=list)

    def __post_init__(self):
        self.vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 2)
        if len(self.vertices) < 3:
            raise ValueError(f"Region '{self.label}' needs at least 3 vertices, got {len(self.vertices)}")

    def difference(self, other: RegionBoundary, label: str | None = None) -> RegionBoundary:
        """自身から other を差し引いた領域を返す

        Parameters
        ----------
        other : RegionBoundary
            差し引く領域
        label : str | None = None
            新しい領域の名前。省略時は自身のラベルを引き継ぐ

        Returns
        -------
        RegionBoundary
            差集合の領域 (元の領域は変更しない)
        """
        return RegionBoundary(
            label if label is not None else self.label,
            self.vertices.copy(),
            [*self.excluded, other],
        )

    def to_mask(self, shape: tuple[int, ...]) -> np.ndarray:
        """領域を指定サイズの二値マスクとして描画する"""
        canvas = np.zeros(shape[:2], dtype=np.uint8)
        pts = np.round(self.vertices).astype(np.int32).reshape((-1, 1, 2))
        cv2.fillPoly(canvas, [pts], 1)
        mask = canvas.astype(bool)
        for region in self.excluded:
            mask &= ~region.to_mask(shape)
        return mask

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "vertices": self.vertices.tolist(),
            "excluded": [region.to_dict() for region in self.excluded],
        }

    @classmethod
    def from_dict(cls, data: dict) -> RegionBoundary:
        return cls(
            data["label"],
            data["vertices"],
            [cls.from_dict(item) for item in data.get("excluded", [])],
        )


@dataclass(frozen=True)
class RegionRecord:
    """1領域分の測定結果"""
    label: str
    area: float
    particle_count: int
    density: float
    image: str | None = None

    def as_row(self) -> tuple[str, int, float, float]:
        """CSVの列順 (ラベル, 粒子数, 面積, 密度) に並べたタプル"""
        return (self.label, self.particle_count, self.area, self.density)
