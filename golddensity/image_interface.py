import os

import cv2
import numpy as np

from golddensity.config import Config


class ImageInterface:
    """画像とセグメンテーションマスクの組に関するパスと読み込みを扱うクラス"""

    def __init__(self, config: Config, image_path: str, mask_path: str):
        self.config = config
        self.img_path = image_path
        self.mask_path = mask_path
        self.parent_dir = os.path.dirname(image_path)
        self.filename = os.path.basename(image_path)[: -len(config.IMAGE_EXTENSION)]

    @property
    def roi_set_path(self):
        return os.path.join(self.parent_dir, f"{self.filename}{self.config.ROI_SET_SUFFIX}")

    def load_image(self) -> np.ndarray:
        """表示用の元画像を読み込む"""
        return self._read(self.img_path)

    def load_mask(self) -> np.ndarray:
        """粒子検出に使うセグメンテーションマスクを読み込む"""
        return self._read(self.mask_path)

    @staticmethod
    def _read(path: str) -> np.ndarray:
        # マルチページTIFFは1ページ目のみ使う
        img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        if img is None:
            raise FileNotFoundError(f"Could not read image: {path}")
        if img.ndim == 3:
            img = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY if img.shape[2] == 3 else cv2.COLOR_BGRA2GRAY)
        return img
