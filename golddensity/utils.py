import logging
import os
from typing import Iterator

import numpy as np

from golddensity.config import Config

logger = logging.getLogger(__name__)


def mask_path_for(image_path: str, config: Config) -> str:
    """画像ファイルに対応するセグメンテーションマスクのパスを返す"""
    base = image_path[: -len(config.IMAGE_EXTENSION)]
    return f"{base}{config.MASK_SUFFIX}{config.IMAGE_EXTENSION}"


def iter_image_pairs(folder: str, config: Config) -> Iterator[tuple[str, str]]:
    """フォルダ内の (画像, マスク) の組をファイル名順に返す

    拡張子とマスクの接尾辞は大文字小文字を区別して完全一致で判定する。
    マスク自身 (<name>_seg.tif) は画像として扱わない。
    対応するマスクがない画像はエラーにせず読み飛ばす。
    """
    mask_ending = f"{config.MASK_SUFFIX}{config.IMAGE_EXTENSION}"
    for name in sorted(os.listdir(folder)):
        if not name.endswith(config.IMAGE_EXTENSION) or name.endswith(mask_ending):
            continue
        image_path = os.path.join(folder, name)
        if not os.path.isfile(image_path):
            continue
        mask_path = mask_path_for(image_path, config)
        if not os.path.isfile(mask_path):
            logger.debug("No mask for %s, skipping", name)
            continue
        yield image_path, mask_path


def format_number(value) -> str:
    """CSV出力用の数値表記

    整数はそのまま、実数は値を一意に表す最短の固定小数点表記にする (例: 50.0 -> "50", 0.2 -> "0.2")。
    """
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return str(int(value))
    return np.format_float_positional(float(value), trim="-")
