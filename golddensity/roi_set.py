import json
import logging
import zipfile

from golddensity.region import RegionBoundary

logger = logging.getLogger(__name__)


def save_roi_set(path: str, regions: list[RegionBoundary]) -> str:
    """領域のリストをZIPとして保存する (既存のファイルは上書き)

    領域ごとに "<番号>-<ラベル>.json" を1エントリとして書き込む。
    """
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as z:
        for index, region in enumerate(regions):
            z.writestr(f"{index:04d}-{region.label}.json", json.dumps(region.to_dict(), indent=2))

    logger.info("ROI set saved to %s", path)
    return path


def load_roi_set(path: str) -> list[RegionBoundary]:
    """save_roi_set で保存したZIPから領域を保存順に読み込む"""
    with zipfile.ZipFile(path, "r") as z:
        names = sorted(name for name in z.namelist() if name.endswith(".json"))
        return [RegionBoundary.from_dict(json.loads(z.read(name))) for name in names]
