import logging
import os

from tqdm import tqdm

from golddensity.config import Config
from golddensity.density import DensityTable
from golddensity.errors import RegionSelectionError, ZeroAreaError
from golddensity.image_interface import ImageInterface
from golddensity.measurement import RegionMeasurer
from golddensity.roi_set import save_roi_set
from golddensity.selection import RegionSelector
from golddensity.utils import format_number, iter_image_pairs

logger = logging.getLogger(__name__)


class BatchDensityAnalyzer:
    """フォルダ内の画像を順に処理し、領域ごとの粒子密度を表にまとめるクラス

    1枚ごとに「細胞」と「ピレノイド」の境界を取得し、ピレノイドと
    細胞からピレノイドを除いた領域 (細胞質) の面積と粒子数を測定する。
    結果の表はバッチ処理ごとに作り直し、各処理ステップに明示的に受け渡す。
    """

    def __init__(self, config: Config, selector: RegionSelector, measurer: RegionMeasurer | None = None):
        """
        Parameters
        ----------
        config : Config
            解析に使用する設定オブジェクト
        selector : RegionSelector
            領域の境界を与えるオブジェクト (対話的な選択、保存済みROIの再生、テスト用スタブ)
        measurer : RegionMeasurer | None = None
            面積と粒子数を測定するオブジェクト。省略時は RegionMeasurer(config)
        """
        self.config = config
        self.selector = selector
        self.measurer = measurer if measurer is not None else RegionMeasurer(config)

    def run_analysis(self, folder: str) -> DensityTable:
        """フォルダ内のすべての (画像, マスク) の組を処理し、結果の表を返す

        画像が読めない場合は、それまでに測定した行をログに残してから例外を送出する。
        """
        table = DensityTable(self.config)
        pairs = list(iter_image_pairs(folder, self.config))
        if not pairs:
            logger.warning("No image/mask pairs found in %s", folder)

        with tqdm(
            total=len(pairs),
            desc="Analyzing",
            leave=True,
            bar_format="{l_bar}{bar} | {n_fmt}/{total_fmt}",
        ) as pbar:
            for image_path, mask_path in pairs:
                pbar.set_description(f"Analyzing '{os.path.basename(image_path)}'")
                try:
                    table = self.process_image(image_path, mask_path, table)
                except OSError:
                    logger.error("Could not process %s; rows measured so far follow", image_path)
                    self._log_rows(table)
                    raise
                pbar.update(1)
            pbar.set_description("Completed")

        return table

    def process_image(self, image_path: str, mask_path: str, table: DensityTable) -> DensityTable:
        """1枚の画像について領域を取得・測定し、表に追加して返す

        領域の選択が中断された画像は警告を出して読み飛ばす。
        面積が0の領域は警告を出してその行だけ省く。
        """
        interface = ImageInterface(self.config, image_path, mask_path)
        image = interface.load_image()
        mask = interface.load_mask()

        try:
            cell = self.selector.obtain_region_boundary(image, self.config.CELL_LABEL, interface)
            pyrenoid = self.selector.obtain_region_boundary(image, self.config.PYRENOID_LABEL, interface)
        except RegionSelectionError as e:
            logger.warning("Skipping %s: %s", interface.filename, e)
            return table

        if (pyrenoid.to_mask(mask.shape) & ~cell.to_mask(mask.shape)).any():
            logger.warning(
                "%s: '%s' extends outside '%s'; the part outside is not subtracted",
                interface.filename,
                pyrenoid.label,
                cell.label,
            )
        cytoplasm = cell.difference(pyrenoid, self.config.CYTOPLASM_LABEL)

        for region in (pyrenoid, cytoplasm):
            area, particle_count = self.measurer.measure(mask, region)
            try:
                table.add_region(region.label, area, particle_count, image=interface.filename)
            except ZeroAreaError as e:
                logger.warning("%s: %s, row omitted", interface.filename, e)

        save_roi_set(interface.roi_set_path, [cell, pyrenoid, cytoplasm])
        return table

    def export_results(self, table: DensityTable, folder: str) -> str:
        """結果の表を <folder>/_GoldResults.csv に書き出す

        書き出しに失敗した場合は、計算済みの行をすべてログに残してから例外を送出する。
        """
        output_path = os.path.join(folder, self.config.RESULTS_FILENAME)
        try:
            return table.export(output_path)
        except OSError:
            logger.error("Could not write %s; computed rows follow", output_path)
            self._log_rows(table)
            raise

    @staticmethod
    def _log_rows(table: DensityTable):
        """計算済みの行を 画像, ラベル, 粒子数, 面積, 密度 のタブ区切りでログに残す"""
        for record in table:
            label, count, area, density = record.as_row()
            logger.error(
                "%s\t%s\t%s\t%s\t%s",
                record.image,
                label,
                format_number(count),
                format_number(area),
                format_number(density),
            )

    def output_summary_csv(self, table: DensityTable, folder: str) -> str:
        return table.export_summary(os.path.join(folder, self.config.SUMMARY_FILENAME))

    def plot_density(self, table: DensityTable, folder: str, add_title: bool = True) -> str | None:
        title = os.path.basename(os.path.normpath(folder)) if add_title else ""
        return table.plot_density_by_label(os.path.join(folder, self.config.PLOT_FILENAME), title)
