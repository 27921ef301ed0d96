import csv
import logging
import math
import numbers
import os

import matplotlib.pyplot as plt
import numpy as np

from golddensity.config import Config
from golddensity.errors import ZeroAreaError
from golddensity.region import RegionRecord
from golddensity.utils import format_number

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ("Count", "Mean", "Median", "Standard Deviation", "Min", "Max", "CV")


def summarize(values: list[float]) -> dict[str, float]:
    """密度の基本統計量

    標準偏差は標本標準偏差 (データが1個なら0)。平均が0のときCVは0とする。
    """
    data = np.asarray(values, dtype=np.float64)
    mean = float(data.mean())
    std = float(data.std(ddof=1)) if data.size > 1 else 0.0
    return {
        "Count": int(data.size),
        "Mean": mean,
        "Median": float(np.median(data)),
        "Standard Deviation": std,
        "Min": float(data.min()),
        "Max": float(data.max()),
        "CV": std / mean if mean != 0 else 0.0,
    }


class DensityTable:
    """領域ごとの (面積, 粒子数) から密度を計算し、測定順に保持する表

    1回のバッチ処理の間だけ使われ、最後に一度だけCSVへ書き出される。
    """

    def __init__(self, config: Config | None = None):
        self.config = config if config is not None else Config()
        self.records: list[RegionRecord] = []

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def add_region(self, label: str, area: float, particle_count: int, image: str | None = None) -> RegionRecord:
        """領域の測定値を追加する

        Parameters
        ----------
        label : str
            領域名 (例: "pyre", "cell-noPyr")
        area : float
            領域の面積 (正の実数)
        particle_count : int
            領域内の粒子数 (0以上の整数)
        image : str | None = None
            測定した画像の名前。CSVには出力しない

        Returns
        -------
        RegionRecord
            追加した行

        Raises
        ------
        ZeroAreaError
            面積が0のとき。表には何も追加しない
        ValueError
            面積が負・非有限、または粒子数が負・非整数のとき
        """
        if isinstance(particle_count, bool) or not isinstance(particle_count, numbers.Integral):
            raise ValueError(f"particle_count must be an integer, got {particle_count!r}")
        if particle_count < 0:
            raise ValueError(f"particle_count must be non-negative, got {particle_count}")
        area = float(area)
        if not math.isfinite(area) or area < 0:
            raise ValueError(f"area must be a finite positive number, got {area}")
        if area == 0:
            raise ZeroAreaError(label)

        record = RegionRecord(label, area, int(particle_count), int(particle_count) / area, image)
        self.records.append(record)
        return record

    def rows(self) -> list[tuple[str, int, float, float]]:
        return [record.as_row() for record in self.records]

    def densities_by_label(self) -> dict[str, list[float]]:
        """ラベルごとの密度のリスト (ラベルは最初に現れた順)"""
        grouped: dict[str, list[float]] = {}
        for record in self.records:
            grouped.setdefault(record.label, []).append(record.density)
        return grouped

    def summary_by_label(self) -> dict[str, dict]:
        return {label: summarize(values) for label, values in self.densities_by_label().items()}

    def export(self, destination_path: str) -> str:
        """表をCSVとして書き出す (既存のファイルは上書き)

        列順は ラベル, 粒子数, 面積, 密度 で固定。同じ表を同じパスに何度書き出しても同一のバイト列になる。
        """
        with open(destination_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(self.config.RESULTS_HEADER)
            for label, count, area, density in self.rows():
                writer.writerow([label, format_number(count), format_number(area), format_number(density)])

        logger.info("Results CSV saved to: %s (%d rows)", destination_path, len(self.records))
        return destination_path

    def export_summary(self, destination_path: str) -> str:
        """ラベルごとの密度の統計量をCSVとして書き出す"""
        with open(destination_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["Label", *SUMMARY_COLUMNS])
            for label, stats in self.summary_by_label().items():
                writer.writerow([label] + [format_number(stats[column]) for column in SUMMARY_COLUMNS])

        logger.info("Summary CSV saved to: %s", destination_path)
        return destination_path

    def plot_density_by_label(self, destination_path: str, title: str = "") -> str | None:
        """ラベルごとの密度を箱ひげ図として保存する"""
        grouped = self.densities_by_label()
        if not grouped:
            logger.warning("No regions measured, density plot not written")
            return None

        os.makedirs(os.path.dirname(os.path.abspath(destination_path)), exist_ok=True)
        plt.boxplot(list(grouped.values()))
        plt.xticks(range(1, len(grouped) + 1), list(grouped.keys()))
        if title:
            plt.title(title, fontsize=14)
        plt.ylabel("Density (particles / area)", fontsize=12)
        plt.savefig(destination_path)
        plt.close()
        logger.info("Density plot saved to %s", destination_path)
        return destination_path


def export(table: DensityTable, destination_path: str) -> str:
    """DensityTable.export の関数版"""
    return table.export(destination_path)
