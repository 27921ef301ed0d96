import numpy as np
from scipy import ndimage as ndi
from skimage.filters import threshold_otsu
from skimage.measure import label, regionprops

from golddensity.config import Config
from golddensity.region import RegionBoundary


def bandpass_filter(img: np.ndarray, large_px: float, small_px: float) -> np.ndarray:
    """FFTによるガウシアン・バンドパスフィルタ

    large_px より大きい構造と small_px より小さい構造を周波数空間で減衰させ、逆FFTで画像に戻す。
    直流成分は残すので画像の平均輝度は変わらない。

    Parameters
    ----------
    img : np.ndarray
        2次元の画像
    large_px : float
        残す構造の最大サイズ (ピクセル)
    small_px : float
        残す構造の最小サイズ (ピクセル)

    Returns
    -------
    np.ndarray
        フィルタ後の画像 (float64)
    """
    if small_px <= 0 or large_px <= small_px:
        raise ValueError(f"Invalid bandpass range: small={small_px}, large={large_px}")

    data = img.astype(np.float64)
    fy = np.fft.fftfreq(data.shape[0])[:, None]
    fx = np.fft.fftfreq(data.shape[1])[None, :]
    freq = np.sqrt(fx**2 + fy**2)  # cycles/pixel

    highpass = 1.0 - np.exp(-((freq * large_px) ** 2))
    lowpass = np.exp(-((freq * small_px) ** 2))
    kernel = highpass * lowpass
    kernel[0, 0] = 1.0

    return np.real(np.fft.ifft2(np.fft.fft2(data) * kernel))


class RegionMeasurer:
    """セグメンテーションマスク上で領域ごとの面積と粒子数を測定するクラス"""

    def __init__(self, config: Config):
        self.config = config

    def particle_foreground(self, image: np.ndarray) -> np.ndarray:
        """粒子の前景 (二値画像) を求める

        値が2種類以下の画像はそのまま二値マスクとして扱い、それ以外は大津の二値化を行う。
        """
        data = image
        if self.config.APPLY_BANDPASS:
            data = bandpass_filter(data, self.config.FILTER_LARGE_PX, self.config.FILTER_SMALL_PX)

        values = np.unique(data)
        if values.size <= 1:
            return np.zeros(data.shape, dtype=bool)
        if values.size == 2:
            binary = data == values[0] if self.config.DARK_PARTICLES else data == values[1]
        else:
            thresh = threshold_otsu(data)
            binary = data <= thresh if self.config.DARK_PARTICLES else data > thresh

        if self.config.FILL_HOLES:
            binary = ndi.binary_fill_holes(binary)
        return binary

    def count_particles(self, foreground: np.ndarray, region_mask: np.ndarray) -> int:
        """重心が領域内にあり、大きさが条件を満たす粒子の数を数える"""
        min_area = self.config.MIN_PARTICLE_AREA_PX
        max_area = self.config.MAX_PARTICLE_AREA_PX

        count = 0
        for prop in regionprops(label(foreground, connectivity=2)):
            if prop.area < min_area or (max_area is not None and prop.area > max_area):
                continue
            r, c = prop.centroid
            if region_mask[int(round(r)), int(round(c))]:
                count += 1
        return count

    def measure(self, image: np.ndarray, region: RegionBoundary) -> tuple[float, int]:
        """領域の面積と粒子数を返す

        Parameters
        ----------
        image : np.ndarray
            粒子検出に使う画像 (セグメンテーションマスク)
        region : RegionBoundary
            測定する領域

        Returns
        -------
        area : float
            領域の面積 (ピクセル数 x PIXEL_SIZE^2)
        particle_count : int
            領域内の粒子数
        """
        region_mask = region.to_mask(image.shape)
        area = float(np.count_nonzero(region_mask)) * self.config.PIXEL_SIZE**2
        particle_count = self.count_particles(self.particle_foreground(image), region_mask)
        return area, particle_count
