class Config:
    """設定値を管理するクラス"""
    # --- ファイル命名規則 ---
    IMAGE_EXTENSION = ".tif"
    MASK_SUFFIX = "_seg"
    ROI_SET_SUFFIX = "_rois.zip"
    RESULTS_FILENAME = "_GoldResults.csv"
    SUMMARY_FILENAME = "_GoldSummary.csv"
    PLOT_FILENAME = "_GoldDensity.png"

    # --- 領域ラベル ---
    CELL_LABEL = "cell"
    PYRENOID_LABEL = "pyre"
    CYTOPLASM_LABEL = "cell-noPyr"

    # --- 物理パラメータ ---
    PIXEL_SIZE = 1.0  # 1ピクセルあたりの長さ（面積はこの2乗倍）

    # --- FFTバンドパスフィルタ ---
    APPLY_BANDPASS = False
    FILTER_LARGE_PX = 40  # これより大きい構造を除去
    FILTER_SMALL_PX = 3   # これより小さい構造を除去

    # --- 粒子検出パラメータ ---
    DARK_PARTICLES = False
    FILL_HOLES = True
    MIN_PARTICLE_AREA_PX = 1
    MAX_PARTICLE_AREA_PX = None

    # --- 出力設定 ---
    RESULTS_HEADER = ("ImageRois", "nbGold", "Area", "Density")
