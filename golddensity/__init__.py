from golddensity.config import Config
from golddensity.errors import RegionSelectionError, ZeroAreaError
from golddensity.region import RegionBoundary, RegionRecord
from golddensity.density import DensityTable, export
from golddensity.image_interface import ImageInterface
from golddensity.measurement import RegionMeasurer, bandpass_filter
from golddensity.roi_set import save_roi_set, load_roi_set
from golddensity.selection import RegionSelector, InteractiveRegionSelector, RoiSetSelector
from golddensity.batch_density_analyzer import BatchDensityAnalyzer
from golddensity.utils import iter_image_pairs, mask_path_for, format_number

__all__ = [
    "Config",
    "RegionSelectionError",
    "ZeroAreaError",
    "RegionBoundary",
    "RegionRecord",
    "DensityTable",
    "export",
    "ImageInterface",
    "RegionMeasurer",
    "bandpass_filter",
    "save_roi_set",
    "load_roi_set",
    "RegionSelector",
    "InteractiveRegionSelector",
    "RoiSetSelector",
    "BatchDensityAnalyzer",
    "iter_image_pairs",
    "mask_path_for",
    "format_number",
]
