class RegionSelectionError(RuntimeError):
    """領域の選択が中断された、または保存済みのROIセットが見つからない"""


class ZeroAreaError(ZeroDivisionError):
    """面積が0の領域に対して密度を計算しようとした"""

    def __init__(self, label: str):
        super().__init__(f"Region '{label}' has zero area; density is undefined")
        self.label = label
