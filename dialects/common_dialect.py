"""
Defines the common G-code and M-code descriptions shared by every model.

Both the zero-padded and the unpadded spelling of a code are listed,
since program text uses either.
"""
from .base_dialect import BaseDialect


class CommonDialect(BaseDialect):
    def _populate_code_map(self):
        """Populates the code map with generic lathe codes."""
        self.code_map = {
            # Motion
            "G0": "早送り移動",
            "G00": "早送り移動",
            "G1": "直線補間",
            "G01": "直線補間",
            "G2": "円弧補間CW",
            "G02": "円弧補間CW",
            "G3": "円弧補間CCW",
            "G03": "円弧補間CCW",
            "G4": "ドウェル(一時停止)",
            "G04": "ドウェル(一時停止)",
            "G28": "原点復帰",

            # Spindle and coordinate setup
            "G50": "上限回転数設定/スケーリング解除(機種依存)",
            "G92": "座標/ねじ切り関係(機種依存)",

            # Feed and speed modes
            "G94": "送り単位 毎分",
            "G95": "送り単位 毎回転",
            "G96": "定切削速度(CSS)",
            "G97": "回転数指定",

            # Canned cycle return
            "G98": "固定サイクル 復帰:初期位置",
            "G99": "固定サイクル 復帰:R点",

            # Program control
            "M0": "プログラム一時停止",
            "M00": "プログラム一時停止",
            "M1": "条件付停止",
            "M01": "条件付停止",
            "M2": "プログラム終了",
            "M02": "プログラム終了",

            # Spindle
            "M3": "主軸 正転",
            "M03": "主軸 正転",
            "M4": "主軸 逆転",
            "M04": "主軸 逆転",
            "M5": "主軸 停止",
            "M05": "主軸 停止",

            # Coolant
            "M8": "クーラント ON",
            "M08": "クーラント ON",
            "M9": "クーラント OFF",
            "M09": "クーラント OFF",

            # Common but often machine-dependent
            "M10": "チャック クランプ（機種依存）",
            "M11": "チャック アンクランプ（機種依存）",
            "M60": "バーフィーダ制御（機種依存）",
            "M61": "バーフィーダ制御（機種依存）",
            "M62": "バーフィーダ制御（機種依存）",
        }
