"""
背景移除功能

色鍵去背、邊緣柔化與完整的透明 PNG 輸出管線
"""

from .chroma_key import color_distance, parse_hex_color, remove_key_color
from .edge_softening import soften_edges
from .pipeline import OUTPUT_FORMAT, run_background_removal


__all__ = [
    "OUTPUT_FORMAT",
    "color_distance",
    "parse_hex_color",
    "remove_key_color",
    "run_background_removal",
    "soften_edges",
]
