"""エクスポートの実行と Cest クラスの出力"""

from .exporter import ExportedTest, Exporter, ExportError, ExportResult, flatten
from .writer import CestWriter

__all__ = [
    "CestWriter",
    "ExportError",
    "ExportResult",
    "ExportedTest",
    "Exporter",
    "flatten",
]
