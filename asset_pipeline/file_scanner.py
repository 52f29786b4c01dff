"""
ファイルスキャナー

ソースディレクトリを再帰的にスキャンしてアセットファイルを検索する機能を提供します。
"""

import logging
from pathlib import Path
from typing import AbstractSet, Iterable, Iterator, Optional

from .models import DiscoveredFile


def extract_extension(filename: str) -> Optional[str]:
    """
    ファイル名から拡張子を取得

    Args:
        filename: ファイル名

    Returns:
        最後の「.」以降の文字列（「.」を含まない場合はNone）
    """
    idx = filename.rfind('.')
    if idx == -1:
        return None
    return filename[idx + 1:]


class AssetScanner:
    """ソースディレクトリをスキャンしてアセットを検索するクラス"""

    def __init__(self):
        """AssetScannerを初期化"""
        self.logger = logging.getLogger(__name__)

    def scan(self, roots: Iterable[Path],
             extensions: AbstractSet[str]) -> Iterator[DiscoveredFile]:
        """
        ソースディレクトリをスキャンしてアセットファイルを順次返す

        ルートの順序は保持され、各ルート内はファイルシステムの列挙順になります。
        拡張子は大文字小文字を区別して比較します。

        Args:
            roots: スキャンするディレクトリ（順序付き）
            extensions: 対象とする拡張子の集合（ドットなし）

        Yields:
            検出されたファイル
        """
        for root in roots:
            root = Path(root)
            if not root.is_dir():
                # 存在しないディレクトリはエラーにせずスキップ
                self.logger.debug(f"ソースディレクトリをスキップ: {root}")
                continue

            for file_path in root.rglob('*'):
                if not file_path.is_file():
                    continue
                discovered = self.inspect(file_path)
                if discovered.extension in extensions:
                    yield discovered

    def inspect(self, file_path: Path) -> DiscoveredFile:
        """ファイルパスからDiscoveredFileを作成"""
        return DiscoveredFile(path=file_path, extension=extract_extension(file_path.name))
