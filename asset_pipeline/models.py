"""
データモデル定義

Static Asset Pipelineで使用するデータクラスを定義します。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from .exceptions import ConfigurationError


def normalize_extensions(values: Iterable[str]) -> FrozenSet[str]:
    """
    拡張子の集合を正規化

    前後の空白と先頭の「.」を除去し、小文字に揃えます。空の要素は除外します。
    """
    if isinstance(values, str):
        raise ConfigurationError(f"拡張子はリストで指定してください: {values!r}")

    normalized = set()
    for value in values:
        if not isinstance(value, str):
            raise ConfigurationError(f"拡張子は文字列で指定してください: {value!r}")
        ext = value.strip()
        if ext.startswith('.'):
            ext = ext[1:]
        if ext:
            normalized.add(ext.lower())
    return frozenset(normalized)


@dataclass(frozen=True)
class PipelineConfig:
    """アセットパイプライン設定"""
    static_dirs: Tuple[Path, ...]
    output_dir: Path
    fingerprint: bool = True
    manifest_file: Optional[Path] = None  # output_dirからの相対パス（絶対パスも可）
    copy_extensions: FrozenSet[str] = frozenset()  # 小文字・ドットなし
    optimize_extensions: FrozenSet[str] = frozenset()  # 現状は未使用
    copy_static: bool = True
    optimize_images: bool = False
    fail_on_collision: bool = False
    max_workers: int = 1
    digest_algorithm: str = 'md5'

    def __post_init__(self):
        for name in ('copy_extensions', 'optimize_extensions'):
            object.__setattr__(self, name, normalize_extensions(getattr(self, name)))

    @property
    def manifest_path(self) -> Optional[Path]:
        """マニフェストの出力先（未設定の場合はNone）"""
        if self.manifest_file is None:
            return None
        return self.output_dir / self.manifest_file


@dataclass(frozen=True)
class DiscoveredFile:
    """検出されたアセットファイル"""
    path: Path
    extension: Optional[str]  # 最後の「.」以降（「.」がなければNone）


@dataclass(frozen=True)
class ProcessedAsset:
    """処理済みアセットの記録"""
    source_path: Path
    dest_path: Path
    original_name: str
    fingerprinted_name: str
    digest: Optional[str]  # フィンガープリント無効時はNone


@dataclass(frozen=True)
class PipelineResult:
    """パイプライン処理結果"""
    files: Tuple[ProcessedAsset, ...]
    manifest: Dict[str, str]
    total: int
    bytes: int
    manifest_path: Optional[Path] = None
    collisions: Tuple[str, ...] = field(default_factory=tuple)
