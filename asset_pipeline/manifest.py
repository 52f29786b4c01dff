"""
アセットマニフェスト

処理済みアセットから「元のファイル名 -> 配信用ファイル名」のマニフェストを
構築し、JSON形式で保存・読み込みする機能を提供します。
テンプレート側から使う解決関数 resolve もここで提供します。
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .exceptions import DuplicateAssetError, FileOperationError, ValidationError
from .models import PipelineResult, ProcessedAsset


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestBuild:
    """マニフェスト構築結果"""
    manifest: Dict[str, str]
    collisions: Tuple[str, ...]  # 複数回登録されたファイル名（初出順）


def build_manifest(records: Iterable[ProcessedAsset],
                   fail_on_collision: bool = False) -> ManifestBuild:
    """
    処理済みアセットからマニフェストを構築

    記録の順に登録し、同じファイル名が再び現れた場合は後の記録で上書きします。

    Args:
        records: 処理済みアセット（検出順）
        fail_on_collision: ファイル名の衝突をエラーにする場合True

    Returns:
        マニフェスト構築結果

    Raises:
        DuplicateAssetError: fail_on_collisionがTrueで衝突があった場合
    """
    manifest: Dict[str, str] = {}
    sources: Dict[str, Path] = {}
    collisions: List[str] = []

    for record in records:
        name = record.original_name
        if name in manifest:
            message = (f"同名アセットが重複しています: {name} "
                       f"({sources[name]} -> {record.source_path})")
            if fail_on_collision:
                raise DuplicateAssetError(message, name)
            logger.warning(message)
            if name not in collisions:
                collisions.append(name)
        manifest[name] = record.fingerprinted_name
        sources[name] = record.source_path

    return ManifestBuild(manifest=manifest, collisions=tuple(collisions))


def summarize(records: Sequence[ProcessedAsset], build: ManifestBuild,
              manifest_path: Optional[Path] = None) -> PipelineResult:
    """
    処理結果の集計

    Args:
        records: 処理済みアセット
        build: マニフェスト構築結果
        manifest_path: 保存したマニフェストのパス

    Returns:
        パイプライン処理結果

    Raises:
        FileOperationError: ソースファイルのサイズ取得に失敗した場合
    """
    total_bytes = 0
    for record in records:
        try:
            total_bytes += record.source_path.stat().st_size
        except OSError as e:
            raise FileOperationError(
                f"ファイルサイズ取得エラー: {record.source_path} - {e}",
                record.source_path) from e

    return PipelineResult(
        files=tuple(records),
        manifest=build.manifest,
        total=len(records),
        bytes=total_bytes,
        manifest_path=manifest_path,
        collisions=build.collisions
    )


def write_manifest(manifest: Mapping[str, str], output_path: Path) -> None:
    """
    マニフェストをJSON形式で保存

    既存ファイルとのマージは行わず、毎回上書きします。

    Args:
        manifest: マニフェスト
        output_path: 保存先パス

    Raises:
        FileOperationError: 保存に失敗した場合
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(dict(manifest), f, ensure_ascii=False, indent=2)
    except OSError as e:
        error_msg = f"マニフェスト保存エラー: {output_path} - {e}"
        logger.error(error_msg)
        raise FileOperationError(error_msg, output_path) from e

    logger.debug(f"マニフェストを保存しました: {output_path} ({len(manifest)}件)")


def load_manifest(path: Path) -> Dict[str, str]:
    """
    保存されたマニフェストを読み込み

    Args:
        path: マニフェストファイルのパス

    Returns:
        マニフェスト

    Raises:
        FileOperationError: 読み込みに失敗した場合
        ValidationError: 内容が文字列同士のマッピングでない場合
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise FileOperationError(f"マニフェスト読み込みエラー: {path} - {e}", path) from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"マニフェストの形式が不正です: {path} - {e}") from e

    if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
        raise ValidationError(f"マニフェストの形式が不正です: {path}")
    return data


def resolve(manifest: Mapping[str, str], name: str) -> str:
    """
    元のファイル名を配信用ファイル名に解決

    マニフェストに存在しない場合は元のファイル名をそのまま返します。
    """
    return manifest.get(name, name)
