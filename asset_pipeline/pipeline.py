"""
アセットパイプライン管理モジュール

アセットの検出、フィンガープリント付与、コピー、マニフェスト生成までの
一連の処理を管理します。毎回すべてのファイルを処理し直し、前回の状態は
引き継ぎません。
"""

import logging
import time
from dataclasses import replace
from typing import Any, Mapping, Optional

from .config import merge_config
from .copier import AssetCopier
from .exceptions import FileOperationError
from .file_scanner import AssetScanner
from .manifest import build_manifest, summarize, write_manifest
from .models import PipelineConfig, PipelineResult


class AssetPipeline:
    """アセットパイプラインを実行するクラス"""

    def __init__(self, config: PipelineConfig, progress_logger=None):
        """
        AssetPipelineを初期化

        Args:
            config: パイプライン設定
            progress_logger: 進捗表示用のProgressLogger（省略可）
        """
        self.config = config
        self.progress_logger = progress_logger
        self.scanner = AssetScanner()
        self.copier = AssetCopier(
            fingerprint=config.fingerprint,
            algorithm=config.digest_algorithm,
            max_workers=config.max_workers
        )
        self.logger = logging.getLogger(__name__)

    def process_assets(self) -> PipelineResult:
        """
        アセットを検出してコピーし、マニフェストを構築

        マニフェストファイルは書き込みません。

        Returns:
            パイプライン処理結果

        Raises:
            FileOperationError: 読み書きに失敗した場合（処理はその時点で中断）
            DuplicateAssetError: fail_on_collisionが有効で同名アセットがあった場合
        """
        config = self.config
        discovered = self.scanner.scan(config.static_dirs, config.copy_extensions)

        start_time = time.time()
        try:
            records = self.copier.process(discovered, config.output_dir, self.progress_logger)
        except FileOperationError as e:
            if self.progress_logger:
                self.progress_logger.log_error(e.path, "アセット処理を中断しました", e.__cause__)
            raise
        self.logger.debug(f"コピー処理時間: {time.time() - start_time:.2f}秒")

        build = build_manifest(records, fail_on_collision=config.fail_on_collision)
        return summarize(records, build)

    def run(self) -> PipelineResult:
        """
        パイプラインを実行し、設定されていればマニフェストを保存

        copy_staticが無効な場合は何もせず空の結果を返します。

        Returns:
            パイプライン処理結果
        """
        config = self.config
        if not config.copy_static:
            self.logger.info("静的アセットのコピーは無効です")
            return PipelineResult(files=(), manifest={}, total=0, bytes=0)

        if config.optimize_images:
            self.logger.info("画像最適化は未対応のためスキップします")

        if self.progress_logger:
            self.progress_logger.log_processing_start(config.static_dirs, config.output_dir)

        result = self.process_assets()

        manifest_path = config.manifest_path
        if manifest_path is not None:
            write_manifest(result.manifest, manifest_path)
            if self.progress_logger:
                self.progress_logger.log_manifest_written(manifest_path, len(result.manifest))
            result = replace(result, manifest_path=manifest_path)

        if self.progress_logger:
            self.progress_logger.log_processing_complete(result)
        return result


def process_assets(overrides: Optional[Mapping[str, Any]] = None) -> PipelineResult:
    """デフォルト設定に overrides をマージしてアセットを処理（マニフェストは保存しない）"""
    return AssetPipeline(merge_config(overrides)).process_assets()


def copy_static_assets(overrides: Optional[Mapping[str, Any]] = None,
                       progress_logger=None) -> PipelineResult:
    """デフォルト設定に overrides をマージしてパイプラインを実行"""
    return AssetPipeline(merge_config(overrides), progress_logger).run()
