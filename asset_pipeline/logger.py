"""
ロギングシステム

Static Asset Pipelineのロギング機能を提供します。
標準出力とファイル出力の両方をサポートし、進捗表示とエラーログを管理します。
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .models import PipelineResult


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False


class ProgressLogger:
    """進捗表示とロギングを管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()
        self._start_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger('asset_pipeline')
        logger.setLevel(logging.DEBUG)

        # 既存のハンドラーを閉じてクリア
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.config.console_level)
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

        if self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
            file_handler.setLevel(self.config.file_level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            logger.addHandler(file_handler)

        return logger

    def log_processing_start(self, source_dirs: Iterable[Path], output_dir: Path):
        """処理開始時のサマリー表示"""
        self._start_time = datetime.now()

        self.logger.info("=" * 60)
        self.logger.info("Static Asset Pipeline - 処理開始")
        self.logger.info("=" * 60)
        self.logger.info(f"開始時刻: {self._start_time.strftime('%Y-%m-%d %H:%M:%S')}")

        self.logger.info("ソースディレクトリ:")
        for source_dir in source_dirs:
            self.logger.info(f"  - {source_dir}")
        self.logger.info(f"出力ディレクトリ: {output_dir}")
        self.logger.info("")

    def log_copy_progress(self, total_files: int, files_processed: int,
                          current_file: Optional[Path] = None):
        """コピー時の進捗表示（verbose時のみ）"""
        if not self.config.verbose:
            return

        if current_file:
            self.logger.info(f"処理中: {current_file}")
        if total_files > 0:
            progress = (files_processed / total_files) * 100
            self.logger.info(f"コピー進捗: {files_processed}/{total_files} ({progress:.1f}%)")

    def log_manifest_written(self, manifest_path: Path, entries: int):
        """マニフェスト保存のログ"""
        self.logger.info(f"マニフェストを保存しました: {manifest_path} ({entries}件)")

    def log_processing_complete(self, result: PipelineResult):
        """処理完了時のサマリー表示"""
        end_time = datetime.now()
        total_time = (end_time - self._start_time).total_seconds() if self._start_time else 0

        self.logger.info("=" * 60)
        self.logger.info("処理完了サマリー")
        self.logger.info("=" * 60)
        self.logger.info(f"終了時刻: {end_time.strftime('%Y-%m-%d %H:%M:%S')}")
        self.logger.info(f"総処理時間: {total_time:.2f}秒")
        self.logger.info("")
        self.logger.info("処理結果:")
        self.logger.info(f"  - コピーしたファイル: {result.total}")
        self.logger.info(f"  - 合計サイズ: {result.bytes:,}bytes")
        self.logger.info(f"  - マニフェスト登録数: {len(result.manifest)}")
        if result.manifest_path:
            self.logger.info(f"  - マニフェスト: {result.manifest_path}")

        if result.collisions:
            self.logger.info("")
            self.logger.warning(f"同名アセット ({len(result.collisions)}件、後のファイルを採用):")
            for name in result.collisions:
                self.logger.warning(f"  - {name}")

        self.logger.info("=" * 60)

    def log_error(self, file_path: Path, error_message: str, exception: Optional[Exception] = None):
        """エラーログの詳細記録"""
        error_msg = f"エラー - {file_path}: {error_message}"

        if exception:
            error_msg += f" ({type(exception).__name__}: {str(exception)})"

        self.logger.error(error_msg)

        # スタックトレースはファイルログのみに記録
        if exception and self.config.log_file:
            self.logger.debug("スタックトレース:", exc_info=exception)


def create_default_logger(verbose: bool = False, log_file: Optional[Path] = None) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.DEBUG if verbose else logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose
    )
    return ProgressLogger(config)


def get_default_log_file() -> Path:
    """デフォルトのログファイルパスを取得"""
    log_dir = Path.home() / '.asset_pipeline' / 'logs'
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'asset_pipeline_{timestamp}.log'
