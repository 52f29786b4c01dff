"""
ファイルコピー処理モジュール

検出したアセットを出力ディレクトリにコピーする機能を提供します。
フィンガープリントが有効な場合は内容のダイジェストを計算し、
ファイル名に埋め込んでからコピーします。
"""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .exceptions import FileOperationError
from .fingerprinter import fingerprint_filename
from .hasher import DEFAULT_ALGORITHM, file_digest
from .models import DiscoveredFile, ProcessedAsset


class AssetCopier:
    """アセットファイルをコピーするクラス"""

    def __init__(self, fingerprint: bool = True, algorithm: str = DEFAULT_ALGORITHM,
                 max_workers: int = 1):
        """
        AssetCopierを初期化

        Args:
            fingerprint: ファイル名にフィンガープリントを付ける場合True
            algorithm: ダイジェストのアルゴリズム名
            max_workers: 並列処理のワーカー数（1の場合は逐次処理）
        """
        self.fingerprint = fingerprint
        self.algorithm = algorithm
        self.max_workers = max(1, max_workers)
        self.logger = logging.getLogger(__name__)

    def process(self, files: Iterable[DiscoveredFile], output_dir: Path,
                progress_logger=None) -> List[ProcessedAsset]:
        """
        アセットを出力ディレクトリにコピー

        Args:
            files: 検出されたファイル
            output_dir: コピー先ディレクトリ

        Returns:
            処理済みアセットのリスト（入力順）

        Raises:
            FileOperationError: 読み込みまたは書き込みに失敗した場合。
                それまでにコピーしたファイルはそのまま残ります。
        """
        files = list(files)
        self.logger.info(f"アセットコピー開始: {len(files)}個のファイル -> {output_dir}")

        if self.max_workers > 1 and len(files) > 1:
            records = self._process_parallel(files, output_dir, progress_logger)
        else:
            records = []
            for i, discovered in enumerate(files):
                if progress_logger:
                    progress_logger.log_copy_progress(len(files), i, discovered.path)
                records.append(self.process_file(discovered, output_dir))

        self.logger.info(f"アセットコピー完了: {len(records)}個")
        return records

    def _process_parallel(self, files: List[DiscoveredFile], output_dir: Path,
                          progress_logger=None) -> List[ProcessedAsset]:
        """
        スレッドプールでアセットを並列処理

        同名のファイルは1つのタスク内で検出順に
        逐次コピーします。結果は完了順ではなく検出順に並べ直します。
        """
        groups: Dict[str, List[int]] = {}
        for i, discovered in enumerate(files):
            groups.setdefault(discovered.path.name, []).append(i)

        records: List[Optional[ProcessedAsset]] = [None] * len(files)
        processed = 0

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                (indices, executor.submit(self._process_group, files, indices, output_dir))
                for indices in groups.values()
            ]

            for n, (indices, future) in enumerate(futures):
                if progress_logger:
                    progress_logger.log_copy_progress(len(files), processed, files[indices[0]].path)
                try:
                    group_records = future.result()
                except Exception:
                    for _, pending in futures[n + 1:]:
                        pending.cancel()
                    raise
                for i, record in zip(indices, group_records):
                    records[i] = record
                processed += len(indices)

        self.logger.debug(f"並列処理完了: {processed}/{len(files)}ファイル")
        return records

    def _process_group(self, files: List[DiscoveredFile], indices: List[int],
                       output_dir: Path) -> List[ProcessedAsset]:
        """同名のファイルを検出順にコピー"""
        return [self.process_file(files[i], output_dir) for i in indices]

    def process_file(self, discovered: DiscoveredFile, output_dir: Path) -> ProcessedAsset:
        """
        単一アセットを処理

        Args:
            discovered: 検出されたファイル
            output_dir: コピー先ディレクトリ

        Returns:
            処理済みアセット
        """
        source_path = discovered.path
        original_name = source_path.name

        try:
            digest = None
            dest_name = original_name
            if self.fingerprint:
                digest = file_digest(source_path, self.algorithm)
                dest_name = fingerprint_filename(original_name, digest)

            dest_path = output_dir / dest_name
            dest_path.parent.mkdir(parents=True, exist_ok=True)

            # 内容を変換せずにバイト単位でコピー
            shutil.copyfile(source_path, dest_path)
        except OSError as e:
            error_msg = f"アセット処理エラー: {source_path} - {e}"
            self.logger.error(error_msg)
            raise FileOperationError(error_msg, source_path) from e

        self.logger.debug(f"コピー成功: {original_name} -> {dest_path}")
        return ProcessedAsset(
            source_path=source_path,
            dest_path=dest_path,
            original_name=original_name,
            fingerprinted_name=dest_name,
            digest=digest
        )
