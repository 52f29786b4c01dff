"""
カスタム例外クラス定義

Static Asset Pipelineで使用する例外クラスを定義します。
"""

from pathlib import Path
from typing import Optional


class ProcessingError(Exception):
    """処理エラーの基底クラス"""
    pass


class ValidationError(ProcessingError):
    """検証エラー"""
    pass


class ConfigurationError(ProcessingError):
    """設定エラー（回復不能）"""
    pass


class FileOperationError(ProcessingError):
    """ファイル操作エラー"""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class DuplicateAssetError(ProcessingError):
    """同名アセットの衝突エラー"""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name
