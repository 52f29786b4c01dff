"""
コンテンツハッシュ計算

ファイルの内容からダイジェストを計算する機能を提供します。
ストリームを一定サイズのチャンク単位で読み込むため、ファイルサイズに
関係なくメモリ使用量は一定です。
"""

import hashlib
from pathlib import Path
from typing import BinaryIO

from .exceptions import ConfigurationError


DEFAULT_ALGORITHM = 'md5'
CHUNK_SIZE = 8192


def _new_hash(algorithm: str):
    try:
        return hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"未対応のハッシュアルゴリズム: {algorithm}") from e


def digest_stream(stream: BinaryIO, algorithm: str = DEFAULT_ALGORITHM,
                  chunk_size: int = CHUNK_SIZE) -> str:
    """
    バイトストリームのダイジェストを計算

    Args:
        stream: 読み込み対象のバイナリストリーム
        algorithm: hashlibのアルゴリズム名
        chunk_size: 1回あたりの読み込みサイズ

    Returns:
        小文字16進数のダイジェスト文字列

    Raises:
        ConfigurationError: アルゴリズムが不正な場合
        OSError: 読み込みに失敗した場合
    """
    digest = _new_hash(algorithm)
    for chunk in iter(lambda: stream.read(chunk_size), b''):
        digest.update(chunk)
    return digest.hexdigest()


def file_digest(path: Path, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    ファイル内容のダイジェストを計算

    更新日時やパーミッション、パスには依存せず、内容のみで決まります。

    Args:
        path: 対象ファイルのパス
        algorithm: hashlibのアルゴリズム名

    Returns:
        小文字16進数のダイジェスト文字列
    """
    with open(path, 'rb') as f:
        return digest_stream(f, algorithm)
