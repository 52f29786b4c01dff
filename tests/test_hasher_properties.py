"""
コンテンツハッシュのプロパティベーステスト

Property 1: ダイジェストの決定性を検証します。
"""

import hashlib
import io
import os
import tempfile
from pathlib import Path
from hypothesis import given, strategies as st
from hypothesis import settings
import pytest

from asset_pipeline.hasher import digest_stream, file_digest
from asset_pipeline.exceptions import ConfigurationError


@settings(max_examples=100, deadline=None)
@given(st.binary(max_size=50000), st.integers(min_value=1, max_value=10000))
def test_digest_is_independent_of_chunk_size_property(content, chunk_size):
    """
    **Feature: asset-pipeline, Property 1: ダイジェストの決定性**

    任意のバイト列に対して、ダイジェストは読み込みチャンクサイズに依存せず、
    内容全体をまとめてハッシュした値と一致するべきである。
    """
    expected = hashlib.md5(content).hexdigest()

    result = digest_stream(io.BytesIO(content), chunk_size=chunk_size)

    assert result == expected
    assert len(result) == 32
    assert result == result.lower()


@settings(max_examples=50, deadline=None)
@given(st.binary(min_size=1, max_size=5000))
def test_digest_ignores_path_and_metadata_property(content):
    """
    同じ内容のファイルは、パスや更新日時が異なっても同じダイジェストになるべきである。
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        first = temp_path / "a" / "first.bin"
        second = temp_path / "b" / "second.dat"
        first.parent.mkdir()
        second.parent.mkdir()
        first.write_bytes(content)
        second.write_bytes(content)

        # 更新日時を変更
        os.utime(second, (1_000_000, 1_000_000))

        assert file_digest(first) == file_digest(second)


@settings(max_examples=50, deadline=None)
@given(st.binary(max_size=1000), st.binary(min_size=1, max_size=10))
def test_different_content_yields_different_digest_property(content, extra):
    """内容が変わればダイジェストも変わるべきである。"""
    assert digest_stream(io.BytesIO(content)) != digest_stream(io.BytesIO(content + extra))


def test_stronger_algorithm_is_supported():
    """md5以外のアルゴリズムも指定できる"""
    result = digest_stream(io.BytesIO(b"body{}"), algorithm='sha256')
    assert result == hashlib.sha256(b"body{}").hexdigest()
    assert len(result) == 64


def test_unknown_algorithm_raises_configuration_error():
    """未対応のアルゴリズムは設定エラーになる"""
    with pytest.raises(ConfigurationError):
        digest_stream(io.BytesIO(b"x"), algorithm='no-such-hash')


def test_missing_file_propagates_os_error():
    """存在しないファイルはOSErrorをそのまま送出する"""
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(OSError):
            file_digest(Path(temp_dir) / "missing.png")
