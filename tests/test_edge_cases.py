"""
エッジケースのユニットテスト

Static Asset Pipelineの各コンポーネントのエッジケースをテストします。
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from asset_pipeline.copier import AssetCopier
from asset_pipeline.exceptions import ConfigurationError, FileOperationError
from asset_pipeline.file_scanner import AssetScanner
from asset_pipeline.hasher import file_digest
from asset_pipeline.models import DiscoveredFile


class BrokenStream:
    """読み込みに失敗するストリーム"""

    def __init__(self):
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False

    def read(self, size=-1):
        raise OSError("read failed")


class TestHasherEdgeCases(unittest.TestCase):
    """ハッシュ計算のエッジケーステスト"""

    def setUp(self):
        """テスト前の準備"""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """テスト後のクリーンアップ"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_zero_byte_file(self):
        """0バイトファイルのダイジェスト"""
        empty = self.temp_dir / "empty.txt"
        empty.touch()

        self.assertEqual(file_digest(empty), 'd41d8cd98f00b204e9800998ecf8427e')

    def test_large_file_is_read_in_chunks(self):
        """大きなファイルも正しくハッシュできる"""
        large = self.temp_dir / "large.js"
        large.write_bytes(b"a" * (5 * 1024 * 1024 + 7))

        digest = file_digest(large)

        self.assertEqual(len(digest), 32)
        self.assertEqual(digest, file_digest(large))

    def test_read_error_closes_file(self):
        """読み込み中のエラーでもファイルは閉じられ、例外はそのまま送出される"""
        target = self.temp_dir / "broken.css"
        target.write_bytes(b"body{}")
        stream = BrokenStream()

        with patch('builtins.open', return_value=stream):
            with self.assertRaises(OSError):
                file_digest(target)

        self.assertTrue(stream.closed)


class TestCopierEdgeCases(unittest.TestCase):
    """AssetCopierのエッジケーステスト"""

    def setUp(self):
        """テスト前の準備"""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.source_dir = self.temp_dir / "source"
        self.output_dir = self.temp_dir / "output"
        self.source_dir.mkdir()

    def tearDown(self):
        """テスト後のクリーンアップ"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_line_endings_are_not_normalized(self):
        """改行コードは変換されずにコピーされる"""
        source = self.source_dir / "windows.txt"
        content = b"line1\r\nline2\rline3\n\x00\xff"
        source.write_bytes(content)

        records = AssetCopier(fingerprint=False).process(
            [DiscoveredFile(source, 'txt')], self.output_dir)

        self.assertEqual(records[0].dest_path.read_bytes(), content)

    def test_permission_error_during_copy(self):
        """コピー時の権限エラーはFileOperationErrorになる"""
        source = self.source_dir / "app.js"
        source.write_text("x")

        with patch('asset_pipeline.copier.shutil.copyfile',
                   side_effect=PermissionError("Permission denied")):
            with self.assertRaises(FileOperationError) as ctx:
                AssetCopier().process([DiscoveredFile(source, 'js')], self.output_dir)

        self.assertEqual(ctx.exception.path, source)
        self.assertIn("app.js", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)

    def test_output_directory_creation_failure(self):
        """出力ディレクトリを作成できない場合はFileOperationErrorになる"""
        source = self.source_dir / "app.js"
        source.write_text("x")
        blocker = self.temp_dir / "blocker"
        blocker.write_text("not a directory")

        with self.assertRaises(FileOperationError):
            AssetCopier().process([DiscoveredFile(source, 'js')], blocker / "assets")

    def test_short_digest_is_not_wrapped_as_io_error(self):
        """短いダイジェストは設定エラーとしてそのまま送出される"""
        source = self.source_dir / "app.js"
        source.write_text("x")

        with patch('asset_pipeline.copier.file_digest', return_value='abc'):
            with self.assertRaises(ConfigurationError):
                AssetCopier().process([DiscoveredFile(source, 'js')], self.output_dir)

    def test_empty_input(self):
        """入力が空の場合は何もコピーしない"""
        records = AssetCopier().process([], self.output_dir)

        self.assertEqual(records, [])

    def test_special_characters_in_filename(self):
        """空白や日本語を含むファイル名"""
        names = ["my logo.png", "ロゴ画像.png", "file-with_mixed.chars.png"]
        files = []
        for name in names:
            path = self.source_dir / name
            path.write_bytes(name.encode('utf-8'))
            files.append(DiscoveredFile(path, 'png'))

        records = AssetCopier().process(files, self.output_dir)

        for record, name in zip(records, names):
            self.assertEqual(record.original_name, name)
            self.assertTrue(record.fingerprinted_name.endswith(".png"))
            self.assertEqual(record.dest_path.read_bytes(), name.encode('utf-8'))


class TestAssetScannerEdgeCases(unittest.TestCase):
    """AssetScannerのエッジケーステスト"""

    def setUp(self):
        """テスト前の準備"""
        self.scanner = AssetScanner()
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """テスト後のクリーンアップ"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_empty_directory(self):
        """空のディレクトリ"""
        self.assertEqual(list(self.scanner.scan([self.temp_dir], frozenset({'png'}))), [])

    def test_root_is_a_file(self):
        """ルートにファイルを指定した場合はスキップされる"""
        file_root = self.temp_dir / "not-a-dir.png"
        file_root.write_bytes(b"x")

        self.assertEqual(list(self.scanner.scan([file_root], frozenset({'png'}))), [])

    def test_empty_extension_set(self):
        """拡張子の集合が空なら何も検出しない"""
        (self.temp_dir / "a.png").write_bytes(b"x")

        self.assertEqual(list(self.scanner.scan([self.temp_dir], frozenset())), [])

    def test_hidden_files_are_matched_by_their_suffix(self):
        """隠しファイルは先頭の「.」以降を拡張子として扱う"""
        (self.temp_dir / ".txt").write_text("x")

        discovered = list(self.scanner.scan([self.temp_dir], frozenset({'txt'})))

        self.assertEqual([d.path.name for d in discovered], [".txt"])

    def test_enumeration_is_deterministic_within_run(self):
        """同じファイルシステムの状態では同じ順序で検出される"""
        for i in range(20):
            sub = self.temp_dir / f"d{i % 3}"
            sub.mkdir(exist_ok=True)
            (sub / f"f{i}.css").write_text(str(i))

        first = [d.path for d in self.scanner.scan([self.temp_dir], frozenset({'css'}))]
        second = [d.path for d in self.scanner.scan([self.temp_dir], frozenset({'css'}))]

        self.assertEqual(first, second)
        self.assertEqual(len(first), 20)

    @unittest.skipIf(not hasattr(os, 'symlink'), "シンボリックリンク非対応")
    def test_symlink_to_file_is_followed(self):
        """ファイルへのシンボリックリンクは通常のファイルとして扱う"""
        target = self.temp_dir / "real.js"
        target.write_text("x")
        link_dir = self.temp_dir / "links"
        link_dir.mkdir()
        try:
            (link_dir / "alias.js").symlink_to(target)
        except OSError:
            self.skipTest("シンボリックリンクを作成できません")

        discovered = list(self.scanner.scan([link_dir], frozenset({'js'})))

        self.assertEqual([d.path.name for d in discovered], ["alias.js"])


if __name__ == '__main__':
    unittest.main()
