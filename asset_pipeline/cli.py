"""
コマンドラインインターフェース

Static Asset Pipelineのメインエントリーポイントです。
argparseのサブコマンド機能を使用して、build、resolveコマンドを提供します。
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

from .config import load_config_file, merge_config
from .exceptions import ProcessingError, ValidationError
from .logger import create_default_logger, get_default_log_file
from .manifest import load_manifest, resolve
from .pipeline import AssetPipeline


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='asset-pipeline',
        description='静的アセットをフィンガープリント付きでコピーし、マニフェストを生成するツール',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # デフォルト設定でビルド
  asset-pipeline build

  # ソースと出力先を指定
  asset-pipeline build --static-dir assets --static-dir public --output-dir build/assets

  # マニフェストを使ってファイル名を解決
  asset-pipeline resolve build/assets/asset-manifest.json logo.png
        """
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='利用可能なコマンド',
        metavar='<command>'
    )

    # buildコマンド（エイリアス: b）
    build_parser = subparsers.add_parser(
        'build',
        aliases=['b'],
        help='アセットをコピーしてマニフェストを生成',
        description='ソースディレクトリのアセットを出力ディレクトリにコピーし、マニフェストを生成します。'
    )
    build_parser.add_argument(
        '--config', '-c',
        type=str,
        help='JSON形式の設定ファイル'
    )
    build_parser.add_argument(
        '--static-dir', '-s',
        action='append',
        dest='static_dirs',
        help='ソースディレクトリ（複数指定可、指定順に処理）'
    )
    build_parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='出力ディレクトリ'
    )
    build_parser.add_argument(
        '--no-fingerprint',
        action='store_true',
        help='ファイル名にフィンガープリントを付けない'
    )
    build_parser.add_argument(
        '--manifest-file', '-m',
        type=str,
        help='マニフェストの出力先（出力ディレクトリからの相対パス）'
    )
    build_parser.add_argument(
        '--no-manifest',
        action='store_true',
        help='マニフェストファイルを書き込まない'
    )
    build_parser.add_argument(
        '--workers', '-w',
        type=int,
        help='並列処理のワーカー数'
    )
    build_parser.add_argument(
        '--fail-on-collision',
        action='store_true',
        help='同名のアセットが複数ある場合にエラーにする'
    )
    build_parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='詳細ログを表示'
    )

    # resolveコマンド（エイリアス: r）
    resolve_parser = subparsers.add_parser(
        'resolve',
        aliases=['r'],
        help='マニフェストを使ってファイル名を解決',
        description='元のファイル名を配信用のファイル名に変換して表示します。'
    )
    resolve_parser.add_argument(
        'manifest',
        type=str,
        help='マニフェストファイルのパス'
    )
    resolve_parser.add_argument(
        'names',
        nargs='+',
        help='解決するファイル名'
    )

    return parser


def build_overrides(args) -> Dict[str, Any]:
    """コマンドライン引数から設定の上書き内容を作成"""
    overrides: Dict[str, Any] = {}
    if args.config:
        overrides.update(load_config_file(Path(args.config)))
    if args.static_dirs:
        overrides['static_dirs'] = args.static_dirs
    if args.output_dir:
        overrides['output_dir'] = args.output_dir
    if args.no_fingerprint:
        overrides['fingerprint'] = False
    if args.manifest_file:
        overrides['manifest_file'] = args.manifest_file
    if args.no_manifest:
        overrides['manifest_file'] = None
    if args.workers is not None:
        overrides['max_workers'] = args.workers
    if args.fail_on_collision:
        overrides['fail_on_collision'] = True
    return overrides


def handle_build_command(args) -> int:
    """
    buildコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    try:
        config = merge_config(build_overrides(args))

        log_file = get_default_log_file() if args.verbose else None
        progress_logger = create_default_logger(verbose=args.verbose, log_file=log_file)

        AssetPipeline(config, progress_logger).run()
        return 0

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return 1


def handle_resolve_command(args) -> int:
    """
    resolveコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    try:
        manifest = load_manifest(Path(args.manifest))
        for name in args.names:
            print(resolve(manifest, name))
        return 0

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1


def main(argv=None) -> int:
    """
    メインエントリーポイント

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # コマンドが指定されていない場合はヘルプを表示
    if not args.command:
        parser.print_help()
        return 0

    if args.command in ['build', 'b']:
        return handle_build_command(args)
    elif args.command in ['resolve', 'r']:
        return handle_resolve_command(args)
    else:
        print(f"❌ 不明なコマンド: {args.command}", file=sys.stderr)
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
