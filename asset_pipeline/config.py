"""
パイプライン設定

デフォルト設定と、呼び出し側の部分的な設定をマージしてPipelineConfigを
組み立てる機能を提供します。
"""

import json
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .exceptions import ConfigurationError, ValidationError
from .models import PipelineConfig, normalize_extensions


DEFAULT_COPY_EXTENSIONS: FrozenSet[str] = frozenset({
    'png', 'jpg', 'jpeg', 'gif', 'svg', 'webp', 'ico',  # 画像
    'woff', 'woff2', 'ttf', 'otf', 'eot',               # フォント
    'js', 'css', 'json', 'xml', 'txt',
})

DEFAULT_OPTIMIZE_EXTENSIONS: FrozenSet[str] = frozenset({'png', 'jpg', 'jpeg'})

DEFAULT_CONFIG = PipelineConfig(
    static_dirs=(Path('assets'), Path('public'), Path('static')),
    output_dir=Path('build/assets'),
    fingerprint=True,
    manifest_file=Path('asset-manifest.json'),
    copy_extensions=DEFAULT_COPY_EXTENSIONS,
    optimize_extensions=DEFAULT_OPTIMIZE_EXTENSIONS,
)

_BOOL_KEYS = ('fingerprint', 'copy_static', 'optimize_images', 'fail_on_collision')


def merge_config(overrides: Optional[Mapping[str, Any]] = None,
                 base: PipelineConfig = DEFAULT_CONFIG) -> PipelineConfig:
    """
    部分的な設定をデフォルト設定にマージ

    baseは変更せず、新しいPipelineConfigを返します。
    拡張子は「extensions」に copy / optimize キーを持つ辞書でも指定できます。

    Args:
        overrides: 上書きする設定項目
        base: マージ元の設定

    Returns:
        マージ後の設定

    Raises:
        ConfigurationError: 未知の設定項目や不正な値が含まれる場合
    """
    if not overrides:
        return base

    values: Dict[str, Any] = dict(overrides)
    extensions = values.pop('extensions', None)
    if extensions is not None:
        if not isinstance(extensions, Mapping):
            raise ConfigurationError("extensions は copy / optimize を持つ辞書で指定してください")
        unknown = set(extensions) - {'copy', 'optimize'}
        if unknown:
            raise ConfigurationError(f"未知の拡張子設定: {', '.join(sorted(unknown))}")
        if 'copy' in extensions:
            values.setdefault('copy_extensions', extensions['copy'])
        if 'optimize' in extensions:
            values.setdefault('optimize_extensions', extensions['optimize'])

    known = {f.name for f in fields(PipelineConfig)}
    unknown = set(values) - known
    if unknown:
        raise ConfigurationError(f"未知の設定項目: {', '.join(sorted(unknown))}")

    changes: Dict[str, Any] = {}
    for key, value in values.items():
        if key == 'static_dirs':
            if isinstance(value, (str, Path)):
                value = [value]
            changes[key] = tuple(Path(p) for p in value)
        elif key == 'output_dir':
            changes[key] = Path(value)
        elif key == 'manifest_file':
            changes[key] = Path(value) if value else None
        elif key in ('copy_extensions', 'optimize_extensions'):
            changes[key] = normalize_extensions(value)
        elif key in _BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigurationError(f"{key} は真偽値で指定してください: {value!r}")
            changes[key] = value
        elif key == 'max_workers':
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"max_workers は1以上の整数で指定してください: {value!r}")
            changes[key] = value
        else:
            changes[key] = str(value)

    return replace(base, **changes)


def load_config_file(path: Path) -> Dict[str, Any]:
    """
    JSON形式の設定ファイルを読み込み

    Args:
        path: 設定ファイルのパス

    Returns:
        設定項目の辞書

    Raises:
        ValidationError: 読み込みに失敗した場合、または内容が辞書でない場合
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"設定ファイルを読み込めません: {path} - {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"設定ファイルの形式が不正です: {path}")
    return data
