"""
ファイル名フィンガープリント

ダイジェストの先頭8文字をファイル名に埋め込み、拡張子を保ったまま
キャッシュバスティング用のファイル名を生成します。

例: logo.png -> logo.a3d5f9c2.png
"""

from .exceptions import ConfigurationError


FINGERPRINT_LENGTH = 8


def fingerprint_filename(filename: str, digest: str) -> str:
    """
    フィンガープリント付きファイル名を生成

    最後の「.」の直前にフィンガープリントを挿入します。「.」がない場合は
    末尾に付加します。先頭が「.」の隠しファイル（.gitignoreなど）も同じ
    規則に従い、「.a3d5f9c2.gitignore」のようになります。

    Args:
        filename: 元のファイル名
        digest: ファイル内容のダイジェスト

    Returns:
        フィンガープリント付きファイル名

    Raises:
        ConfigurationError: ダイジェストが8文字未満の場合
    """
    if len(digest) < FINGERPRINT_LENGTH:
        raise ConfigurationError(
            f"ダイジェストが短すぎます: {digest!r} "
            f"({FINGERPRINT_LENGTH}文字以上が必要)"
        )

    fingerprint = digest[:FINGERPRINT_LENGTH]
    idx = filename.rfind('.')
    if idx == -1:
        return f"{filename}.{fingerprint}"
    return f"{filename[:idx]}.{fingerprint}{filename[idx:]}"
