"""
テスト共通設定
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_pipeline_logger():
    """ProgressLoggerが追加したハンドラーをテストごとに破棄"""
    yield
    logger = logging.getLogger('asset_pipeline')
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
