# Static Asset Pipeline
# Copies static assets with content fingerprints and writes an asset manifest

from .models import PipelineConfig, DiscoveredFile, ProcessedAsset, PipelineResult
from .exceptions import (
    ProcessingError, ValidationError, ConfigurationError,
    FileOperationError, DuplicateAssetError
)
from .config import DEFAULT_CONFIG, merge_config, normalize_extensions
from .hasher import digest_stream, file_digest
from .fingerprinter import fingerprint_filename
from .file_scanner import AssetScanner, extract_extension
from .copier import AssetCopier
from .manifest import build_manifest, write_manifest, load_manifest, resolve
from .logger import ProgressLogger, LogConfig, create_default_logger, get_default_log_file
from .pipeline import AssetPipeline, process_assets, copy_static_assets

__all__ = [
    'PipelineConfig',
    'DiscoveredFile',
    'ProcessedAsset',
    'PipelineResult',
    'ProcessingError',
    'ValidationError',
    'ConfigurationError',
    'FileOperationError',
    'DuplicateAssetError',
    'DEFAULT_CONFIG',
    'merge_config',
    'normalize_extensions',
    'digest_stream',
    'file_digest',
    'fingerprint_filename',
    'AssetScanner',
    'extract_extension',
    'AssetCopier',
    'build_manifest',
    'write_manifest',
    'load_manifest',
    'resolve',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'get_default_log_file',
    'AssetPipeline',
    'process_assets',
    'copy_static_assets'
]
