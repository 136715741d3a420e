from .file_scanner import DEFAULT_SCAN_CONFIG, is_downloadable, list_directory, scan, scan_tree
from .models import DirectoryListing, ScanConfig, ScanIssue, ScanResult

__all__ = [
    "DEFAULT_SCAN_CONFIG",
    "DirectoryListing",
    "ScanConfig",
    "ScanIssue",
    "ScanResult",
    "is_downloadable",
    "list_directory",
    "scan",
    "scan_tree",
]
