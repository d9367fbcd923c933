from pclocator.kmax.scanner import (
    BuildConditionScanner, ScanState, LookupKey, UNIT_TAG, SUBDIR_TAG, HISTORY_NOTE,
    object_identity, lookup_keys_for, scan_index
)

__all__ = [
    "BuildConditionScanner", "ScanState", "LookupKey", "UNIT_TAG", "SUBDIR_TAG", "HISTORY_NOTE",
    "object_identity", "lookup_keys_for", "scan_index"
]
