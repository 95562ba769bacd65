from .allocation_table import (
    ASSET_COLUMNS,
    ASSET_SORT_PATHS,
    CLASS_COLUMNS,
    CLASS_SORT_PATHS,
    AssetTableRow,
    ClassTableRow,
    build_asset_rows,
    build_class_rows,
)
from .sorting import (
    SortConfig,
    SortHeader,
    build_sort_headers,
    next_sort,
    sort_indicator,
    sort_rows,
)

__all__ = [
    "ASSET_COLUMNS",
    "ASSET_SORT_PATHS",
    "CLASS_COLUMNS",
    "CLASS_SORT_PATHS",
    "AssetTableRow",
    "ClassTableRow",
    "SortConfig",
    "SortHeader",
    "build_asset_rows",
    "build_class_rows",
    "build_sort_headers",
    "next_sort",
    "sort_indicator",
    "sort_rows",
]
