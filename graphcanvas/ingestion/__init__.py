"""
Ingestion module - CSV import planning and JSON/CSV codec.
"""
from .csv_parser import ParsedTable, parse_csv, find_column_index
from .importer import MergePolicy, NodeImportPlan, EdgeImportPlan, plan_node_import, plan_edge_import
from .codec import PayloadError, decode_payload, export_json, import_json, export_csv

__all__ = [
    "ParsedTable",
    "parse_csv",
    "find_column_index",
    "MergePolicy",
    "NodeImportPlan",
    "EdgeImportPlan",
    "plan_node_import",
    "plan_edge_import",
    "PayloadError",
    "decode_payload",
    "export_json",
    "import_json",
    "export_csv",
]
