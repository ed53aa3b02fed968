"""
Record Ingestion

Modules:
- records: RawRecord type, validation, DataFrame/CSV loading
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "RawRecord":
        from src.ingestion.records import RawRecord
        return RawRecord
    if name == "records_to_frame":
        from src.ingestion.records import records_to_frame
        return records_to_frame
    if name == "load_records_csv":
        from src.ingestion.records import load_records_csv
        return load_records_csv
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
