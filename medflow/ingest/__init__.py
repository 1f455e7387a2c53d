"""Raw input parsing and schema normalization."""

from .normalizer import normalize_record, normalize_records, resolve_field
from .reader import InputFileError, parse_csv_text, parse_raw_input, read_input_file, split_csv_line

__all__ = [
    "InputFileError",
    "normalize_record",
    "normalize_records",
    "parse_csv_text",
    "parse_raw_input",
    "read_input_file",
    "resolve_field",
    "split_csv_line",
]
