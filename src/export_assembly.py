"""
Tube Joint Studio - Export Assembly
Serializes the tube chain to a JSON record list, and reads it back.
"""

import json
import os
import time

from logging_config import get_logger
from tube_segment import TubeDimensionError, TubeSegment

logger = get_logger(__name__)

EXPORT_FIELDS = ('width', 'height', 'thickness', 'length', 'position', 'rotation')


class AssemblyImportError(ValueError):
    """Raised when an export file cannot be turned back into segments."""


def export_records(assembly):
    """One record per segment, in chain order."""
    return [segment.to_dict() for segment in assembly.segments]


def export_json(assembly):
    return json.dumps(export_records(assembly), indent=2, allow_nan=False)


def default_export_filename(timestamp_ms=None):
    """tube-assembly-<epoch milliseconds>.json"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"tube-assembly-{timestamp_ms}.json"


def write_export(assembly, directory=None, filename=None):
    """
    Write the assembly export to a JSON file.

    Args:
        assembly: TubeAssembly to export
        directory: target directory (current directory when None)
        filename: file name (default_export_filename() when None)

    Returns:
        str: path of the written file
    """
    directory = directory or os.getcwd()
    file_path = os.path.join(directory, filename or default_export_filename())

    records = export_records(assembly)
    text = json.dumps(records, indent=2, allow_nan=False)
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(text)

    logger.info("Exported %d segments to %s", len(records), file_path)
    return file_path


def segments_from_records(records):
    """
    Build segments from export records.

    Raises:
        AssemblyImportError: if the data is not a list of valid records
    """
    if not isinstance(records, list):
        raise AssemblyImportError("Export data must be a list of segment records")

    segments = []
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise AssemblyImportError(f"Record {i} is not an object")
        missing = [key for key in EXPORT_FIELDS if key not in record]
        if missing:
            raise AssemblyImportError(f"Record {i} is missing {', '.join(missing)}")
        try:
            segments.append(TubeSegment.from_dict(record))
        except (TubeDimensionError, TypeError, ValueError, AttributeError) as e:
            raise AssemblyImportError(f"Record {i} is invalid: {e}") from e
    return segments


def load_records(assembly, records):
    """
    Replace the assembly contents with imported records.

    The live assembly is untouched if any record is invalid. History is reset
    to a single entry holding the imported state.
    """
    segments = segments_from_records(records)
    assembly.replace_segments(segments, "import")
    return segments


def read_export(assembly, file_path):
    """Load a JSON export file into the assembly."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        raise AssemblyImportError(f"Invalid JSON file: {e}") from e

    segments = load_records(assembly, records)
    logger.info("Imported %d segments from %s", len(segments), file_path)
    return segments
