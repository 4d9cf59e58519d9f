"""
Extraction subpackage for reportsheets.

Turns exported report files (one JSON array of row objects per report) into
DataFrames ready for the transforms. Running the SQL queries that produce
those files is out of scope.
"""

from .reports import decode_report, read_report, rows_to_frame

__all__ = ["decode_report", "read_report", "rows_to_frame"]
