"""Statement output formats."""

from .statement_writer import render_csv, statement_to_frame, write_csv, write_excel

__all__ = [
    "render_csv",
    "statement_to_frame",
    "write_csv",
    "write_excel",
]
