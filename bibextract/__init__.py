"""Top-level imports for the bibextract package."""

__version__ = "0.1.0"

from .core import BibEntry, Diagnostic, DiagnosticKind, ParseError
from .extract import ExtractionResult, extract, extract_files
from .registry import EntryRegistry
from .scanner import BibFile
from . import helpers, scanner

__all__ = [
    "__version__", "BibEntry", "BibFile", "Diagnostic", "DiagnosticKind", "ParseError",
    "ExtractionResult", "extract", "extract_files", "EntryRegistry", "helpers", "scanner",
]
