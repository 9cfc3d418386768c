"""Rule checking and diagnostic synthesis for the CubTEK C/C++ coding standard."""

from .models import Diagnostic, Finding, Severity, SourceDocument
from .service import CheckResult, CheckService

__all__ = [
    "CheckResult",
    "CheckService",
    "Diagnostic",
    "Finding",
    "Severity",
    "SourceDocument",
]

__version__ = "0.1.0"
