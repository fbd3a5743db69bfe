"""Diagnostic output adapters."""

from .report import build_failure_report, write_failure_report

__all__ = ["build_failure_report", "write_failure_report"]
