"""Report export for static mixing calculations."""

from .mixing_report import MixingReportBuilder

__all__ = ["MixingReportBuilder"]
