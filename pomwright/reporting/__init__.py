"""
Reporting Package

Per-run test report: steps, screenshots, JSON and HTML output.
"""

from .report_manager import ReportManager, ReportStep, ReportTest

__all__ = ['ReportManager', 'ReportStep', 'ReportTest']
