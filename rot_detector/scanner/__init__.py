"""Scan orchestration for dependency health analysis."""

from rot_detector.scanner.scan_orchestrator import ScanOrchestrator

__all__ = ["ScanOrchestrator"]
