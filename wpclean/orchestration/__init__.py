"""Workflow orchestration package for wpclean.

This package contains the components that drive a cleanup session:
- CleanupSession: View state machine translating intents into deletions.
- CleanupLogger: Structured session log file.
- CleanupOrchestrator: Central coordinator for scan and interactive cleanup.
"""

from wpclean.orchestration.cleanup_session import CleanupSession, FileView, FolderView
from wpclean.orchestration.cleanup_logger import CleanupLogger
from wpclean.orchestration.cleanup_orchestrator import CleanupOrchestrator

__all__ = [
    "CleanupSession",
    "FileView",
    "FolderView",
    "CleanupLogger",
    "CleanupOrchestrator",
]
