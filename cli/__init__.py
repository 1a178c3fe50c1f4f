"""
Veo Studio CLI Tools

Command-line helpers for running Veo jobs from a terminal.

Tools:
- progress_display: status line rendering for rotating progress messages
"""

from .progress_display import ProgressDisplay

__all__ = ["ProgressDisplay"]
