"""
CLI Progress Display for Veo jobs

Renders the rotating progress messages of a running job as a single
status line with elapsed time, plus a banner and a result summary.

Usage:
    display = ProgressDisplay("Generating video")
    display.start()
    operation = await client.generate(request, on_progress=display)
    display.succeeded(operation)
"""

import sys
import time
from typing import Optional, TextIO

from services.video_generation import ErrorKind, Operation, VideoGenerationError


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    # Clear line
    CLEAR_LINE = "\033[2K\r"


SPINNER = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


def colored(text: str, color: str) -> str:
    """Apply color to text."""
    return f"{color}{text}{Colors.RESET}"


def format_duration(seconds: float) -> str:
    """Format duration as HH:MM:SS or MM:SS."""
    if seconds < 0:
        return "--:--"

    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


class ProgressDisplay:
    """Progress callback that redraws one status line per message."""

    def __init__(self, title: str, stream: Optional[TextIO] = None):
        self.title = title
        self.stream = stream or sys.stdout
        self.messages_shown = 0
        self._started_at: Optional[float] = None

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    def _write(self, text: str = "", end: str = "\n"):
        print(text, end=end, file=self.stream, flush=True)

    def start(self, details: Optional[dict] = None):
        """Print the banner and start the clock."""
        self._started_at = time.monotonic()
        self._write(colored(f"\n═══ 🎬 {self.title} ═══", Colors.CYAN))
        for key, value in (details or {}).items():
            self._write(f"{key + ':':<14}{colored(str(value), Colors.BOLD)}")
        self._write(colored("─" * 45, Colors.DIM))

    def __call__(self, message: str):
        frame = SPINNER[self.messages_shown % len(SPINNER)]
        self.messages_shown += 1
        self._write(
            f"{Colors.CLEAR_LINE}"
            f"{colored(frame, Colors.CYAN)} "
            f"{colored(message, Colors.WHITE)} "
            f"{colored(format_duration(self.elapsed), Colors.DIM)}",
            end="",
        )

    def succeeded(self, operation: Operation, saved_to: Optional[str] = None):
        self._write()
        self._write(colored(f"✅ Done in {format_duration(self.elapsed)}", Colors.GREEN))
        self._write(f"Operation:    {operation.name}")
        if operation.result:
            self._write(f"Video:        {colored(operation.result.uri, Colors.DIM)}")
            self._write(f"Aspect ratio: {operation.result.aspect_ratio.value}")
        if saved_to:
            self._write(f"Saved to:     {saved_to}")

    def failed(self, error: VideoGenerationError):
        self._write()
        if error.kind == ErrorKind.CREDENTIAL:
            self._write(colored(f"🔑 {error}", Colors.YELLOW + Colors.BOLD))
            self._write(colored("    Set GEMINI_API_KEY to a valid key and try again.", Colors.DIM))
        else:
            self._write(colored(f"❌ {error}", Colors.RED))
            if error.error_code:
                self._write(colored(f"    Code: {error.error_code}", Colors.DIM))
