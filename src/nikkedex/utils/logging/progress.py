# ABOUTME: Progress tracking using Rich's built-in spinner and counter columns
# ABOUTME: Used by the update command to show which character is being processed

from typing import Any

from rich.progress import MofNCompleteColumn, Progress, SpinnerColumn, TextColumn


class SimpleProgressTracker:
    """Progress tracker bound to a single Rich task."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    def update(self, name: str, index: int, total: int) -> None:
        """Callback shape accepted by the update service."""
        self.progress.update(self.task_id, description=f"📥 {name}", completed=index, total=total)


def create_smart_progress(
    console, initial_description: str = "🔎 Reading the wiki..."
) -> tuple[Progress, Any, SimpleProgressTracker]:
    """Create a progress display with spinner and completed/total counter.

    Args:
        console: Rich console instance
        initial_description: Initial progress description

    Returns:
        Tuple of (progress, task_id, tracker)
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )

    task_id = progress.add_task(initial_description, total=None)
    tracker = SimpleProgressTracker(progress, task_id)

    return progress, task_id, tracker
