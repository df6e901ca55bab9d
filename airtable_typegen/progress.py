from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class StepProgress(Progress):
    """Progress with a single task, for spinners that only change their description"""

    def step(self, description: str) -> None:
        self.update(self.task_ids[0], description=description)


def progress_spinner(message: str = "", transient: bool = True) -> StepProgress:
    """Creates a progress spinner for a single task"""

    progress = StepProgress(
        SpinnerColumn(),
        TimeElapsedColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=transient,
    )
    progress.add_task(message)
    return progress
