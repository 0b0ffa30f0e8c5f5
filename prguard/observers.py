"""Observer pattern for review reporting."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from .models import ReportLevel, ReportMessage, ReviewReport


class ReviewObserver(ABC):
    """Abstract base class for review observers."""

    @abstractmethod
    async def on_message(self, message: ReportMessage) -> None:
        """Called when a failure, warning, message or markdown note is emitted."""
        pass

    @abstractmethod
    async def on_review_completed(self, report: ReviewReport) -> None:
        """Called once all checks have run."""
        pass


class ConsoleReportObserver(ReviewObserver):
    """Observer that prints review output to the console."""

    STYLES = {
        ReportLevel.FAIL: ("red", "Fail"),
        ReportLevel.WARN: ("yellow", "Warning"),
        ReportLevel.MESSAGE: ("blue", "Message"),
    }

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_message(self, message: ReportMessage) -> None:
        if message.level == ReportLevel.MARKDOWN:
            self.console.print(Markdown(message.text))
            return
        color, label = self.STYLES[message.level]
        self.console.print(f"[{color}]{label}: {escape(message.text)}[/{color}]", highlight=False)

    async def on_review_completed(self, report: ReviewReport) -> None:
        summary = (
            f"{len(report.fails)} failure(s), {len(report.warnings)} warning(s), "
            f"{len(report.messages)} message(s)"
        )
        if report.failed:
            self.console.print(f"\n[red]Review failed: {summary}[/red]")
        else:
            self.console.print(f"\n[green]Review passed: {summary}[/green]")


class FileLogObserver(ReviewObserver):
    """Observer that logs review output to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_message(self, message: ReportMessage) -> None:
        await self._log(f"{message.level.value.upper()}: {message.text}")

    async def on_review_completed(self, report: ReviewReport) -> None:
        status = "failed" if report.failed else "passed"
        await self._log(
            f"Review {status} with {len(report.fails)} failure(s) and {len(report.warnings)} warning(s)"
        )


class ReviewReporter:
    """Collects review output into a report and notifies observers."""

    def __init__(self, observers: Optional[List[ReviewObserver]] = None):
        self.report = ReviewReport()
        self.observers: List[ReviewObserver] = list(observers or [])

    def add_observer(self, observer: ReviewObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: ReviewObserver) -> None:
        self.observers.remove(observer)

    async def emit(self, message: ReportMessage) -> None:
        self.report.add(message)
        for observer in self.observers:
            await observer.on_message(message)

    async def fail(self, text: str) -> None:
        await self.emit(ReportMessage(level=ReportLevel.FAIL, text=text))

    async def warn(self, text: str) -> None:
        await self.emit(ReportMessage(level=ReportLevel.WARN, text=text))

    async def message(self, text: str) -> None:
        await self.emit(ReportMessage(level=ReportLevel.MESSAGE, text=text))

    async def markdown(self, text: str) -> None:
        await self.emit(ReportMessage(level=ReportLevel.MARKDOWN, text=text))

    async def complete(self) -> ReviewReport:
        for observer in self.observers:
            await observer.on_review_completed(self.report)
        return self.report
