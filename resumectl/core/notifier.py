"""User-facing notifications for long-running operations.

A notification is keyed by the logical operation it belongs to. A newer
notification with the same key replaces the older one instead of stacking,
so a run of "Uploading files... 40%" updates shows up as one message.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.progress import Progress, TaskID

from resumectl.core.output import create_progress, err_console


class NotificationLevel(Enum):
    """Severity / kind of a notification."""

    LOADING = "loading"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """One transient message shown to the user."""

    key: str
    level: NotificationLevel
    message: str
    title: str = ""
    percent: Optional[int] = None

    @property
    def is_settled(self) -> bool:
        """True once the operation behind the key has finished."""
        return self.level is not NotificationLevel.LOADING


class Notifier:
    """Base notifier. Subclasses decide how a notification is shown."""

    def notify(
        self,
        key: str,
        level: NotificationLevel,
        message: str,
        *,
        title: str = "",
        percent: Optional[int] = None,
    ) -> Notification:
        notification = Notification(key, level, message, title, percent)
        self.show(notification)
        return notification

    def show(self, notification: Notification) -> None:
        raise NotImplementedError

    # Shorthands

    def loading(self, key: str, message: str, percent: Optional[int] = None) -> Notification:
        return self.notify(key, NotificationLevel.LOADING, message, percent=percent)

    def success(self, key: str, message: str, **kwargs: Any) -> Notification:
        return self.notify(key, NotificationLevel.SUCCESS, message, **kwargs)

    def warning(self, key: str, message: str, **kwargs: Any) -> Notification:
        return self.notify(key, NotificationLevel.WARNING, message, **kwargs)

    def error(self, key: str, message: str, **kwargs: Any) -> Notification:
        return self.notify(key, NotificationLevel.ERROR, message, **kwargs)

    def close(self) -> None:
        """Release any display resources."""


class NotificationQueue(Notifier):
    """In-memory notifier.

    ``active`` holds the current notification per key in first-seen order;
    ``history`` keeps everything that was ever shown.
    """

    def __init__(self) -> None:
        self.active: OrderedDict[str, Notification] = OrderedDict()
        self.history: list[Notification] = []

    def show(self, notification: Notification) -> None:
        self.active[notification.key] = notification
        self.history.append(notification)

    def get(self, key: str) -> Optional[Notification]:
        return self.active.get(key)

    def messages(self, key: Optional[str] = None) -> list[str]:
        """Messages from the history, optionally for one key only."""
        return [n.message for n in self.history if key is None or n.key == key]

    def dismiss(self, key: str) -> None:
        self.active.pop(key, None)

    def clear(self) -> None:
        self.active.clear()
        self.history.clear()


class ConsoleNotifier(Notifier):
    """Render notifications on the terminal.

    Loading notifications drive one progress row per key, updated in place.
    Settled notifications finish that row and print a status line.
    """

    STYLES = {
        NotificationLevel.INFO: "[blue]Info:[/blue]",
        NotificationLevel.SUCCESS: "[green]✓[/green]",
        NotificationLevel.WARNING: "[yellow]Warning:[/yellow]",
        NotificationLevel.ERROR: "[red]Error:[/red]",
    }

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or err_console
        self._progress: Optional[Progress] = None
        self._tasks: dict[str, TaskID] = {}

    def _get_progress(self) -> Progress:
        if self._progress is None:
            self._progress = create_progress(self.console)
            self._progress.start()
        return self._progress

    def show(self, notification: Notification) -> None:
        if notification.level is NotificationLevel.LOADING:
            progress = self._get_progress()
            task_id = self._tasks.get(notification.key)
            if task_id is None:
                self._tasks[notification.key] = progress.add_task(
                    notification.message, total=100, completed=notification.percent or 0
                )
            else:
                progress.update(task_id, description=notification.message)
                if notification.percent is not None:
                    progress.update(task_id, completed=notification.percent)
            return

        task_id = self._tasks.pop(notification.key, None)
        if task_id is not None and self._progress is not None:
            self._progress.update(task_id, description=notification.message)
            if notification.level is NotificationLevel.SUCCESS:
                self._progress.update(task_id, completed=100)
            self._progress.stop_task(task_id)
            if not self._tasks:
                self.close()

        prefix = self.STYLES[notification.level]
        heading = f"[bold]{notification.title}[/bold] " if notification.title else ""
        self.console.print(f"{prefix} {heading}{notification.message}")

    def close(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
        self._tasks.clear()
