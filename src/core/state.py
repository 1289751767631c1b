from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error

class AppState(QObject):
    """
    Services shared by the window: config, playlist, engine, coordinator and
    local library. Notifications raised before the window starts listening
    are held in `queued_notifications` and handed over by take_queued().
    """
    notification = Signal(object)   # emits Notify

    def __init__(self, config=None):
        super().__init__()
        self.config = config
        self.playlist = None
        self.player = None
        self.coordinator = None
        self.library = None
        self.queued_notifications: list[Notify] = []
        self._listening = False

    def bind_coordinator(self, coordinator) -> None:
        self.coordinator = coordinator
        coordinator.trackError.connect(self.report_error)

    @Slot(str)
    def report_error(self, message: str):
        self.notify(message, "error")

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        n = Notify(message=message, notify_type=notify_type)
        if not self._listening:
            self.queued_notifications.append(n)
            return
        self.notification.emit(n)

    def take_queued(self) -> list[Notify]:
        self._listening = True
        queued, self.queued_notifications = self.queued_notifications, []
        return queued
