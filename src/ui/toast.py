from PySide6.QtWidgets import QFrame, QLabel, QHBoxLayout
from PySide6.QtCore import Qt, QTimer

_KINDS = {"warning": "warn", "critical": "error"}
_STYLE = """
QFrame { border-radius: 10px; padding: 10px 12px; background: #222; color: #fff; }
QFrame#toast-success { background: #1f6f3b; }
QFrame#toast-warn { background: #7a5b12; }
QFrame#toast-error { background: #7a1b1b; }
"""
_GAP = 8


class Toast(QFrame):
    """Self-closing message in the bottom-right corner of the parent's window."""

    _open: list["Toast"] = []

    def __init__(self, parent, text: str, kind: str = "info", ms: int = 3000):
        super().__init__(parent)
        self.setWindowFlags(Qt.ToolTip)  # floats above

        self.label = QLabel(text)
        self.label.setWordWrap(True)
        self.label.setMaximumWidth(360)
        QHBoxLayout(self).addWidget(self.label)

        self.kind = _KINDS.get(kind, kind)
        self.setObjectName(f"toast-{self.kind}")
        self.setStyleSheet(_STYLE)

        # error toasts stay a little longer
        QTimer.singleShot(ms * 2 if self.kind == "error" else ms, self.close)

    def show_bottom_right(self, margin=16):
        host = self.parentWidget().window() if self.parentWidget() else None
        self.adjustSize()
        if host is not None:
            geo = host.frameGeometry()
            stacked = sum(t.height() + _GAP for t in Toast._open if t.parentWidget() is self.parentWidget())
            self.move(
                geo.x() + geo.width() - self.width() - margin,
                geo.y() + geo.height() - self.height() - margin - stacked,
            )
        Toast._open.append(self)
        self.show()

    def closeEvent(self, event):
        if self in Toast._open:
            Toast._open.remove(self)
        super().closeEvent(event)


def show_toast(parent, text: str, kind: str = "info", ms: int = 3000) -> Toast:
    toast = Toast(parent, text, kind, ms)
    toast.show_bottom_right()
    return toast
