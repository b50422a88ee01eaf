"""Application icon and splash logo helpers."""
from __future__ import annotations


def create_logo(size: int = 64, background: str = "#2C2C2C", accent: str = "#40C4FF"):  # pragma: no cover - requires PyQt at runtime
    """Paint the PlainQR logo, three finder squares on a rounded tile, into a ``QPixmap``.

    The import is performed lazily so that automated tests do not require a
    graphical backend.
    """

    try:
        from PyQt5.QtCore import QRectF, Qt
        from PyQt5.QtGui import QBrush, QColor, QPainter, QPixmap
    except ImportError as exc:
        raise RuntimeError("PyQt5 is required to draw the PlainQR logo") from exc

    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)
    painter.setPen(Qt.NoPen)
    painter.setBrush(QBrush(QColor(background)))
    painter.drawRoundedRect(QRectF(0, 0, size, size), size / 6, size / 6)

    cell = size / 9
    for col, row in ((1, 1), (5, 1), (1, 5)):
        painter.setBrush(QBrush(QColor(accent)))
        painter.drawRect(QRectF(col * cell, row * cell, 3 * cell, 3 * cell))
        painter.setBrush(QBrush(QColor(background)))
        painter.drawRect(QRectF((col + 0.5) * cell, (row + 0.5) * cell, 2 * cell, 2 * cell))
        painter.setBrush(QBrush(QColor(accent)))
        painter.drawRect(QRectF((col + 1) * cell, (row + 1) * cell, cell, cell))

    painter.setBrush(QBrush(QColor(accent)))
    painter.drawRect(QRectF(5.5 * cell, 5.5 * cell, 2 * cell, 2 * cell))
    painter.end()

    return pixmap


def create_icon(size: int = 64):  # pragma: no cover - requires PyQt at runtime
    """Create the :class:`~PyQt5.QtGui.QIcon` used for the main window."""

    try:
        from PyQt5.QtGui import QIcon
    except ImportError as exc:
        raise RuntimeError("PyQt5 is required to generate the application icon") from exc

    return QIcon(create_logo(size))


__all__ = ["create_icon", "create_logo"]
