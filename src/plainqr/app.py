"""PyQt5 user interface for PlainQR."""
from __future__ import annotations

import logging

from PyQt5.QtCore import (
    QEvent,
    QObject,
    QPropertyAnimation,
    QRectF,
    QThread,
    QTimer,
    QVariantAnimation,
    QEasingCurve,
    Qt,
    pyqtSignal,
)
from PyQt5.QtGui import QBrush, QColor, QConicalGradient, QFont, QImage, QPainter, QPen, QPixmap
from PyQt5.QtWidgets import (
    QApplication,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from .animation import Cooldown, glow_stops, press_scale
from .camera import CameraUnavailableError, Frame, camera_frames
from .config import AppConfig, CameraConfig, StyleConfig
from .decoder import BarcodeDecoder
from .icon import create_icon, create_logo
from .links import format_host
from .opener import LinkOpener
from .scanner import Scanner
from .state import AppState
from .threads import shutdown_thread

logger = logging.getLogger(__name__)

CAMERA_UNAVAILABLE = "Camera unavailable – check camera permissions"


class ScanWorker(QObject):  # pragma: no cover - requires Qt event loop
    """Background worker that pulls camera frames until a link is found."""

    frame_captured = pyqtSignal(object)
    decoded = pyqtSignal(str)
    status = pyqtSignal(str)
    failed = pyqtSignal(str)
    finished = pyqtSignal()

    def __init__(self, scanner: Scanner, config: AppConfig, camera_config: CameraConfig):
        super().__init__()
        self._scanner = scanner
        self._config = config
        self._camera_config = camera_config
        self._running = False

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        self._running = True
        frames = camera_frames(self._config, self._camera_config)
        links = self._scanner.candidates(self._preview(frames))

        try:
            for url in links:
                # A result that arrives after stop() belongs to a paused scan.
                if self._running:
                    self.decoded.emit(url)
                break
        except CameraUnavailableError:
            self.failed.emit(CAMERA_UNAVAILABLE)
        except RuntimeError as exc:
            logger.error("Scanning stopped: %s", exc)
            self.failed.emit(str(exc))
        finally:
            self._running = False
            links.close()
            frames.close()
            self.finished.emit()

    def _preview(self, frames):
        announced = False
        for frame in frames:
            if not self._running:
                return
            if not announced:
                self.status.emit("Camera active – point at a QR code")
                announced = True
            self.frame_captured.emit(frame)
            yield frame


class GlowButton(QPushButton):  # pragma: no cover - requires Qt event loop
    """Push button with a rotating gradient border, press scaling and a cooldown."""

    activated = pyqtSignal()

    def __init__(self, label: str, config: AppConfig, style: StyleConfig, parent: QWidget | None = None):
        super().__init__(label, parent)
        self._config = config
        self._style = style
        self._cooldown = Cooldown(config.button_cooldown_ms)
        self._progress = 0.0
        self._scale = 1.0

        self.setMinimumHeight(style.button_height)
        self.setCursor(Qt.PointingHandCursor)
        self.setFont(QFont(style.font_family.split(",")[0], style.button_font_size))

        self._glow = QVariantAnimation(self)
        self._glow.setStartValue(0.0)
        self._glow.setEndValue(1.0)
        self._glow.setDuration(config.glow_period_ms)
        self._glow.setLoopCount(-1)
        self._glow.valueChanged.connect(self._set_progress)
        self._glow.start()

        self._press = QVariantAnimation(self)
        self._press.setDuration(config.button_press_ms)
        self._press.setEasingCurve(QEasingCurve.OutCubic)
        self._press.valueChanged.connect(self._set_scale)

        self.pressed.connect(lambda: self._animate_press(True))
        self.released.connect(lambda: self._animate_press(False))
        self.clicked.connect(self._on_clicked)

    def _set_progress(self, value) -> None:
        self._progress = float(value)
        self.update()

    def _set_scale(self, value) -> None:
        self._scale = float(value)
        self.update()

    def _animate_press(self, pressed: bool) -> None:
        self._press.stop()
        self._press.setStartValue(self._scale)
        self._press.setEndValue(press_scale(pressed))
        self._press.start()

    def _on_clicked(self) -> None:
        if not self._cooldown.try_acquire():
            return
        QApplication.beep()
        self.activated.emit()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        style = self._style
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        rect = QRectF(self.rect())
        center = rect.center()
        painter.translate(center)
        painter.scale(self._scale, self._scale)
        painter.translate(-center)

        stroke = 2.0
        radius = float(style.button_radius)
        border = rect.adjusted(4 + stroke / 2, 4 + stroke / 2, -4 - stroke / 2, -4 - stroke / 2)

        gradient = QConicalGradient(center, 0)
        for position, color in glow_stops(self._progress, style.glow_colors, self._config.glow_steps):
            gradient.setColorAt(position, QColor(color))

        painter.setPen(QPen(QBrush(gradient), stroke))
        painter.setBrush(Qt.NoBrush)
        painter.drawRoundedRect(border, radius, radius)

        inner = border.adjusted(4, 4, -4, -4)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(style.bg_panel))
        painter.drawRoundedRect(inner, radius, radius)

        painter.setPen(QColor(style.fg_primary))
        painter.setFont(self.font())
        painter.drawText(inner, Qt.AlignCenter, self.text())
        painter.end()


class SplashScreen(QWidget):  # pragma: no cover - requires Qt event loop
    finished = pyqtSignal()

    def __init__(self, config: AppConfig, style: StyleConfig):
        super().__init__()
        self._config = config
        self.setObjectName("Splash")
        self.setAttribute(Qt.WA_StyledBackground, True)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)

        logo = QLabel()
        logo.setAlignment(Qt.AlignCenter)
        logo.setPixmap(create_logo(256, style.bg_panel, style.accent_primary))

        name = QLabel(config.app_name)
        name.setObjectName("SplashLabel")
        name.setAlignment(Qt.AlignCenter)

        layout.addWidget(logo)
        layout.addWidget(name)

        self._effect = QGraphicsOpacityEffect(self)
        self._effect.setOpacity(0.0)
        self.setGraphicsEffect(self._effect)

        self._fade = QPropertyAnimation(self._effect, b"opacity", self)
        self._fade.finished.connect(self._on_fade_finished)

    def start(self) -> None:
        QTimer.singleShot(self._config.splash_delay_ms, self._fade_in)

    def _fade_in(self) -> None:
        self._animate(1.0, self._config.splash_fade_in_ms)
        QTimer.singleShot(self._config.splash_hold_ms, self._fade_out)

    def _fade_out(self) -> None:
        self._animate(0.0, self._config.splash_fade_out_ms)

    def _animate(self, target: float, duration: int) -> None:
        self._fade.stop()
        self._fade.setDuration(duration)
        self._fade.setStartValue(self._effect.opacity())
        self._fade.setEndValue(target)
        self._fade.start()

    def _on_fade_finished(self) -> None:
        if self._fade.endValue() == 0.0:
            self.finished.emit()


class ResultPanel(QWidget):  # pragma: no cover - requires Qt event loop
    visit_requested = pyqtSignal()
    exit_requested = pyqtSignal()

    def __init__(self, config: AppConfig, style: StyleConfig, parent: QWidget):
        super().__init__(parent)
        self.setObjectName("ResultOverlay")
        self.setAttribute(Qt.WA_StyledBackground, True)

        outer = QVBoxLayout(self)
        outer.setContentsMargins(32, 32, 32, 32)
        outer.setAlignment(Qt.AlignCenter)

        card = QWidget()
        card.setObjectName("ResultCard")
        card.setAttribute(Qt.WA_StyledBackground, True)
        card.setMaximumWidth(520)
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(8)

        title = QLabel("Scanned site:")
        title.setAlignment(Qt.AlignCenter)

        self._host = QLabel()
        self._host.setObjectName("HostLabel")
        self._host.setAlignment(Qt.AlignCenter)
        self._host.setWordWrap(True)

        buttons = QHBoxLayout()
        buttons.setSpacing(16)
        visit = GlowButton("Visit", config, style)
        dismiss = GlowButton("Exit", config, style)
        visit.activated.connect(self.visit_requested)
        dismiss.activated.connect(self.exit_requested)
        buttons.addWidget(visit)
        buttons.addWidget(dismiss)

        card_layout.addWidget(title)
        card_layout.addWidget(self._host)
        card_layout.addSpacing(8)
        card_layout.addLayout(buttons)
        outer.addWidget(card)

    def show_link(self, url: str) -> None:
        self._host.setText(format_host(url))
        self._host.setToolTip(url)
        self.show()
        self.raise_()


class ScannerWindow(QWidget):  # pragma: no cover - requires Qt event loop
    def __init__(
        self,
        config: AppConfig,
        state: AppState,
        style: StyleConfig,
        camera_config: CameraConfig,
    ):
        super().__init__()
        self._config = config
        self._state = state
        self._style = style
        self._camera_config = camera_config

        self._decoder = BarcodeDecoder()
        self._opener = LinkOpener(config.allowed_schemes)
        self._state.decoder_available = self._decoder.is_available()

        self._thread: QThread | None = None
        self._worker: ScanWorker | None = None
        self._restart_pending = False
        self._cv2_module = None

        self._setup_ui()

    def _setup_ui(self) -> None:
        self._preview = QLabel(self)
        self._preview.setObjectName("CameraPreview")
        self._preview.setAlignment(Qt.AlignCenter)

        self._message = QLabel("Starting camera…", self)
        self._message.setAlignment(Qt.AlignCenter)
        self._message.setWordWrap(True)

        self._result = ResultPanel(self._config, self._style, self)
        self._result.visit_requested.connect(self._visit)
        self._result.exit_requested.connect(self._dismiss)
        self._result.hide()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        for widget in (self._preview, self._message, self._result):
            widget.setGeometry(self.rect())

    def start_camera(self) -> None:
        if not self._state.decoder_available:
            self._show_message("Install opencv-python and pyzbar (with zbar) to scan QR codes")
            return
        if not self._state.session.camera_active:
            return
        if self._thread is not None:
            self._restart_pending = True
            return

        if self._cv2_module is None:
            import cv2  # type: ignore

            self._cv2_module = cv2

        self._state.camera_available = True
        self._show_message("Starting camera…")

        scanner = Scanner(self._decoder, self._config.camera_frame_skip, self._config.allowed_schemes)
        worker = ScanWorker(scanner, self._config, self._camera_config)
        thread = QThread()
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.frame_captured.connect(self._on_frame)
        worker.decoded.connect(self._on_decoded)
        worker.status.connect(self._on_status)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(thread.quit)
        thread.finished.connect(self._on_thread_finished)

        self._thread = thread
        self._worker = worker
        thread.start()
        logger.debug("Scan worker started")

    def stop_camera(self, wait: bool = False) -> None:
        self._restart_pending = False
        if self._worker:
            self._worker.stop()
        if wait:
            shutdown_thread(self._thread)
        self._preview.clear()

    def on_activated(self) -> None:
        if self._state.on_activated():
            self.start_camera()

    def _resume_if_still_active(self) -> None:
        # Browsers opened in the background never take focus away from us.
        if self.window().isActiveWindow() and self._state.session.resume():
            self.start_camera()

    def _show_message(self, text: str) -> None:
        self._message.setText(text)
        self._message.show()

    def _on_frame(self, frame: Frame) -> None:
        if self._cv2_module is None or frame.preview is None or not self._state.session.camera_active:
            return

        cv2 = self._cv2_module
        image = frame.preview
        rotations = {
            90: cv2.ROTATE_90_CLOCKWISE,
            180: cv2.ROTATE_180,
            270: cv2.ROTATE_90_COUNTERCLOCKWISE,
        }
        if frame.rotation in rotations:
            image = cv2.rotate(image, rotations[frame.rotation])

        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        height, width, channel = rgb.shape
        qimage = QImage(rgb.data, width, height, channel * width, QImage.Format_RGB888)
        pixmap = QPixmap.fromImage(qimage.copy())
        target = self._preview.size()
        if target.width() and target.height():
            pixmap = pixmap.scaled(target, Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation)
        self._preview.setPixmap(pixmap)
        self._message.hide()

    def _on_decoded(self, url: str) -> None:
        if not self._state.session.present(url):
            return
        QApplication.beep()
        self.stop_camera()
        self._result.setGeometry(self.rect())
        self._result.show_link(url)

    def _on_status(self, message: str) -> None:
        logger.debug(message)
        self._show_message(message)

    def _on_failed(self, message: str) -> None:
        self._state.camera_available = False
        self._restart_pending = False
        self._preview.clear()
        self._show_message(message)

    def _on_thread_finished(self) -> None:
        self._thread = None
        self._worker = None
        if self._restart_pending:
            self._restart_pending = False
            self.start_camera()

    def _visit(self) -> None:
        if not self._state.session.dialog_visible:
            return
        self._result.hide()
        if self._state.session.follow(self._opener.open):
            self._show_message("Return to this window to scan again")
            QTimer.singleShot(self._config.resume_check_ms, self._resume_if_still_active)
        else:
            self.start_camera()

    def _dismiss(self) -> None:
        if not self._state.session.dialog_visible:
            return
        self._state.session.dismiss()
        self._result.hide()
        self.start_camera()


class PlainQRApp(QMainWindow):  # pragma: no cover - requires Qt event loop
    def __init__(self) -> None:
        super().__init__()

        self._config = AppConfig()
        self._camera_config = CameraConfig()
        self._style = StyleConfig()
        self._state = AppState()
        self._scanner_window: ScannerWindow | None = None

        self._setup_ui()

    def _setup_ui(self) -> None:
        self.setWindowTitle(f"{self._config.app_name} v{self._config.app_version}")
        self.setGeometry(100, 100, 480, 800)
        self.setMinimumSize(360, 560)

        try:
            self.setWindowIcon(create_icon())
        except RuntimeError:
            logger.warning("Window icon unavailable")

        self._apply_stylesheet()

        self._stack = QStackedWidget()
        self._splash = SplashScreen(self._config, self._style)
        self._splash.finished.connect(self._show_scanner)
        self._stack.addWidget(self._splash)
        self.setCentralWidget(self._stack)

        self.show()
        self._splash.start()

    def _apply_stylesheet(self) -> None:
        style = self._style
        self.setStyleSheet(
            f"""
            QMainWindow {{ background: {style.bg_primary}; }}
            QWidget {{ color: {style.fg_primary}; font-family: {style.font_family}; font-size: {style.font_size}px; }}
            #Splash {{ background: {style.bg_splash}; }}
            #SplashLabel {{ color: {style.bg_panel}; font-size: 28px; font-weight: bold; }}
            #CameraPreview {{ background: {style.bg_primary}; }}
            #ResultOverlay {{ background: {style.bg_overlay}; }}
            #ResultCard {{ background: {style.bg_panel}; border-radius: 12px; }}
            #HostLabel {{ color: {style.accent_primary}; font-size: {style.host_font_size}px; }}
            """
        )

    def _show_scanner(self) -> None:
        self._scanner_window = ScannerWindow(
            self._config,
            self._state,
            self._style,
            self._camera_config,
        )
        self._stack.addWidget(self._scanner_window)
        self._stack.setCurrentWidget(self._scanner_window)
        self._stack.removeWidget(self._splash)
        self._splash.deleteLater()
        self._scanner_window.start_camera()

    def changeEvent(self, event) -> None:  # type: ignore[override]
        super().changeEvent(event)
        if (
            event.type() == QEvent.ActivationChange
            and self.isActiveWindow()
            and self._scanner_window is not None
        ):
            self._scanner_window.on_activated()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        if self._scanner_window:
            self._scanner_window.stop_camera(wait=True)
        event.accept()


def run() -> int:  # pragma: no cover - requires Qt event loop
    config = AppConfig()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication.instance() or QApplication([])
    app.setApplicationName(config.app_name)
    window = PlainQRApp()
    logger.info("%s %s started", config.app_name, config.app_version)
    return app.exec_()


__all__ = ["run", "PlainQRApp"]
