# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
画面、トレース、レジスタの各ビューを保持し、デバッガ（制御面）をポーリングして表示を更新します。
"""
import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QAction, QCloseEvent, QColor, QKeyEvent, QPalette
from PySide6.QtWidgets import QApplication, QDockWidget, QLabel, QMainWindow, QTabWidget, QToolBar

from chip8_tracer.arch.chip8.state import REGISTER_LAYOUT
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.snapshot import EmulatorStatus, Snapshot
from chip8_tracer.debugger.debugger import Debugger
from chip8_tracer.transport.host import QueueHost
from .register_view import RegisterView
from .screen_view import ScreenView
from .trace_view import TraceView

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[EmulatorConfig] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("CHIP-8 Tracer")
        self._config = config if config is not None else EmulatorConfig()
        self.host = QueueHost()
        self.debugger = Debugger(self._config, host=self.host)

        self._set_dark_theme()
        self.screen_view = ScreenView(self._config.display)
        self.setCentralWidget(self.screen_view)
        self._create_toolbar()
        self._create_status_inspector()

        # UIスレッドは公開スナップショットと最後のフレームだけを読む
        self._poll_timer = QTimer(self)
        self._poll_timer.timeout.connect(self.refresh)
        self._poll_timer.start(max(1, 1000 // self._config.timer_hz))

        self._update_ui_state(EmulatorStatus.IDLE)

    def start(self, program: bytes, paused: bool = False) -> None:
        self.debugger.start(program, paused=paused)
        self.pause_action.setChecked(paused)
        self.screen_view.setFocus()
        self.refresh()

    # @intent:responsibility 一時停止/再開、停止のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.pause_action = QAction("Pause", self)
        self.pause_action.setCheckable(True)
        self.pause_action.toggled.connect(self._toggle_pause)
        toolbar.addAction(self.pause_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop_emulator)
        toolbar.addAction(self.stop_action)

        self.status_label = QLabel("Idle")
        toolbar.addWidget(self.status_label)

    # @intent:responsibility 右側のステータスインスペクタ（レジスタ、トレース）を作成します。
    def _create_status_inspector(self):
        status_dock = QDockWidget("Status Inspector", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        tab_widget = QTabWidget()
        self.register_view = RegisterView()
        self.register_view.set_layout(REGISTER_LAYOUT)
        tab_widget.addTab(self.register_view, "Registers")
        self.trace_view = TraceView()
        tab_widget.addTab(self.trace_view, "Trace")
        status_dock.setWidget(tab_widget)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

    def _update_ui_state(self, status: EmulatorStatus, error: Optional[str] = None):
        running = status in (EmulatorStatus.RUNNING, EmulatorStatus.PAUSED)
        self.pause_action.setEnabled(running)
        self.stop_action.setEnabled(running)
        text = status.value.capitalize()
        if error:
            text = f"{text}: {error}"
        self.status_label.setText(text)

    # @intent:responsibility 公開スナップショットと最新フレームに基づいてUIを更新します。
    @Slot()
    def refresh(self):
        snapshot: Snapshot = self.debugger.read_snapshot()
        self.screen_view.set_frame(self.host.latest_frame())
        self.trace_view.update_trace(snapshot.trace)
        if snapshot.state is not None:
            self.register_view.update_registers(snapshot.state.register_map())
        self._update_ui_state(snapshot.status, snapshot.error)

    @Slot(bool)
    def _toggle_pause(self, paused: bool):
        self.debugger.pause(paused)
        self.pause_action.setText("Resume" if paused else "Pause")

    @Slot()
    def _stop_emulator(self):
        self.debugger.stop()
        self.refresh()

    # --- キー入力はホストのイベントキューへ転送する ---

    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        if event.key() == Qt.Key_Escape:
            logger.info("Escape pressed, requesting shutdown")
            self.host.post_quit()
            return
        self.host.post_key_down(int(event.key()))

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        self.host.post_key_up(int(event.key()))

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)

    # @intent:responsibility ウィンドウを閉じる際に、エミュレーションスレッドを停止・待機します。
    def closeEvent(self, event: QCloseEvent):
        self._poll_timer.stop()
        self.debugger.stop()
        event.accept()
