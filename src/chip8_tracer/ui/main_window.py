# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
フレームバッファ表示、レジスタ表示、実行制御ツールバーを保持し、
QTimer でホストループを一定周期で駆動します。
"""
import sys
import time
from dataclasses import replace
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QToolBar, QLabel, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.core.errors import MachineFault
from chip8_tracer.host.loop import HostLoop
from .display_view import FramebufferView
from .register_view import RegisterView

# 1回のタイマ発火で実行するサイクル数の上限
MAX_CYCLES_PER_TIMEOUT = 64

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIコンポーネントとホストループを組み立てます。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[SystemConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("CHIP-8 Core Tracer")

        self._config = config or SystemConfig()
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)
        self._last_tick = 0.0

        self._create_views()
        self._setup_backend(self._config)
        self._create_toolbar()
        self._create_menus()

        self._update_ui_state(False)

    # @intent:responsibility 構成に基づいてCPU・バス・ホストループを生成し、ビューを接続します。
    def _setup_backend(self, config: SystemConfig):
        self.cpu, self.bus = SystemBuilder().build_system(config)
        self._config = config
        self.host = HostLoop(self.cpu, config.keymap, config.cycle_period_ms)
        self.display_view.set_display_config(config.display)
        self.display_view.set_framebuffer(self.cpu.framebuffer)
        self.register_view.set_cpu(self.cpu)
        self.register_view.update_registers()

    def _create_views(self):
        self.display_view = FramebufferView()
        self.setCentralWidget(self.display_view)

        status_dock = QDockWidget("Registers", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        status_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

        self.status_label = QLabel("Stopped")
        self.statusBar().addWidget(self.status_label)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_program_action = QAction("Load Program...", self)
        self.load_program_action.setShortcut("Ctrl+O")
        self.load_program_action.triggered.connect(self._load_program_file)
        file_menu.addAction(self.load_program_action)

        self.load_config_action = QAction("Load Config...", self)
        self.load_config_action.triggered.connect(self._load_system_config)
        file_menu.addAction(self.load_config_action)

    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self._run)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset)
        toolbar.addAction(self.reset_action)

    def _update_ui_state(self, is_running: bool):
        self.load_program_action.setEnabled(not is_running)
        self.load_config_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    @Slot()
    def _run(self):
        self._update_ui_state(True)
        self.status_label.setText("Running")
        self._last_tick = time.perf_counter()
        self._timer.start(max(1, int(self.host.cycle_period_ms)))

    @Slot()
    def _stop(self):
        self._timer.stop()
        self.host.release_all()
        self._update_ui_state(False)
        self.status_label.setText("Stopped")
        self._refresh_views()

    @Slot()
    def _step(self):
        self._run_cycles(1)
        self._refresh_views()

    @Slot()
    def _reset(self):
        self._timer.stop()
        self.cpu.reset()
        self._update_ui_state(False)
        self.status_label.setText("Reset")
        self._refresh_views()

    # @intent:responsibility 前回のタイマ発火からの経過時間に見合うサイクル数を実行します。
    @Slot()
    def _on_timeout(self):
        now = time.perf_counter()
        due = min(self.host.cycles_due(now - self._last_tick), MAX_CYCLES_PER_TIMEOUT)
        if due == 0:
            return
        self._last_tick = now
        if self._run_cycles(due):
            self.display_view.refresh()

    # @intent:responsibility 指定数のサイクルを実行します。フォールト時はタイマを止めて通知し、Falseを返します。
    def _run_cycles(self, count: int) -> bool:
        try:
            for _ in range(count):
                self.host.tick()
        except MachineFault as fault:
            self._timer.stop()
            self._update_ui_state(False)
            self.status_label.setText("Faulted")
            self._refresh_views()
            QMessageBox.critical(self, "Machine Fault", f"{fault}\n\nReset the machine to continue.")
            return False
        return True

    def _refresh_views(self):
        self.display_view.refresh()
        self.register_view.update_registers()

    # @intent:responsibility ホストのキー押下をホストループへ転送します（オートリピートは無視）。
    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not event.text():
            super().keyPressEvent(event)
            return
        self.host.press(event.text())

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not event.text():
            super().keyReleaseEvent(event)
            return
        self.host.release(event.text())

    @Slot()
    def _load_program_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 Program", "", "CHIP-8 Programs (*.ch8 *.rom);;All Files (*)")
        if file_name:
            try:
                self.load_program(file_name)
                self.status_label.setText(f"Loaded {file_name}")
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Failed to load program: {e}")

    # @intent:responsibility 新しいメモリ空間を構築し、そこへプログラムをロードします。
    def load_program(self, file_name: str):
        self._timer.stop()
        self._setup_backend(replace(self._config, program=file_name))
        self._update_ui_state(False)
        self._refresh_views()

    @Slot()
    def _load_system_config(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open System Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                config = ConfigLoader().load_from_file(file_name)
                self._timer.stop()
                self._setup_backend(config)
                self._update_ui_state(False)
                self._refresh_views()
                self.status_label.setText(f"Loaded config {file_name}")
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Failed to load system config: {e}")

    def closeEvent(self, event: QCloseEvent):
        self._timer.stop()
        event.accept()


if __name__ == '__main__':
    app = QApplication(sys.argv)
    main_win = MainWindow()
    main_win.show()
    sys.exit(app.exec())
