# src/chip8_tracer/ui/register_view.py
"""
レジスタパネル。
get_register_layout() のグループごとに枠を作り、get_register_map() の値を16進で表示します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.common.types import RegisterInfo

# 1行に並べるレジスタの数（V0-VF は4x4になる）
COLUMNS = 4

# @intent:responsibility CPUのレジスタ値を表示します。直前の更新から変化した値は強調します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
        self._fields: Dict[str, QLabel] = {}
        self._infos: Dict[str, RegisterInfo] = {}
        self._previous: Dict[str, int] = {}
        self._cpu: Optional[AbstractCpu] = None

    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._rebuild()

    def _rebuild(self) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._fields.clear()
        self._infos.clear()
        self._previous.clear()

        for group in self._cpu.get_register_layout():
            box = QGroupBox(group.group_name)
            grid = QGridLayout(box)
            grid.setHorizontalSpacing(12)
            for index, reg in enumerate(group.registers):
                row, col = divmod(index, COLUMNS)
                name = QLabel(reg.name)
                value = QLabel("0x" + "0" * reg.hex_digits)
                value.setFont(self._font)
                value.setAlignment(Qt.AlignRight)
                grid.addWidget(name, row, col * 2)
                grid.addWidget(value, row, col * 2 + 1)
                self._fields[reg.name] = value
                self._infos[reg.name] = reg
            self._layout.addWidget(box)

        self._layout.addStretch()

    # @intent:responsibility 現在値で表示を更新します。
    def update_registers(self) -> None:
        if not self._cpu:
            return
        for name, value in self._cpu.get_register_map().items():
            field = self._fields.get(name)
            if field is None:
                continue
            field.setText(f"0x{value:0{self._infos[name].hex_digits}X}")
            changed = name in self._previous and self._previous[name] != value
            field.setStyleSheet("color: #FF5555;" if changed else "color: #FFD700;")
            self._previous[name] = value

    def value_text(self, name: str) -> str:
        return self._fields[name].text()
