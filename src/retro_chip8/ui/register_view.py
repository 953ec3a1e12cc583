# src/retro_chip8/ui/register_view.py
"""
レジスタ表示ウィジェット。
CPUが返すレイアウト情報（get_register_layout）から表示欄を組み立て、
run_cycle の後に get_register_map の値で書き換えます。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from retro_chip8.core.cpu import AbstractCpu

COLUMNS = 4

GROUP_STYLE = """
QGroupBox { font-weight: bold; border: 1px solid #222; border-radius: 4px; margin-top: 20px; color: #EEE; }
QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 5px; color: #00AAAA; }
"""

# @intent:responsibility レジスタ名と16進値の組をグループ毎のグリッドに並べて表示します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")
        self._root = QVBoxLayout(self)
        self._root.setContentsMargins(5, 5, 5, 5)

        self._value_style = (
            f"font-family: '{QFontDatabase.systemFont(QFontDatabase.FixedFont).family()}', monospace;"
            " color: #FFD700;"
        )
        self._cpu: Optional[AbstractCpu] = None
        self._fields: Dict[str, QLabel] = {}
        self._digits: Dict[str, int] = {}

    # @intent:responsibility 表示対象のCPUを差し替え、表示欄を作り直します。
    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._rebuild()
        self.update_registers()

    # @intent:rationale V0-VFの16本を縦一列に並べると高さが画面を超えるため、COLUMNS 列のグリッドにする。
    def _rebuild(self) -> None:
        while self._root.count():
            item = self._root.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._fields.clear()
        self._digits.clear()

        for group in self._cpu.get_register_layout():
            box = QGroupBox(group.group_name)
            box.setStyleSheet(GROUP_STYLE)
            grid = QGridLayout(box)
            grid.setContentsMargins(10, 15, 10, 10)
            grid.setSpacing(5)

            for index, reg in enumerate(group.registers):
                row, col = divmod(index, COLUMNS)
                grid.addWidget(QLabel(f"{reg.name}:"), row, col * 2)
                grid.addWidget(self._add_field(reg.name, reg.width), row, col * 2 + 1)

            self._root.addWidget(box)

        self._root.addStretch()

    def _add_field(self, name: str, width: int) -> QLabel:
        digits = (width + 3) // 4  # 8bit -> 2桁, 16bit -> 4桁
        field = QLabel("0x" + "0" * digits)
        field.setStyleSheet(self._value_style)
        field.setAlignment(Qt.AlignRight)
        self._fields[name] = field
        self._digits[name] = digits
        return field

    # @intent:responsibility 現在のレジスタ値で表示を更新します。レイアウトに無いレジスタは無視します。
    def update_registers(self) -> None:
        if self._cpu is None:
            return
        for name, value in self._cpu.get_register_map().items():
            field = self._fields.get(name)
            if field is not None:
                field.setText(f"0x{value:0{self._digits[name]}X}")

    def get_register_text(self, name: str) -> str:
        return self._fields[name].text()
