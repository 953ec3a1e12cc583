# retro_chip8/core/state.py
"""
Core Layer (CPU状態)

AbstractCpu が直接扱う最小限のレジスタ（PCとSP）を定義します。
"""
from dataclasses import dataclass

# @intent:responsibility 全アーキテクチャ共通のレジスタを保持します。固有のレジスタはサブクラスで追加します。
@dataclass
class CpuState:
    pc: int = 0x0000  # Program Counter
    sp: int = 0x0000  # Stack Pointer（CHIP-8ではスタック上のエントリ数）
