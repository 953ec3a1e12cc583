# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.core.errors import OutOfRangeError, StackOverflowError, StackUnderflowError

MEMORY_SIZE = 0x1000
PROGRAM_OFFSET = 0x200
STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG_REGISTER = 0xF

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP）、スタック、タイマー、キー状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    sp はスタック上の有効なエントリ数を表します。
    """
    pc: int = PROGRAM_OFFSET
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    i: int = 0x0000    # Index Register
    delay_timer: int = 0
    sound_timer: int = 0
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    keys: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    wait_for_key: Optional[int] = None  # キー入力待ちで値を受け取るレジスタ番号

    # @intent:accessor VFフラグレジスタへのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value

    # @intent:responsibility 戻りアドレスをスタックへ積みます。
    # @intent:pre-condition スタックに空きがあること。満杯の場合は StackOverflowError。
    def push(self, address: int) -> None:
        if self.sp >= STACK_SIZE:
            raise StackOverflowError(f"Call stack overflow at PC {self.pc:#05x} (capacity {STACK_SIZE}).")
        self.stack[self.sp] = address
        self.sp += 1

    # @intent:responsibility スタックから戻りアドレスを取り出します。
    # @intent:pre-condition スタックが空でないこと。空の場合は StackUnderflowError。
    def pop(self) -> int:
        if self.sp == 0:
            raise StackUnderflowError(f"Return with empty call stack at PC {self.pc:#05x}.")
        self.sp -= 1
        return self.stack[self.sp]

    # @intent:responsibility レジスタ値をキー番号として検証し、押下状態を返します。
    def is_key_pressed(self, key: int) -> bool:
        if not 0 <= key < NUM_KEYS:
            raise OutOfRangeError(f"Key {key:#04x} out of range (0x0-0xF).")
        return self.keys[key]

    # @intent:responsibility 両タイマーを1だけ減算します（0未満にはならない）。
    def tick_timers(self) -> None:
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
