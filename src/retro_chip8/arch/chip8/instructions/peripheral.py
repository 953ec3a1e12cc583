# src/retro_chip8/arch/chip8/instructions/peripheral.py
"""
画面描画命令とキーボード命令の実装。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Peripherals

# --- CLS (00E0) ---
def execute_clear_screen(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    peripherals.display.clear()
    return state.pc + 2

# --- DRW Vx, Vy, n (Dxyn) ---
# @intent:responsibility Iから n バイトのスプライトを読み出し、(Vx, Vy) にXOR描画します。
# @intent:post-condition 点灯ピクセルが消えた場合 VF=1、そうでなければ VF=0。
def execute_draw(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    x = state.v[inst.x]
    y = state.v[inst.y]
    sprite = [bus.read(state.i + row) for row in range(inst.nibble)]
    collision = peripherals.display.draw(x, y, sprite)
    state.vf = 1 if collision else 0
    return state.pc + 2

# --- SKP Vx (Ex9E) ---
def execute_skip_pressed(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    if state.is_key_pressed(state.v[inst.x]):
        return state.pc + 4
    return state.pc + 2

# --- SKNP Vx (ExA1) ---
def execute_skip_not_pressed(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    if not state.is_key_pressed(state.v[inst.x]):
        return state.pc + 4
    return state.pc + 2

# --- LD Vx, K (Fx0A) ---
# @intent:responsibility キー入力待ち状態に入ります。押されたキーは Chip8Cpu.key_press で Vx に格納されます。
# @intent:rationale PCは次の命令へ進めておき、待機中はCPU側でフェッチ自体を止める。
def execute_wait_for_key(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.wait_for_key = inst.x
    return state.pc + 2
