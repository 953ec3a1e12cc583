# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

各実行関数は次に実行すべきPCを返します。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Peripherals

# --- RET (00EE) ---
# @intent:responsibility スタックから戻りアドレスを取り出し、CALL命令の次へ復帰します。
# @intent:rationale スタックにはCALL命令自身のアドレスが積まれているため +2 します。
def execute_return(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    return state.pop() + 2

# --- JP addr (1nnn) ---
def execute_jump_to(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    return inst.addr

# --- CALL addr (2nnn) ---
# @intent:responsibility 現在のPCをスタックに積み、サブルーチンへジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.push(state.pc)
    return inst.addr

# --- JP V0, addr (Bnnn) ---
def execute_jump_plus(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    return inst.addr + state.v[0x0]

# --- SE Vx, byte (3xkk) ---
def execute_skip_if_equals_byte(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    return _skip_if(state, state.v[inst.x] == inst.byte)

# --- SNE Vx, byte (4xkk) ---
def execute_skip_if_not_equals_byte(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    return _skip_if(state, state.v[inst.x] != inst.byte)

# --- SE Vx, Vy (5xy0) ---
def execute_skip_if_equals(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    return _skip_if(state, state.v[inst.x] == state.v[inst.y])

# --- SNE Vx, Vy (9xy0) ---
def execute_skip_if_not_equals(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    return _skip_if(state, state.v[inst.x] != state.v[inst.y])

# @intent:utility_function 条件成立時は次の命令を飛ばす (+4)、不成立時は次の命令へ進む (+2)。
def _skip_if(state: Chip8CpuState, condition: bool) -> int:
    return state.pc + 4 if condition else state.pc + 2
