# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術・論理演算命令の実装。

フラグを設定する命令は、必ずVFへの書き込みを先に、結果の書き込みを後に行います。
そのため結果の格納先がVFの場合はフラグが結果で上書きされます。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Peripherals

# --- ADD Vx, byte (7xkk) ---
# @intent:responsibility 即値を加算します。桁あふれは切り捨てられ、VFは変化しません。
def execute_add_byte(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = (state.v[inst.x] + inst.byte) & 0xFF
    return state.pc + 2

# --- OR Vx, Vy (8xy1) ---
def execute_or(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = state.v[inst.x] | state.v[inst.y]
    return state.pc + 2

# --- AND Vx, Vy (8xy2) ---
def execute_and(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = state.v[inst.x] & state.v[inst.y]
    return state.pc + 2

# --- XOR Vx, Vy (8xy3) ---
def execute_xor(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = state.v[inst.x] ^ state.v[inst.y]
    return state.pc + 2

# --- ADD Vx, Vy (8xy4) ---
# @intent:responsibility レジスタ同士を加算し、9bit目が立てばVF=1とします。
def execute_add(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    total = state.v[inst.x] + state.v[inst.y]
    state.vf = 1 if total > 0xFF else 0
    state.v[inst.x] = total & 0xFF
    return state.pc + 2

# --- SUB Vx, Vy (8xy5) ---
# @intent:responsibility Vx - Vy を計算します。VF は Vx > Vy のとき1（等しい場合は0）。
def execute_sub(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    vx = state.v[inst.x]
    vy = state.v[inst.y]
    state.vf = 1 if vx > vy else 0
    state.v[inst.x] = (vx - vy) & 0xFF
    return state.pc + 2

# --- SHR Vx (8x06) ---
# @intent:responsibility 最下位ビットをVFへ退避してから1bit右シフトします。
def execute_shift_right(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    value = state.v[inst.x]
    state.vf = value & 0x01
    state.v[inst.x] = value >> 1
    return state.pc + 2

# --- SUBN Vx, Vy (8xy7) ---
# @intent:responsibility Vy - Vx をVxへ格納します。VF は Vy > Vx のとき1。
def execute_reverse_sub(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    vx = state.v[inst.x]
    vy = state.v[inst.y]
    state.vf = 1 if vy > vx else 0
    state.v[inst.x] = (vy - vx) & 0xFF
    return state.pc + 2

# --- SHL Vx (8x0E) ---
# @intent:responsibility 1bit左シフトします。
# @intent:rationale VFには最上位ビットを0/1に正規化せず、Vx & 0x80 の値（0 または 0x80）をそのまま格納する。
def execute_shift_left(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    value = state.v[inst.x]
    state.vf = value & 0x80
    state.v[inst.x] = (value << 1) & 0xFF
    return state.pc + 2

# --- RND Vx, byte (Cxkk) ---
# @intent:responsibility 注入された乱数源から1バイトを得て、即値でマスクして格納します。
def execute_load_rand(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = (peripherals.rng() & 0xFF) & inst.byte
    return state.pc + 2
