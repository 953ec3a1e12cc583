# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ転送、インデックスレジスタ、メモリ、タイマー）の実装。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.display import GLYPH_SIZE
from .base import Instruction, Peripherals

# --- LD Vx, byte (6xkk) ---
def execute_load_byte(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = inst.byte
    return state.pc + 2

# --- LD Vx, Vy (8xy0) ---
def execute_move(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = state.v[inst.y]
    return state.pc + 2

# --- LD I, addr (Annn) ---
def execute_load_i_reg(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.i = inst.addr
    return state.pc + 2

# --- ADD I, Vx (Fx1E) ---
def execute_add_to_i_reg(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.i = (state.i + state.v[inst.x]) & 0xFFFF
    return state.pc + 2

# --- LD F, Vx (Fx29) ---
# @intent:responsibility Vx の値に対応するフォントグリフの先頭アドレスをIに設定します。
def execute_load_sprite(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.i = state.v[inst.x] * GLYPH_SIZE
    return state.pc + 2

# --- LD B, Vx (Fx33) ---
# @intent:responsibility Vx を10進3桁（百の位、十の位、一の位）に分解して I, I+1, I+2 に書き込みます。
def execute_store_bcd(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    value = state.v[inst.x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)
    return state.pc + 2

# --- LD [I], Vx (Fx55) ---
# @intent:responsibility V0〜Vx（xを含む）をIから始まるメモリへ書き出します。Iは変化しません。
def execute_reg_dump(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    for reg in range(inst.x + 1):
        bus.write(state.i + reg, state.v[reg])
    return state.pc + 2

# --- LD Vx, [I] (Fx65) ---
# @intent:responsibility Iから始まるメモリを V0〜Vx（xを含む）へ読み込みます。Iは変化しません。
def execute_reg_load(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    for reg in range(inst.x + 1):
        state.v[reg] = bus.read(state.i + reg)
    return state.pc + 2

# --- LD Vx, DT (Fx07) ---
def execute_load_delay(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.v[inst.x] = state.delay_timer
    return state.pc + 2

# --- LD DT, Vx (Fx15) ---
def execute_set_delay(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.delay_timer = state.v[inst.x]
    return state.pc + 2

# --- LD ST, Vx (Fx18) ---
def execute_set_sound_delay(state: Chip8CpuState, bus: Bus, inst: Instruction, peripherals: Peripherals) -> int:
    state.sound_timer = state.v[inst.x]
    return state.pc + 2
