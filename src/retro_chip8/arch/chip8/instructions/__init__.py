"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.core.errors import DecodeError
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Opcode, Peripherals, high_nibble
from .maps import DECODE_MAP, SUB_DECODE_KEY, EXECUTE_MAP

# @intent:responsibility 16bit命令語をデコードし、Instructionオブジェクトを返します。
# @intent:post-condition 列挙されていないビットパターンは必ず DecodeError となります。
def decode_opcode(word: int, address: Optional[int] = None) -> Instruction:
    """
    CHIP-8の命令語をデコードします。状態を持たない純粋関数です。
    address はエラーメッセージ用のフェッチ元アドレスです。
    """
    top = high_nibble(word)
    entry = DECODE_MAP.get(top)
    if top in SUB_DECODE_KEY:
        entry = entry.get(SUB_DECODE_KEY[top](word))
    if entry is None:
        raise DecodeError(word & 0xFFFF, address)
    opcode, operands = entry
    return Instruction(opcode, word & 0xFFFF, **operands(word))

# @intent:responsibility デコードされた命令を実行し、次のPCを返します。
def execute_instruction(inst: Instruction, state: Chip8CpuState, bus: Bus, peripherals: Peripherals) -> int:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP[inst.opcode]
    return executor(state, bus, inst, peripherals)
