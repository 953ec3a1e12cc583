# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ表記に変換します。
Instruction Layerのデコードロジックを再利用し、バスアクセスログを汚さないよう peek を使用します。
"""
from typing import List, Tuple

from retro_chip8.transport.bus import Bus
from retro_chip8.core.errors import DecodeError
from retro_chip8.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    デコードできない語（データ領域など）は DW 疑似命令として表示します。

    Returns:
        List of (address, hex_word, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, bus.get_address_space_size())
    current_addr = start_addr

    while current_addr + 1 < end_addr:
        word = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        try:
            inst = decode_opcode(word, current_addr)
            result.append((current_addr, inst.opcode_hex, str(inst)))
        except DecodeError:
            result.append((current_addr, f"{word:04X}", f"DW ${word:04X}"))
        current_addr += 2

    return result
