# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義。

命令語のニブル分解、34種類の命令を表すタグ付き命令オブジェクト、
および実行関数に渡す周辺機器（フレームバッファ・乱数源）をまとめます。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from retro_chip8.arch.chip8.display import Display
from retro_chip8.common.types import ByteSource

# --- 命令語のフィールド抽出 ---
# @intent:utility_function 16bit命令語の各フィールドを取り出します。ニブル0が最上位です。

def high_nibble(word: int) -> int:
    return (word >> 12) & 0xF

def reg_x(word: int) -> int:
    return (word >> 8) & 0xF

def reg_y(word: int) -> int:
    return (word >> 4) & 0xF

def low_nibble(word: int) -> int:
    return word & 0xF

def low_byte(word: int) -> int:
    return word & 0xFF

def address(word: int) -> int:
    return word & 0xFFF

# --- オペランド形状 ---
# @intent:utility_function 命令形式ごとに、Instruction のオペランドフィールドを組み立てます。

def operands_none(word: int) -> Dict[str, int]:
    return {}

def operands_addr(word: int) -> Dict[str, int]:
    return {"addr": address(word)}

def operands_x(word: int) -> Dict[str, int]:
    return {"x": reg_x(word)}

def operands_x_y(word: int) -> Dict[str, int]:
    return {"x": reg_x(word), "y": reg_y(word)}

def operands_x_byte(word: int) -> Dict[str, int]:
    return {"x": reg_x(word), "byte": low_byte(word)}

def operands_x_y_nibble(word: int) -> Dict[str, int]:
    return {"x": reg_x(word), "y": reg_y(word), "nibble": low_nibble(word)}


# @intent:responsibility CHIP-8の固定命令セット（34種類）を列挙します。
class Opcode(Enum):
    CLEAR_SCREEN = "CLEAR_SCREEN"
    RETURN = "RETURN"
    JUMP_TO = "JUMP_TO"
    CALL = "CALL"
    SKIP_IF_EQUALS_BYTE = "SKIP_IF_EQUALS_BYTE"
    SKIP_IF_NOT_EQUALS_BYTE = "SKIP_IF_NOT_EQUALS_BYTE"
    SKIP_IF_EQUALS = "SKIP_IF_EQUALS"
    LOAD_BYTE = "LOAD_BYTE"
    ADD_BYTE = "ADD_BYTE"
    MOVE = "MOVE"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD = "ADD"
    SUB = "SUB"
    SHIFT_RIGHT = "SHIFT_RIGHT"
    REVERSE_SUB = "REVERSE_SUB"
    SHIFT_LEFT = "SHIFT_LEFT"
    SKIP_IF_NOT_EQUALS = "SKIP_IF_NOT_EQUALS"
    LOAD_I_REG = "LOAD_I_REG"
    JUMP_PLUS = "JUMP_PLUS"
    LOAD_RAND = "LOAD_RAND"
    DRAW = "DRAW"
    SKIP_PRESSED = "SKIP_PRESSED"
    SKIP_NOT_PRESSED = "SKIP_NOT_PRESSED"
    LOAD_DELAY = "LOAD_DELAY"
    WAIT_FOR_KEY = "WAIT_FOR_KEY"
    SET_DELAY = "SET_DELAY"
    SET_SOUND_DELAY = "SET_SOUND_DELAY"
    ADD_TO_I_REG = "ADD_TO_I_REG"
    LOAD_SPRITE = "LOAD_SPRITE"
    STORE_BCD = "STORE_BCD"
    REG_DUMP = "REG_DUMP"
    REG_LOAD = "REG_LOAD"


# @intent:map 逆アセンブル表記のテンプレート。{x} {y} {n} {kk} {nnn} を置換します。
ASSEMBLY_FORMATS: Dict[Opcode, str] = {
    Opcode.CLEAR_SCREEN: "CLS",
    Opcode.RETURN: "RET",
    Opcode.JUMP_TO: "JP ${nnn}",
    Opcode.CALL: "CALL ${nnn}",
    Opcode.SKIP_IF_EQUALS_BYTE: "SE V{x}, #${kk}",
    Opcode.SKIP_IF_NOT_EQUALS_BYTE: "SNE V{x}, #${kk}",
    Opcode.SKIP_IF_EQUALS: "SE V{x}, V{y}",
    Opcode.LOAD_BYTE: "LD V{x}, #${kk}",
    Opcode.ADD_BYTE: "ADD V{x}, #${kk}",
    Opcode.MOVE: "LD V{x}, V{y}",
    Opcode.OR: "OR V{x}, V{y}",
    Opcode.AND: "AND V{x}, V{y}",
    Opcode.XOR: "XOR V{x}, V{y}",
    Opcode.ADD: "ADD V{x}, V{y}",
    Opcode.SUB: "SUB V{x}, V{y}",
    Opcode.SHIFT_RIGHT: "SHR V{x}",
    Opcode.REVERSE_SUB: "SUBN V{x}, V{y}",
    Opcode.SHIFT_LEFT: "SHL V{x}",
    Opcode.SKIP_IF_NOT_EQUALS: "SNE V{x}, V{y}",
    Opcode.LOAD_I_REG: "LD I, ${nnn}",
    Opcode.JUMP_PLUS: "JP V0, ${nnn}",
    Opcode.LOAD_RAND: "RND V{x}, #${kk}",
    Opcode.DRAW: "DRW V{x}, V{y}, {n}",
    Opcode.SKIP_PRESSED: "SKP V{x}",
    Opcode.SKIP_NOT_PRESSED: "SKNP V{x}",
    Opcode.LOAD_DELAY: "LD V{x}, DT",
    Opcode.WAIT_FOR_KEY: "LD V{x}, K",
    Opcode.SET_DELAY: "LD DT, V{x}",
    Opcode.SET_SOUND_DELAY: "LD ST, V{x}",
    Opcode.ADD_TO_I_REG: "ADD I, V{x}",
    Opcode.LOAD_SPRITE: "LD F, V{x}",
    Opcode.STORE_BCD: "LD B, V{x}",
    Opcode.REG_DUMP: "LD [I], V{x}",
    Opcode.REG_LOAD: "LD V{x}, [I]",
}


# @intent:responsibility デコード済みの1命令を表す不変のタグ付きオブジェクト。
# @intent:rationale 命令セットは固定で閉じているため、継承ではなく Opcode タグと実行テーブルで分岐します。
@dataclass(frozen=True)
class Instruction:
    """
    デコードされたCHIP-8命令。
    使用しないオペランドフィールドは None になります。
    """
    opcode: Opcode
    word: int
    x: Optional[int] = None       # レジスタ番号 (ニブル1)
    y: Optional[int] = None       # レジスタ番号 (ニブル2)
    nibble: Optional[int] = None  # 4bit即値 (DRAWの行数)
    byte: Optional[int] = None    # 8bit即値
    addr: Optional[int] = None    # 12bitアドレス

    @property
    def opcode_hex(self) -> str:
        return f"{self.word:04X}"

    def __str__(self) -> str:
        return ASSEMBLY_FORMATS[self.opcode].format(
            x=f"{self.x:X}" if self.x is not None else "",
            y=f"{self.y:X}" if self.y is not None else "",
            n=self.nibble,
            kk=f"{self.byte:02X}" if self.byte is not None else "",
            nnn=f"{self.addr:03X}" if self.addr is not None else "",
        )


# @intent:responsibility 命令実行時に参照されるCPU外部の資源をまとめます。
@dataclass
class Peripherals:
    display: Display
    rng: ByteSource
