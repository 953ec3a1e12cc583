# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令語パターンと命令実装のマッピング定義。
"""
from . import base
from . import load
from . import alu
from . import control
from . import peripheral
from .base import Opcode

# @intent:map 最上位ニブルからの一次デコードテーブル。
#             値は (Opcode, オペランド形状) か、二次デコード用の辞書です。
DECODE_MAP = {
    0x0: {
        0xE0: (Opcode.CLEAR_SCREEN, base.operands_none),
        0xEE: (Opcode.RETURN, base.operands_none),
    },
    0x1: (Opcode.JUMP_TO, base.operands_addr),
    0x2: (Opcode.CALL, base.operands_addr),
    0x3: (Opcode.SKIP_IF_EQUALS_BYTE, base.operands_x_byte),
    0x4: (Opcode.SKIP_IF_NOT_EQUALS_BYTE, base.operands_x_byte),
    0x5: (Opcode.SKIP_IF_EQUALS, base.operands_x_y),
    0x6: (Opcode.LOAD_BYTE, base.operands_x_byte),
    0x7: (Opcode.ADD_BYTE, base.operands_x_byte),
    0x8: {
        0x0: (Opcode.MOVE, base.operands_x_y),
        0x1: (Opcode.OR, base.operands_x_y),
        0x2: (Opcode.AND, base.operands_x_y),
        0x3: (Opcode.XOR, base.operands_x_y),
        0x4: (Opcode.ADD, base.operands_x_y),
        0x5: (Opcode.SUB, base.operands_x_y),
        0x6: (Opcode.SHIFT_RIGHT, base.operands_x),
        0x7: (Opcode.REVERSE_SUB, base.operands_x_y),
        0xE: (Opcode.SHIFT_LEFT, base.operands_x),
    },
    0x9: (Opcode.SKIP_IF_NOT_EQUALS, base.operands_x_y),
    0xA: (Opcode.LOAD_I_REG, base.operands_addr),
    0xB: (Opcode.JUMP_PLUS, base.operands_addr),
    0xC: (Opcode.LOAD_RAND, base.operands_x_byte),
    0xD: (Opcode.DRAW, base.operands_x_y_nibble),
    0xE: {
        0x9E: (Opcode.SKIP_PRESSED, base.operands_x),
        0xA1: (Opcode.SKIP_NOT_PRESSED, base.operands_x),
    },
    0xF: {
        0x07: (Opcode.LOAD_DELAY, base.operands_x),
        0x0A: (Opcode.WAIT_FOR_KEY, base.operands_x),
        0x15: (Opcode.SET_DELAY, base.operands_x),
        0x18: (Opcode.SET_SOUND_DELAY, base.operands_x),
        0x1E: (Opcode.ADD_TO_I_REG, base.operands_x),
        0x29: (Opcode.LOAD_SPRITE, base.operands_x),
        0x33: (Opcode.STORE_BCD, base.operands_x),
        0x55: (Opcode.REG_DUMP, base.operands_x),
        0x65: (Opcode.REG_LOAD, base.operands_x),
    },
}

# @intent:map 二次デコードが必要な最上位ニブルと、その際に参照するフィールド。
SUB_DECODE_KEY = {
    0x0: base.low_byte,
    0x8: base.low_nibble,
    0xE: base.low_byte,
    0xF: base.low_byte,
}

# @intent:map Opcode から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    Opcode.RETURN: control.execute_return,
    Opcode.JUMP_TO: control.execute_jump_to,
    Opcode.CALL: control.execute_call,
    Opcode.JUMP_PLUS: control.execute_jump_plus,
    Opcode.SKIP_IF_EQUALS_BYTE: control.execute_skip_if_equals_byte,
    Opcode.SKIP_IF_NOT_EQUALS_BYTE: control.execute_skip_if_not_equals_byte,
    Opcode.SKIP_IF_EQUALS: control.execute_skip_if_equals,
    Opcode.SKIP_IF_NOT_EQUALS: control.execute_skip_if_not_equals,

    # ALU
    Opcode.ADD_BYTE: alu.execute_add_byte,
    Opcode.OR: alu.execute_or,
    Opcode.AND: alu.execute_and,
    Opcode.XOR: alu.execute_xor,
    Opcode.ADD: alu.execute_add,
    Opcode.SUB: alu.execute_sub,
    Opcode.SHIFT_RIGHT: alu.execute_shift_right,
    Opcode.REVERSE_SUB: alu.execute_reverse_sub,
    Opcode.SHIFT_LEFT: alu.execute_shift_left,
    Opcode.LOAD_RAND: alu.execute_load_rand,

    # Load/Store
    Opcode.LOAD_BYTE: load.execute_load_byte,
    Opcode.MOVE: load.execute_move,
    Opcode.LOAD_I_REG: load.execute_load_i_reg,
    Opcode.ADD_TO_I_REG: load.execute_add_to_i_reg,
    Opcode.LOAD_SPRITE: load.execute_load_sprite,
    Opcode.STORE_BCD: load.execute_store_bcd,
    Opcode.REG_DUMP: load.execute_reg_dump,
    Opcode.REG_LOAD: load.execute_reg_load,
    Opcode.LOAD_DELAY: load.execute_load_delay,
    Opcode.SET_DELAY: load.execute_set_delay,
    Opcode.SET_SOUND_DELAY: load.execute_set_sound_delay,

    # Display/Keyboard
    Opcode.CLEAR_SCREEN: peripheral.execute_clear_screen,
    Opcode.DRAW: peripheral.execute_draw,
    Opcode.SKIP_PRESSED: peripheral.execute_skip_pressed,
    Opcode.SKIP_NOT_PRESSED: peripheral.execute_skip_not_pressed,
    Opcode.WAIT_FOR_KEY: peripheral.execute_wait_for_key,
}
