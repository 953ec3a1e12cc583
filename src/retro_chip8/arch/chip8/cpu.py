# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

このモジュールはCHIP-8仮想マシンの具体的な実装を提供し、AbstractCpuインターフェースを実装します。
ホストからは run_cycle(経過秒) と key_press/key_release の3つの入口だけで駆動されます。
"""
import logging
import math
import random
from typing import Dict, List, Optional, Tuple

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import OutOfRangeError
from retro_chip8.core.snapshot import Metadata, Snapshot
from retro_chip8.common.types import ByteSource, RegisterInfo, RegisterLayoutInfo
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.display import Display
from retro_chip8.arch.chip8.state import Chip8CpuState, NUM_KEYS, NUM_REGISTERS
from retro_chip8.arch.chip8.instructions import Instruction, Peripherals, decode_opcode, execute_instruction
from retro_chip8.arch.chip8 import disassembler

logger = logging.getLogger(__name__)

STEPS_PER_SECOND = 600


# @intent:utility_function 0.5 を0から遠い方向へ丸めます（Python組み込みの round は偶数丸め）。
def round_half_away_from_zero(value: float) -> int:
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def _default_rng() -> int:
    return random.getrandbits(8)


# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー、キー入力）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンをエミュレートするクラス。
    メモリはBus経由でアクセスし、フレームバッファと乱数源は外部から注入できます。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition `bus`には0x000-0xFFFのメモリがマップされている必要があります。
    def __init__(self, bus: Bus, display: Optional[Display] = None, rng: Optional[ByteSource] = None,
                 steps_per_second: int = STEPS_PER_SECOND, max_steps_per_cycle: Optional[int] = None):
        self._display = display if display is not None else Display()
        self._rng = rng if rng is not None else _default_rng
        self._peripherals = Peripherals(display=self._display, rng=self._rng)
        self._steps_per_second = steps_per_second
        self._max_steps_per_cycle = max_steps_per_cycle
        super().__init__(bus)

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility レジスタと画面を初期状態に戻します。メモリ（フォントとプログラム）は保持されます。
    def reset(self) -> None:
        super().reset()
        self._display.clear()

    @property
    def display(self) -> Display:
        return self._display

    # --- 実行サイクル ---

    # @intent:responsibility 経過時間を命令数に換算し、その数だけステップを実行します。
    # @intent:rationale 命令数 = round(経過秒 × 600)。ホストのフレームレートと無関係に実行速度を一定に保つ。
    def run_cycle(self, elapsed_seconds: float) -> int:
        """
        経過秒数に相当する数のステップを同期的に実行し、実行したステップ数を返します。
        致命的エラー（DecodeErrorなど）はそのまま呼び出し元へ伝播します。
        """
        if elapsed_seconds < 0:
            raise ValueError(f"Elapsed time must not be negative: {elapsed_seconds}")

        steps = round_half_away_from_zero(elapsed_seconds * self._steps_per_second)
        if self._max_steps_per_cycle is not None and steps > self._max_steps_per_cycle:
            logger.debug("Clamping cycle batch from %d to %d steps", steps, self._max_steps_per_cycle)
            steps = self._max_steps_per_cycle

        for _ in range(steps):
            self.step()
        return steps

    # @intent:responsibility キー入力待ちの有無に関わらず、毎ステップ両タイマーを1減算します。
    def _tick(self) -> None:
        self._state.tick_timers()

    # @intent:responsibility キー入力待ち中は命令を実行せず、PCも変えずにSnapshotを返します。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        if self._state.wait_for_key is None:
            return None
        return Snapshot(
            state=self._state,
            operation=None,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info="WAIT K"),
            bus_activity=self._bus.get_and_clear_activity_log()
        )

    # @intent:responsibility 現在のPCからビッグエンディアンの命令語をフェッチします。
    def _fetch(self) -> int:
        return self._bus.read_word(self._state.pc)

    def _decode(self, opcode: int) -> Instruction:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Instruction) -> int:
        return execute_instruction(operation, self._state, self._bus, self._peripherals)

    # --- キー入力 ---

    # @intent:responsibility キー押下を記録し、キー入力待ちであれば待機レジスタへキー番号を格納して解除します。
    def key_press(self, key: int) -> None:
        self._check_key(key)
        self._state.keys[key] = True
        if self._state.wait_for_key is not None:
            logger.debug("Key %X resolves wait into V%X", key, self._state.wait_for_key)
            self._state.v[self._state.wait_for_key] = key
            self._state.wait_for_key = None

    # @intent:responsibility キーの解放を記録します。
    def key_release(self, key: int) -> None:
        self._check_key(key)
        self._state.keys[key] = False

    def _check_key(self, key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise OutOfRangeError(f"Key {key} out of range (0x0-0xF).")

    # --- UI向けAPI ---

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{n:X}": s.v[n] for n in range(NUM_REGISTERS)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(NUM_REGISTERS)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
