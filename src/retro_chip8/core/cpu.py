# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

1命令分の実行手順（ステップ）の骨格と、UIが必要とする問い合わせAPIを定義します。
命令語の解釈と実行はアーキテクチャ側（arch/chip8）が担います。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Snapshot, Metadata
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import RegisterLayoutInfo


# @intent:responsibility ステップの実行順序を固定し、各段の中身をサブクラスへ委ねます。
class AbstractCpu(ABC):
    """
    バスに接続されたCPUの抽象基底クラス。

    サブクラスは _create_initial_state / _fetch / _decode / _execute と、
    UI向けの get_register_map / get_register_layout / disassemble を実装します。
    """
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale 状態は get_state() 経由で公開し、CPU外から差し替えられないようにする。

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility レジスタを電源投入直後の値へ戻し、実行命令数を0にします。メモリには触れません。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility これまでに実行（デコードまで完了して実行）した命令の数を返します。
    def get_cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 現在のPCが指す命令語を返します。PCは動かしません。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Any:
        pass

    # @intent:responsibility 命令を実行し、次に実行するアドレスを返します。
    # @intent:post-condition 返り値は step() で16bitに丸められてPCへ格納されます。
    @abstractmethod
    def _execute(self, operation: Any) -> int:
        pass

    # @intent:responsibility 1ステップを実行し、その結果をSnapshotとして返します。
    # @intent:rationale Template Method。順序は
    #                  ログ破棄 → _tick → _handle_halt → フェッチ → デコード → 実行 → PC更新 → Snapshot。
    #                  フェッチ・デコードで例外が出た場合、PCと実行命令数は変化しません。
    def step(self) -> Snapshot:
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        self._tick()

        blocked = self._handle_halt(initial_pc)
        if blocked is not None:
            return blocked

        operation = self._decode(self._fetch())
        self._state.pc = self._execute(operation) & 0xFFFF
        self._cycle_count += 1
        return self._create_snapshot(operation)

    # @intent:responsibility 命令を実行するかどうかに関係なく、毎ステップ最初に呼ばれるフック。
    # @intent:rationale 既定では何もしない。タイマーを持つアーキテクチャが上書きする。
    def _tick(self) -> None:
        pass

    # @intent:responsibility 命令を実行できない状態であれば、その旨のSnapshotを返すフック。
    # @intent:return 実行を見送る場合はSnapshot、通常はNone。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        return None

    def _create_snapshot(self, operation: Any) -> Snapshot:
        return Snapshot(
            state=self._state,
            operation=operation,
            metadata=Metadata(
                cycle_count=self._cycle_count,
                symbol_info=str(operation) if operation is not None else None,
            ),
            bus_activity=self._bus.get_and_clear_activity_log(),
        )

    # --- UI向けAPI ---

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        レジスタ名から現在値への辞書を返します。
        UIはこれとレイアウト情報だけでレジスタ表示を組み立てます。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        """
        [start_addr, start_addr + length) を (address, hex_word, text) のリストへ変換します。
        """
        pass
