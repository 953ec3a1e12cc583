# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1ステップ実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計実行命令数、表示用の命令表記など）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None  # 例: "DRW V0, V1, 5"


# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1ステップ実行後の状態を記録した不変のデータ構造。
    operation はキー入力待ちで命令が実行されなかった場合に None となります。
    """
    state: CpuState
    operation: Optional[Any]
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)

    # @intent:rationale state はCPUが保持する可変オブジェクトへの参照であり、コピーはしない。
    #                  過去の値が必要な呼び出し側は dataclasses.replace で複製すること。

    @property
    def blocked(self) -> bool:
        """キー入力待ちのため命令が実行されなかったステップであれば True。"""
        return self.operation is None
