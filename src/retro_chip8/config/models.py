from dataclasses import dataclass, field
from typing import Dict, Optional

@dataclass
class TimingConfig:
    steps_per_second: int = 600
    max_steps_per_cycle: Optional[int] = None  # None: 上限なし
    frame_interval_ms: int = 16

@dataclass
class DisplayConfig:
    scale: int = 20
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class MachineConfig:
    timing: TimingConfig = field(default_factory=TimingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    key_map: Dict[str, int] = field(default_factory=dict)  # ホストのキー名 -> 論理キー (0x0-0xF)
