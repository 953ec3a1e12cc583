from typing import Optional, Sequence, Tuple
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.common.types import ByteSource
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.display import Display
from retro_chip8.arch.chip8.state import MEMORY_SIZE
from retro_chip8.loader.loader import ProgramLoader
from .models import MachineConfig

# @intent:responsibility マシン構成（Config）に基づいて、Bus、RAM、Display、CPUを生成・接続し、フォントとプログラムを配置します。
class SystemBuilder:
    def build_system(self, config: MachineConfig, program: Sequence[int],
                     rng: Optional[ByteSource] = None) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()
        bus.register_device(0x0000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        loader = ProgramLoader()
        loader.load_font(bus)
        loader.load_program(program, bus)

        cpu = Chip8Cpu(
            bus,
            display=Display(),
            rng=rng,
            steps_per_second=config.timing.steps_per_second,
            max_steps_per_cycle=config.timing.max_steps_per_cycle,
        )
        return cpu, bus
