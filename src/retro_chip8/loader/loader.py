# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
CHIP-8のプログラムイメージ（生バイナリ）とフォントテーブルをメモリへ配置します。
"""
import logging
from pathlib import Path
from typing import Sequence, Union

from retro_chip8.transport.bus import Bus
from retro_chip8.core.errors import ProgramTooLargeError
from retro_chip8.arch.chip8.display import FONTSET
from retro_chip8.arch.chip8.state import PROGRAM_OFFSET

logger = logging.getLogger(__name__)

class ProgramLoader:
    """
    CHIP-8のプログラムイメージを読み込み、バスにロードするローダー。
    プログラムはオフセット0x200から、フォントはアドレス0から配置されます。
    """
    # @intent:responsibility プログラムファイルを読み込み、バイト列として返します。
    def load_file(self, file_path: Union[str, Path]) -> bytes:
        with open(file_path, 'rb') as f:
            data = f.read()
        logger.debug("Read %d bytes from %s", len(data), file_path)
        return data

    # @intent:responsibility フォントテーブルをメモリ先頭に書き込みます。
    # @intent:rationale LD F, Vx は Vx × 5 をそのままアドレスとするため、フォントは常に0番地に置く。
    def load_font(self, bus: Bus) -> None:
        bus.load(0x000, FONTSET)

    # @intent:responsibility プログラムイメージを指定オフセットからメモリに書き込みます。
    # @intent:pre-condition プログラムは offset からメモリ終端までに収まる必要があります。
    def load_program(self, program: Sequence[int], bus: Bus, offset: int = PROGRAM_OFFSET) -> None:
        capacity = bus.get_address_space_size() - offset
        if len(program) > capacity:
            raise ProgramTooLargeError(
                f"Program of {len(program)} bytes does not fit in memory at {offset:#05x} "
                f"({capacity} bytes available)."
            )
        bus.load(offset, program)
        logger.debug("Loaded %d-byte program at %#05x", len(program), offset)
