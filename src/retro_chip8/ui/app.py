# src/retro_chip8/ui/app.py
"""
アプリケーションのエントリポイント。
プログラムファイルを読み込み、マシンを構築してメインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import MachineConfig
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.loader.loader import ProgramLoader
from retro_chip8.arch.chip8.state import PROGRAM_OFFSET
from .main_window import MainWindow
from .keymap import build_key_map

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 emulator")
    parser.add_argument("program", help="CHIP-8 program image to load at 0x200")
    parser.add_argument("--config", help="YAML machine configuration file")
    parser.add_argument("--scale", type=int, help="Pixel scale of the display window")
    parser.add_argument("--disassemble", action="store_true",
                        help="Print a disassembly of the program and exit")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")
    return parser


# @intent:responsibility 逆アセンブル結果を1行1命令で出力します。
def print_disassembly(cpu, length: int) -> None:
    for address, hex_word, text in cpu.disassemble(PROGRAM_OFFSET, length):
        print(f"{address:03X}  {hex_word}  {text}")


# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
        program = ProgramLoader().load_file(args.program)
        if args.scale is not None:
            if args.scale <= 0:
                raise ValueError(f"--scale must be positive: {args.scale}")
            config.display.scale = args.scale
        key_map = build_key_map(config.key_map)
        cpu, _ = SystemBuilder().build_system(config, program)
    except (OSError, ValueError) as e:
        parser.error(str(e))
    logger.info("Loaded %s (%d bytes)", args.program, len(program))

    if args.disassemble:
        print_disassembly(cpu, len(program))
        return 0

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(cpu, config, key_map=key_map)
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
