# retro_chip8/core/errors.py
"""
Core Layer (例外定義)

エミュレーションを継続できない致命的なエラーを定義します。
いずれも命令単位での回復手段はなく、ホスト側は実行ループを停止する必要があります。
"""
from typing import Optional


# @intent:responsibility 致命的なエミュレーションエラーの共通基底クラス。
class Chip8Error(Exception):
    """
    CHIP-8エミュレーションで発生する致命的エラーの基底クラス。
    """


# @intent:responsibility 未定義のビットパターンを持つ命令語を表します。
class DecodeError(Chip8Error, ValueError):
    """
    どのオペコードパターンにも一致しない命令語をデコードしようとした場合に発生します。
    """
    def __init__(self, word: int, address: Optional[int] = None):
        self.word = word
        self.address = address
        location = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"Unknown instruction {word:#06x}{location}.")


# @intent:responsibility コールスタックの容量超過を表します。
class StackOverflowError(Chip8Error):
    pass


# @intent:responsibility 空のコールスタックからの復帰を表します。
class StackUnderflowError(Chip8Error):
    pass


# @intent:responsibility メモリやキーなど固定長領域への範囲外アクセスを表します。
# @intent:rationale 既存の IndexError ハンドラとの互換性のため IndexError を継承します。
class OutOfRangeError(Chip8Error, IndexError):
    pass


# @intent:responsibility メモリに収まらないプログラムイメージを表します。
class ProgramTooLargeError(Chip8Error, ValueError):
    pass
