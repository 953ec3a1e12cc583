# src/retro_chip8/ui/keymap.py
"""
ホストのキーコードをCHIP-8の論理キー (0x0-0xF) へ変換するモジュール。
"""
from typing import Dict, Optional

from PySide6.QtCore import Qt

KeyMap = Dict[int, int]


def _key_code(key) -> int:
    # Qt.Key の列挙値と QKeyEvent.key() の整数値を同一視する
    return key.value if hasattr(key, "value") else int(key)


# @intent:constant 既定の割り当て。'0'〜'9' と 'A'〜'F' をそのまま16進キーとして扱います。
DEFAULT_KEY_MAP: KeyMap = {
    **{_key_code(getattr(Qt.Key, f"Key_{n}")): n for n in range(10)},
    **{_key_code(getattr(Qt.Key, f"Key_{c}")): 0xA + i for i, c in enumerate("ABCDEF")},
}


# @intent:map Qt.Key の "Key_" 以降の名前（大文字化）からキーコードへの逆引き表。
#             設定ファイルのキー名は大文字化されて渡されるため、"PageUp" も "PAGEUP" で引けるようにする。
_KEY_NAMES: Dict[str, int] = {
    name[len("Key_"):].upper(): _key_code(member)
    for name, member in Qt.Key.__members__.items()
    if name.startswith("Key_")
}


# @intent:responsibility キー名（大文字小文字を区別しない）をQtのキーコードへ変換します。
# @intent:pre-condition キー名は Qt.Key の "Key_" 以降の名前（例: "X", "Space", "PageUp"）である必要があります。
def key_code_for_name(name: str) -> int:
    code = _KEY_NAMES.get(str(name).upper())
    if code is None:
        raise ValueError(f"Unknown key name in key map: {name}")
    return code


# @intent:responsibility 設定ファイルのキー名による割り当てを既定の割り当てに上書きしたマップを生成します。
def build_key_map(overrides: Optional[Dict[str, int]] = None) -> KeyMap:
    key_map = dict(DEFAULT_KEY_MAP)
    for name, value in (overrides or {}).items():
        key_map[key_code_for_name(name)] = value
    return key_map


# @intent:responsibility ホストのキーコードに対応する論理キーを返します。割り当てがなければ None。
def key_value(key, key_map: Optional[KeyMap] = None) -> Optional[int]:
    mapping = key_map if key_map is not None else DEFAULT_KEY_MAP
    return mapping.get(_key_code(key))
