# retro_chip8/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8の4KBアドレス空間をデバイスへ振り分け、命令実行中のメモリアクセスを記録します。
ローダーや逆アセンブラのような「観測者」からのアクセスは記録しない経路（load / peek）を用意します。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from retro_chip8.core.errors import OutOfRangeError


class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"


# @intent:responsibility 1回のバスアクセス（アドレス、値、種別）を不変に記録します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int  # 8bit value
    access_type: BusAccessType


# @intent:responsibility バスに接続される固定長デバイスのインターフェース。
class Device(ABC):
    """
    バスに接続されるデバイス。アドレスは先頭からのオフセットで渡されます。
    """
    @abstractmethod
    def get_size(self) -> int:
        pass

    @abstractmethod
    def read(self, address: int) -> int:
        pass

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        pass


# @intent:responsibility ゼロクリアされた読み書き可能なバイト列を提供します。
class RAM(Device):
    # @intent:pre-condition sizeは正の整数であること。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._cells = bytearray(size)

    def get_size(self) -> int:
        return len(self._cells)

    def _check_address(self, address: int) -> None:
        if not 0 <= address < len(self._cells):
            raise OutOfRangeError(f"Address {address} out of bounds for RAM of size {len(self._cells)}.")

    def read(self, address: int) -> int:
        self._check_address(address)
        return self._cells[address]

    # @intent:pre-condition dataは8bit値であること。bytearray側の例外ではなく明示的にValueErrorとする。
    def write(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._cells[address] = data


# @intent:responsibility アドレスをデバイスへ解決し、命令実行中のアクセスをログとして蓄積します。
# @intent:rationale ステップ毎にログを回収してSnapshotへ載せることで、どの命令がどこを触ったかを観測可能にします。
class Bus:
    """
    アドレス空間を管理する共通バス。

    read / write はアクセスログに残り、load / peek は残りません。
    未マップのアドレスへのアクセスは OutOfRangeError です。
    """
    def __init__(self):
        self._regions: List[Tuple[int, int, Device]] = []  # (start, end, device)
        self._activity: List[BusAccess] = []

    # @intent:responsibility デバイスを [start_address, end_address] に割り当てます。
    # @intent:pre-condition 範囲の長さはデバイスのサイズと一致すること。重複の検査は呼び出し元（SystemBuilder）の責務。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")

        span = end_address - start_address + 1
        if device.get_size() != span:
            raise ValueError(
                f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                f"the specified address range size ({span} bytes)."
            )
        self._regions.append((start_address, end_address, device))

    # @intent:responsibility マップ済みの最終アドレス+1を返します。ローダーの容量計算に使用します。
    def get_address_space_size(self) -> int:
        return max((end + 1 for _, end, _ in self._regions), default=0)

    def _resolve(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._regions:
            if start <= address <= end:
                return device, address - start
        raise OutOfRangeError(f"Address {address:#06x} not mapped to any device.")

    # @intent:responsibility 蓄積したアクセスログを返し、空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        activity, self._activity = self._activity, []
        return activity

    def read(self, address: int) -> int:
        device, offset = self._resolve(address)
        data = device.read(offset)
        self._activity.append(BusAccess(address, data, BusAccessType.READ))
        return data

    def write(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.write(offset, data)
        self._activity.append(BusAccess(address, data, BusAccessType.WRITE))

    # @intent:responsibility ログを残さずに1バイト読み出します（UI・逆アセンブラ用）。
    def peek(self, address: int) -> int:
        device, offset = self._resolve(address)
        return device.read(offset)

    # @intent:responsibility ログを残さずにバイト列を連続アドレスへ書き込みます（フォント・プログラム配置用）。
    def load(self, address: int, data: Iterable[int]) -> None:
        for offset, byte in enumerate(data):
            device, local = self._resolve(address + offset)
            device.write(local, byte)

    # @intent:responsibility 命令語をビッグエンディアン（上位バイトが先）で読み出します。
    def read_word(self, address: int) -> int:
        high = self.read(address)
        return (high << 8) | self.read(address + 1)
