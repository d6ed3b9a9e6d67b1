# chip8_tracer/transport/bus.py
"""
Transport Layer (メモリバス)

インタプリタのメモリアクセスは全てここを経由します。
アドレスを登録済みデバイスとそのオフセットへ解決し、step中の読み書きを記録します。
解決できないアドレスは丸めずに OutOfBoundsAccessError として報告します。
"""
from abc import ABC, abstractmethod
from typing import List, Tuple
from dataclasses import dataclass
from enum import Enum

from chip8_tracer.core.errors import OutOfBoundsAccessError

# @intent:responsibility 記録されるアクセスの向き。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:data_structure 1回のバイトアクセス。Snapshotとメモリブレークポイントが参照します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType

# @intent:responsibility バスに接続できるバイト単位デバイスのインターフェース。
class Device(ABC):
    """
    アドレスはバス上の絶対アドレスではなく、デバイス先頭からのオフセットで渡されます。
    """
    @abstractmethod
    def read(self, offset: int) -> int:
        pass

    @abstractmethod
    def write(self, offset: int, data: int) -> None:
        pass

    @abstractmethod
    def get_size(self) -> int:
        pass

# @intent:responsibility 0初期化された固定長の読み書き可能メモリ。
class RAM(Device):
    # @intent:pre-condition sizeは正の整数。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)

    def _check(self, offset: int) -> None:
        if not 0 <= offset < len(self._memory):
            raise OutOfBoundsAccessError(offset, f"Address {offset:#05x} out of bounds for RAM of size {len(self._memory)}.")

    def read(self, offset: int) -> int:
        self._check(offset)
        return self._memory[offset]

    def write(self, offset: int, data: int) -> None:
        self._check(offset)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[offset] = data

    def get_size(self) -> int:
        return len(self._memory)

# @intent:responsibility アドレス範囲とデバイスの対応表を持ち、アクセスを委譲・記録します。
# @intent:rationale read/write は記録あり、peek/load は記録なし。
#                  逆アセンブラやプログラムロードがSnapshotのバスアクティビティに混ざらないようにします。
class Bus:
    def __init__(self):
        self._memory_map: List[Tuple[int, int, Device]] = []
        self._bus_activity_log: List[BusAccess] = []

    # @intent:responsibility デバイスを [start_address, end_address] に割り当てます。
    # @intent:pre-condition 範囲は非負・昇順で、既存の範囲と重ならず、デバイスのサイズと一致すること。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")
        span = end_address - start_address + 1
        if device.get_size() != span:
            raise ValueError(
                f"{type(device).__name__} holds {device.get_size()} bytes but the range "
                f"{start_address:#05x}-{end_address:#05x} spans {span} bytes."
            )
        for start, end, _ in self._memory_map:
            if start_address <= end and start <= end_address:
                raise ValueError(f"Range {start_address:#05x}-{end_address:#05x} overlaps {start:#05x}-{end:#05x}.")
        self._memory_map.append((start_address, end_address, device))

    def _resolve(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise OutOfBoundsAccessError(address, f"Address {address:#05x} not mapped to any device.")

    def read(self, address: int) -> int:
        device, offset = self._resolve(address)
        data = device.read(offset)
        self._bus_activity_log.append(BusAccess(address, data, BusAccessType.READ))
        return data

    def write(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.write(offset, data)
        self._bus_activity_log.append(BusAccess(address, data, BusAccessType.WRITE))

    def peek(self, address: int) -> int:
        device, offset = self._resolve(address)
        return device.read(offset)

    def load(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.write(offset, data)

    # @intent:responsibility バイト列を start_address から記録なしで配置します。
    # @intent:pre-condition 範囲の末尾まで解決できること。解決できなければ1バイトも書き込みません。
    def load_block(self, start_address: int, data: bytes) -> None:
        if data:
            self._resolve(start_address + len(data) - 1)
        for index, value in enumerate(data):
            self.load(start_address + index, value)

    # @intent:responsibility メモリ内容を記録なしで切り出します（インスペクタ用）。
    def dump(self, start_address: int, length: int) -> bytes:
        return bytes(self.peek(start_address + index) for index in range(length))

    # @intent:responsibility 直前の呼び出し以降のアクセス記録を返し、記録を空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log
