# chip8_tracer/loader/loader.py
"""
プログラムローダーモジュール。
CHIP-8 のプログラムイメージ（生バイナリ）をメモリの 0x200 以降に配置します。
"""
from pathlib import Path
from typing import Union

from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.constants import PROGRAM_START, MAX_PROGRAM_SIZE

class ProgramLoader:
    """
    生バイナリ形式のプログラムを検証し、バスへロードするローダー。
    """
    # @intent:responsibility バイト列を PROGRAM_START から書き込み、ロードしたバイト数を返します。
    # @intent:pre-condition 長さが MAX_PROGRAM_SIZE 以下であること。超過時は1バイトも書き込まずにValueError。
    def load_bytes(self, data: bytes, bus: Bus) -> int:
        data = bytes(data)
        if len(data) > MAX_PROGRAM_SIZE:
            raise ValueError(
                f"Program is {len(data)} bytes; at most {MAX_PROGRAM_SIZE} bytes fit above {PROGRAM_START:#05x}."
            )
        bus.load_block(PROGRAM_START, data)
        return len(data)

    def load_file(self, file_path: Union[str, Path], bus: Bus) -> int:
        with open(file_path, 'rb') as f:
            data = f.read()
        return self.load_bytes(data, bus)
