# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル後のCPUとバスの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッガのブレークポイント判定に用いる責務を負います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    デコード済み命令（HEX、ニーモニック、オペランド、命令種別タグ）を記録するデータクラス。
    instructionがNoneの場合は未定義の命令語であり、実行は何もしません。
    """
    opcode_hex: str # 例: "D015"
    mnemonic: str # 例: "DRW"
    operands: List[str] = field(default_factory=list) # 例: ["V0", "V1", "5"]
    opcode: int = 0
    instruction: Optional[Enum] = None
    cycle_count: int = 1
    length: int = 2 # 命令のバイト長

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "DRW V0, V1, 5"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録した不変のデータ構造。
    stateは生成時点のコピーであり、以後のstepで変化しません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
