# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPUの状態定義。
"""
import copy
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.core.state import CpuState
from chip8_tracer.arch.chip8.constants import PROGRAM_START, REGISTER_COUNT, STACK_DEPTH, FLAG_REGISTER

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP）、コールスタック、タイマを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。

    i はメモリポインタとして使われるインデックスレジスタ。12bitに丸めず保持し、
    範囲外を指したまま使用された場合はバス側でOutOfBoundsAccessErrorとなる。
    awaiting_key は Fx0A がキー入力待ちに入っている間、格納先レジスタ番号を保持する。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x000
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    awaiting_key: Optional[int] = None

    # @intent:accessor キャリー/ボロー/衝突フラグとして使われるVFレジスタ。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    # @intent:responsibility リストを含む全フィールドを複製した独立インスタンスを返します。
    def copy(self) -> 'Chip8CpuState':
        return copy.deepcopy(self)
