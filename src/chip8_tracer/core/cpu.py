# chip8_tracer/core/cpu.py
"""
Core Layer (命令サイクル)

1命令ぶんの実行手順を固定し、フェッチ・デコード・実行の中身だけを具象クラスに任せます。
step() はフォールトをラッチし、reset() されるまで以後の実行を拒否します。
"""
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional, List, Dict, Tuple

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.errors import MachineFault, MachineHaltedError
from chip8_tracer.core.snapshot import Snapshot, Operation, Metadata
from chip8_tracer.core.state import CpuState
from chip8_tracer.common.types import RegisterLayoutInfo

# @intent:responsibility 命令サイクルのテンプレートと、UI・デバッガ向けの観測インターフェースを定義します。
class AbstractCpu(ABC):
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count = 0
        self._fault: Optional[MachineFault] = None

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility レジスタとサイクル数を初期化し、ラッチ中のフォールトを解除します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0
        self._fault = None

    def get_state(self) -> CpuState:
        return self._state

    def get_bus(self) -> Bus:
        return self._bus

    @property
    def fault(self) -> Optional[MachineFault]:
        return self._fault

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility PCの位置から命令語を読み出します。PCは動かしません。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 1命令を実行し、実行後の状態とバスアクセスをSnapshotとして返します。
    # @intent:rationale 手順は 停止判定 → フェッチ → デコード → PC前進 → 実行 → 後処理。
    #                  ハンドラは常に「PCは次の命令を指している」前提で書けます。
    def step(self) -> Snapshot:
        """
        MachineFault はラッチしてから再送出します。ラッチ中に呼ばれた場合は MachineHaltedError。
        """
        if self._fault is not None:
            raise MachineHaltedError(self._fault)

        self._bus.get_and_clear_activity_log()
        try:
            opcode = self._fetch()
            operation = self._decode(opcode)
            self._state.pc += operation.length
            self._execute(operation)
            self._post_execute(operation)
        except MachineFault as fault:
            self._fault = fault
            raise

        self._cycle_count += operation.cycle_count
        return Snapshot(
            state=self._copy_state(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=self._format(operation)),
            bus_activity=self._bus.get_and_clear_activity_log(),
        )

    # @intent:responsibility 命令の種類に関わらず毎サイクル行う処理のフック（タイマ減算など）。
    def _post_execute(self, operation: Operation) -> None:
        pass

    def _copy_state(self) -> CpuState:
        return replace(self._state)

    @staticmethod
    def _format(operation: Operation) -> str:
        if operation.operands:
            return f"{operation.mnemonic} {', '.join(operation.operands)}"
        return operation.mnemonic

    # @intent:responsibility レジスタ名から現在値への辞書。UIとデバッガはこれだけを見てCPUを扱います。
    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        pass

    # @intent:responsibility レジスタパネルのグループ分けと表示幅。
    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        pass

    # @intent:responsibility (アドレス, 命令語の16進表記, ニーモニック) のリストを返します。
    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        pass
