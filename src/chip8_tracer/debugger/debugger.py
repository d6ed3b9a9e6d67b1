# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

インタプリタを1命令ずつ、または条件が成立するまで連続して実行します。
条件の判定には step() が返す Snapshot（バスアクセス記録）と get_register_map() だけを使います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.errors import MachineFault
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.transport.bus import BusAccessType

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # 次に実行する命令のアドレスが一致（実行前に停止）
    MEMORY_READ = "MEMORY_READ"         # 直前の命令がアドレスを読んだ
    MEMORY_WRITE = "MEMORY_WRITE"       # 直前の命令がアドレスへ書き込んだ
    REGISTER_VALUE = "REGISTER_VALUE"   # レジスタが指定値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 直前の命令でレジスタの値が変わった

# @intent:data_structure ブレークポイント1件。register_name は get_register_map() のキー（"V3", "I", "DT" など）。
@dataclass(frozen=True)
class BreakpointCondition:
    condition_type: BreakpointConditionType
    value: Optional[int] = None
    address: Optional[int] = None
    register_name: Optional[str] = None
    enabled: bool = True

# @intent:responsibility 実行制御とブレークポイント管理。
class Debugger:
    def __init__(self, cpu: AbstractCpu):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running = False
        self._previous_registers: Dict[str, int] = cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            self._breakpoints[self._breakpoints.index(old_condition)] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    @property
    def is_running(self) -> bool:
        return self._running

    def _active(self, condition_type: BreakpointConditionType) -> List[BreakpointCondition]:
        return [bp for bp in self._breakpoints if bp.enabled and bp.condition_type == condition_type]

    def _hits_pc(self, pc: int) -> bool:
        return any(bp.value == pc for bp in self._active(BreakpointConditionType.PC_MATCH))

    def _hits_memory(self, snapshot: Snapshot, condition_type: BreakpointConditionType,
                     access_type: BusAccessType) -> bool:
        touched = {a.address for a in snapshot.bus_activity if a.access_type == access_type}
        return any(bp.address in touched for bp in self._active(condition_type))

    # @intent:responsibility 直前に実行した命令の結果に対して、PC以外の条件を判定します。
    def _hits_after_step(self, snapshot: Snapshot) -> bool:
        if self._hits_memory(snapshot, BreakpointConditionType.MEMORY_READ, BusAccessType.READ):
            return True
        if self._hits_memory(snapshot, BreakpointConditionType.MEMORY_WRITE, BusAccessType.WRITE):
            return True

        registers = self._cpu.get_register_map()
        for bp in self._active(BreakpointConditionType.REGISTER_VALUE):
            if registers.get(bp.register_name) == bp.value:
                return True
        for bp in self._active(BreakpointConditionType.REGISTER_CHANGE):
            name = bp.register_name
            if name in registers and registers[name] != self._previous_registers.get(name):
                return True
        return False

    def step_instruction(self) -> Snapshot:
        self._previous_registers = self._cpu.get_register_map()
        self._last_snapshot = self._cpu.step()
        return self._last_snapshot

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility ブレークポイント、stop()、フォールト、max_steps のいずれかまで実行し、実行した命令数を返します。
    # @intent:rationale 開始位置にPCブレークポイントがある場合は、まず1命令進めてから判定します（再開直後に同じ位置で止まらないため）。
    def run(self, max_steps: Optional[int] = None) -> int:
        """
        MachineFault は実行を止めた上で呼び出し側へ再送出します。
        """
        self._running = True
        executed = 0
        try:
            if self._hits_pc(self._cpu.get_state().pc):
                self.step_instruction()
                executed += 1

            while self._running and (max_steps is None or executed < max_steps):
                pc = self._cpu.get_state().pc
                if self._hits_pc(pc):
                    print(f"Breakpoint hit at PC: {pc:#05x}")
                    break

                snapshot = self.step_instruction()
                executed += 1
                if self._hits_after_step(snapshot):
                    print(f"Breakpoint hit at PC: {snapshot.state.pc:#05x}")
                    break
        except MachineFault as fault:
            print(f"Machine fault: {fault}")
            raise
        finally:
            self._running = False
        return executed

    def stop(self) -> None:
        self._running = False
