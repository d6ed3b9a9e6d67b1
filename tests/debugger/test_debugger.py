# tests/debugger/test_debugger.py
"""
chip8_tracer.debugger.debuggerモジュールの単体テスト。
Debuggerの実行制御、ブレークポイント管理、および条件チェック機能を検証します。
"""
import pytest

from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.errors import StackUnderflowError
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType

# @intent:test_suite デバッガのブレークポイントと実行制御機能の検証。

# 0x200: LD V0, #$05 / 0x202: LD I, $300 / 0x204: LD B, V0 / 0x206: ADD V0, #$01 / 0x208: JP $206
PROGRAM = bytes([0x60, 0x05, 0xA3, 0x00, 0xF0, 0x33, 0x70, 0x01, 0x12, 0x06])

class TestDebugger:
    """
    Debuggerの単体テスト。
    """
    @pytest.fixture
    def setup_debugger(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        cpu = Chip8Cpu(bus)
        cpu.load_program(PROGRAM)
        return Debugger(cpu), cpu

    # @intent:test_case_add_remove_breakpoint ブレークポイントの追加と削除が正しく行われることを検証します。
    def test_add_remove_breakpoint(self, setup_debugger):
        debugger, _ = setup_debugger
        bp1 = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x206)
        bp2 = BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x300)

        debugger.add_breakpoint(bp1)
        debugger.add_breakpoint(bp2)
        debugger.add_breakpoint(bp1) # 重複追加は無視される
        assert debugger.get_breakpoints() == [bp1, bp2]

        bp3 = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x208)
        debugger.update_breakpoint(bp1, bp3)
        assert debugger.get_breakpoints() == [bp3, bp2]

        debugger.remove_breakpoint(bp3)
        debugger.remove_breakpoint(bp3) # 存在しないブレークポイントの削除はエラーにならない
        assert debugger.get_breakpoints() == [bp2]

    def test_step_instruction(self, setup_debugger):
        debugger, cpu = setup_debugger
        snapshot = debugger.step_instruction()
        assert snapshot.metadata.symbol_info == "LD V0, #$05"
        assert debugger.get_last_snapshot() is snapshot
        assert cpu.get_state().pc == 0x202

    # @intent:test_case_pc_breakpoint PCが一致する命令の実行前に停止する。
    def test_run_stops_at_pc(self, setup_debugger):
        debugger, cpu = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x206))
        executed = debugger.run(max_steps=100)
        assert executed == 3
        assert cpu.get_state().pc == 0x206
        assert not debugger.is_running

        # 停止位置から再開すると、ループして同じ位置で再び止まる
        executed = debugger.run(max_steps=100)
        assert executed == 2
        assert cpu.get_state().pc == 0x206

    # @intent:test_case_memory_write 指定アドレスへの書き込みを行った命令の直後に停止する。
    def test_run_stops_on_memory_write(self, setup_debugger):
        debugger, cpu = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x302))
        debugger.run(max_steps=100)
        assert cpu.get_state().pc == 0x206
        assert debugger.get_last_snapshot().operation.opcode == 0xF033

    def test_run_stops_on_register_value(self, setup_debugger):
        debugger, cpu = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.REGISTER_VALUE, register_name="V0", value=0x08))
        debugger.run(max_steps=100)
        assert cpu.get_state().v[0] == 0x08

    def test_run_stops_on_register_change(self, setup_debugger):
        debugger, cpu = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.REGISTER_CHANGE, register_name="I"))
        executed = debugger.run(max_steps=100)
        assert executed == 2
        assert cpu.get_state().i == 0x300

    def test_disabled_breakpoint_is_ignored(self, setup_debugger):
        debugger, _ = setup_debugger
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204, enabled=False))
        assert debugger.run(max_steps=10) == 10

    # @intent:test_case_fault フォールトは実行を止め、呼び出し側へ伝わる。
    def test_run_propagates_fault(self, setup_debugger, capsys):
        debugger, cpu = setup_debugger
        cpu.load_program(bytes([0x00, 0xEE]))
        with pytest.raises(StackUnderflowError):
            debugger.run(max_steps=10)
        assert not debugger.is_running
        assert "Machine fault" in capsys.readouterr().out
