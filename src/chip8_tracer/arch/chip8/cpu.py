# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 インタプリタの中心モジュール。

1回の step() で「フェッチ → PC+2 → デコード → 実行 → タイマ減算」の1サイクルを行います。
ホストループ（描画、入力、ペース配分）はこのクラスを呼び出すだけで、逆方向の呼び出しはありません。
"""
import random
from typing import Dict, List, Optional, Sequence, Tuple

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.constants import FONT_ADDRESS, REGISTER_COUNT
from chip8_tracer.arch.chip8.display import Framebuffer
from chip8_tracer.arch.chip8.fonts import FONT_SET
from chip8_tracer.arch.chip8.keypad import Keypad
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.instructions import ExecutionContext, decode_opcode, execute_instruction
from chip8_tracer.arch.chip8 import disassembler

# @intent:responsibility CHIP-8 インタプリタの具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマ）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシンをエミュレートするクラス。

    メモリはバス経由で、フレームバッファと入力ラッチはこのクラスが所有します。
    rng を渡すと Cxkk の乱数列を固定できます。
    """
    def __init__(self, bus: Bus, framebuffer: Optional[Framebuffer] = None,
                 keypad: Optional[Keypad] = None, rng: Optional[random.Random] = None):
        super().__init__(bus)
        self._framebuffer = framebuffer if framebuffer is not None else Framebuffer()
        self._keypad = keypad if keypad is not None else Keypad()
        self._rng = rng if rng is not None else random.Random()
        self._install_font()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 予約領域にフォントテーブルを配置します。
    def _install_font(self) -> None:
        self._bus.load_block(FONT_ADDRESS, FONT_SET)

    # @intent:responsibility レジスタ、スタック、タイマ、画面を初期化します。メモリ上のプログラムは保持します。
    def reset(self) -> None:
        super().reset()
        self._framebuffer.clear()
        self._keypad.press_only([])
        self._install_font()

    # @intent:responsibility プログラムイメージを0x200から配置します。下位アドレスには書き込みません。
    def load_program(self, data: bytes) -> None:
        from chip8_tracer.loader.loader import ProgramLoader
        ProgramLoader().load_bytes(data, self._bus)

    # @intent:responsibility 入力側から16キー分の押下状態を一括で受け取ります。
    def set_keys(self, states: Sequence[bool]) -> None:
        self._keypad.latch(states)

    @property
    def framebuffer(self) -> Framebuffer:
        return self._framebuffer

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def delay_timer(self) -> int:
        return self._state.delay_timer

    @property
    def sound_timer(self) -> int:
        return self._state.sound_timer

    @property
    def is_awaiting_key(self) -> bool:
        return self._state.awaiting_key is not None

    # @intent:responsibility pc, pc+1 の2バイトをビッグエンディアンで合成します。
    def _fetch(self) -> int:
        hi = self._bus.read(self._state.pc)
        lo = self._bus.read(self._state.pc + 1)
        return (hi << 8) | lo

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        ctx = ExecutionContext(
            state=self._state,
            bus=self._bus,
            framebuffer=self._framebuffer,
            keypad=self._keypad,
            rng=self._rng,
        )
        execute_instruction(operation, ctx)

    # @intent:responsibility 実行した命令に関わらず、0でないタイマを1ずつ減算します（0で飽和）。
    def _post_execute(self, operation: Operation) -> None:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    def _copy_state(self) -> Chip8CpuState:
        return self._state.copy()

    # @intent:responsibility UI・デバッガ用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(REGISTER_COUNT)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility VFのフラグ値と、キー入力待ち・音声出力中の状態を返します。
    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {
            "VF": s.vf != 0,
            "WAIT_KEY": s.awaiting_key is not None,
            "SOUND": s.sound_timer > 0,
        }

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
