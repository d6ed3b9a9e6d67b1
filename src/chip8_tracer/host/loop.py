# chip8_tracer/host/loop.py
"""
ホストループ

ホスト側のキー状態を入力ラッチに反映してから step() を1回呼ぶ、という
1ティック分の手順と、一定周期で呼び出すためのペース計算を提供します。
UI（QTimer）からもヘッドレス実行からも同じ手順で駆動されます。
"""
import math
import time
from typing import Dict, Optional, Set

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.constants import DEFAULT_CYCLE_PERIOD_MS
from chip8_tracer.core.snapshot import Snapshot

# @intent:responsibility ホストのキー入力をCHIP-8のキーラッチへ写像し、一定周期でインタプリタを駆動します。
class HostLoop:
    def __init__(self, cpu: Chip8Cpu, keymap: Dict[str, int], cycle_period_ms: float = DEFAULT_CYCLE_PERIOD_MS):
        if cycle_period_ms <= 0:
            raise ValueError(f"cycle_period_ms must be positive: {cycle_period_ms}")
        self._cpu = cpu
        self._keymap = {name.upper(): index for name, index in keymap.items()}
        self._cycle_period_s = cycle_period_ms / 1000.0
        self._pressed: Set[str] = set()
        self._last_snapshot: Optional[Snapshot] = None

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def cycle_period_ms(self) -> float:
        return self._cycle_period_s * 1000.0

    @property
    def last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility ホストキーの押下を記録します。keymapにないキーは無視します。
    def press(self, host_key: str) -> None:
        name = host_key.upper()
        if name in self._keymap:
            self._pressed.add(name)

    def release(self, host_key: str) -> None:
        self._pressed.discard(host_key.upper())

    def release_all(self) -> None:
        self._pressed.clear()

    # @intent:responsibility 入力ラッチを全面的に上書きしてから、ちょうど1サイクル実行します。
    def tick(self) -> Snapshot:
        self._cpu.keypad.press_only(self._keymap[name] for name in self._pressed)
        self._last_snapshot = self._cpu.step()
        return self._last_snapshot

    # @intent:responsibility 経過時間に対して実行すべきサイクル数を返します。
    def cycles_due(self, elapsed_s: float) -> int:
        if elapsed_s <= 0:
            return 0
        # 商が浮動小数点誤差で整数をわずかに下回る場合（0.006 / 0.002 など）も整数側に揃える
        return math.floor(elapsed_s / self._cycle_period_s + 1e-9)

    # @intent:responsibility 指定した実時間の間、固定周期でtick()を呼び続けます（ヘッドレス実行用）。
    # @intent:rationale 遅れた分はまとめて実行し、平均周期を設定値に保ちます。
    def run_for(self, duration_s: float, clock=time.perf_counter, sleep=time.sleep) -> int:
        """
        duration_s 秒ぶんのサイクルを実行し、実行したサイクル数を返します。
        """
        total_cycles = self.cycles_due(duration_s)
        start = clock()
        executed = 0
        while executed < total_cycles:
            due = min(self.cycles_due(clock() - start), total_cycles)
            if due <= executed:
                sleep(self._cycle_period_s)
                continue
            while executed < due:
                self.tick()
                executed += 1
        return executed
