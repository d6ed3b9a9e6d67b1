# chip8_tracer/core/state.py
"""
Core Layer (CPU状態)

命令サイクルのテンプレート（AbstractCpu.step）が直接参照するレジスタだけを定義します。
"""
from dataclasses import dataclass

# @intent:responsibility プログラムカウンタとスタック段数。CHIP-8固有のレジスタはChip8CpuStateが追加します。
@dataclass
class CpuState:
    pc: int = 0  # 次にフェッチする命令語のアドレス
    sp: int = 0  # 使用中のスタック段数
