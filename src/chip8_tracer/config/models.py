from dataclasses import dataclass, field
from typing import Dict, Optional

from chip8_tracer.arch.chip8.constants import DEFAULT_CYCLE_PERIOD_MS

# 既定のキー配置:
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    on_color: str = "#00FA00"
    off_color: str = "#000000"

@dataclass
class SystemConfig:
    cycle_period_ms: float = DEFAULT_CYCLE_PERIOD_MS
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
    program: Optional[str] = None
    rng_seed: Optional[int] = None
