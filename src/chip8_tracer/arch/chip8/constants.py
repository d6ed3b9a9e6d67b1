# src/chip8_tracer/arch/chip8/constants.py
"""
CHIP-8 仮想マシンの固定パラメータ。
"""

MEMORY_SIZE = 0x1000        # 4096 bytes
PROGRAM_START = 0x200
FONT_ADDRESS = 0x50
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
STACK_DEPTH = 16
KEY_COUNT = 16

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8

# ホストループの既定周期（約500Hz）
DEFAULT_CYCLE_PERIOD_MS = 2.0
