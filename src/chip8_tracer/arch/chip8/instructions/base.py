# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8 命令語の分解と、命令ハンドラが共有する実行コンテキスト。
"""
import random
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.display import Framebuffer
from chip8_tracer.arch.chip8.keypad import Keypad

# @intent:responsibility デコード結果の命令種別タグ。1タグにつき1ハンドラが対応します。
class Instruction(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP_ADDR = "1nnn"
    CALL = "2nnn"
    SE_VX_BYTE = "3xkk"
    SNE_VX_BYTE = "4xkk"
    SE_VX_VY = "5xy0"
    LD_VX_BYTE = "6xkk"
    ADD_VX_BYTE = "7xkk"
    LD_VX_VY = "8xy0"
    OR_VX_VY = "8xy1"
    AND_VX_VY = "8xy2"
    XOR_VX_VY = "8xy3"
    ADD_VX_VY = "8xy4"
    SUB_VX_VY = "8xy5"
    SHR_VX = "8xy6"
    SUBN_VX_VY = "8xy7"
    SHL_VX = "8xyE"
    SNE_VX_VY = "9xy0"
    LD_I_ADDR = "Annn"
    JP_V0_ADDR = "Bnnn"
    RND_VX_BYTE = "Cxkk"
    DRW = "Dxyn"
    SKP_VX = "Ex9E"
    SKNP_VX = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    LD_F_VX = "Fx29"
    LD_B_VX = "Fx33"
    LD_MEM_VX = "Fx55"
    LD_VX_MEM = "Fx65"

# @intent:data_structure 16bit命令語から取り出したニブルと派生オペランド。
class OpcodeFields(NamedTuple):
    n1: int   # 第1ニブル（主判別子）
    x: int    # 第2ニブル
    y: int    # 第3ニブル
    n: int    # 第4ニブル
    kk: int   # 下位8bit即値
    nnn: int  # 下位12bitアドレス

def split_opcode(opcode: int) -> OpcodeFields:
    return OpcodeFields(
        n1=(opcode & 0xF000) >> 12,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        kk=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )

# @intent:responsibility 命令ハンドラが操作するマシン資源一式。
# @intent:rationale CPU本体ではなくこのコンテキストを渡すことで、ハンドラは自身が触れる資源だけに依存します。
@dataclass
class ExecutionContext:
    state: Chip8CpuState
    bus: Bus
    framebuffer: Framebuffer
    keypad: Keypad
    rng: random.Random

# @intent:responsibility スキップ命令の共通処理。PCは既に次の命令を指しているため、さらに1命令分進めます。
def skip_next(state: Chip8CpuState) -> None:
    state.pc += 2
