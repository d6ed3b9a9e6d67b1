# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
命令語パターンと命令実装のマッピング定義。
"""
from typing import Callable, Dict, List, Tuple

from chip8_tracer.core.snapshot import Operation
from . import alu
from . import control
from . import graphics
from . import load
from .base import ExecutionContext, Instruction

# @intent:map (マスク, 一致値, 命令種別, ニーモニック, オペランド書式) のデコードテーブル。
# @intent:rationale 第1ニブルが主判別子。8xy*, Ex**, Fx** 系は下位ニブル（または下位2ニブル）で判別します。
#                  上から順に照合し最初に一致したものを採用。どれにも一致しない命令語は UNKNOWN（無動作）。
DECODE_TABLE: List[Tuple[int, int, Instruction, str, str]] = [
    (0xFFFF, 0x00E0, Instruction.CLS, "CLS", ""),
    (0xFFFF, 0x00EE, Instruction.RET, "RET", ""),
    (0xF000, 0x1000, Instruction.JP_ADDR, "JP", "${nnn:03X}"),
    (0xF000, 0x2000, Instruction.CALL, "CALL", "${nnn:03X}"),
    (0xF000, 0x3000, Instruction.SE_VX_BYTE, "SE", "V{x:X}|#${kk:02X}"),
    (0xF000, 0x4000, Instruction.SNE_VX_BYTE, "SNE", "V{x:X}|#${kk:02X}"),
    (0xF00F, 0x5000, Instruction.SE_VX_VY, "SE", "V{x:X}|V{y:X}"),
    (0xF000, 0x6000, Instruction.LD_VX_BYTE, "LD", "V{x:X}|#${kk:02X}"),
    (0xF000, 0x7000, Instruction.ADD_VX_BYTE, "ADD", "V{x:X}|#${kk:02X}"),
    (0xF00F, 0x8000, Instruction.LD_VX_VY, "LD", "V{x:X}|V{y:X}"),
    (0xF00F, 0x8001, Instruction.OR_VX_VY, "OR", "V{x:X}|V{y:X}"),
    (0xF00F, 0x8002, Instruction.AND_VX_VY, "AND", "V{x:X}|V{y:X}"),
    (0xF00F, 0x8003, Instruction.XOR_VX_VY, "XOR", "V{x:X}|V{y:X}"),
    (0xF00F, 0x8004, Instruction.ADD_VX_VY, "ADD", "V{x:X}|V{y:X}"),
    (0xF00F, 0x8005, Instruction.SUB_VX_VY, "SUB", "V{x:X}|V{y:X}"),
    (0xF00F, 0x8006, Instruction.SHR_VX, "SHR", "V{x:X}"),
    (0xF00F, 0x8007, Instruction.SUBN_VX_VY, "SUBN", "V{x:X}|V{y:X}"),
    (0xF00F, 0x800E, Instruction.SHL_VX, "SHL", "V{x:X}"),
    (0xF00F, 0x9000, Instruction.SNE_VX_VY, "SNE", "V{x:X}|V{y:X}"),
    (0xF000, 0xA000, Instruction.LD_I_ADDR, "LD", "I|${nnn:03X}"),
    (0xF000, 0xB000, Instruction.JP_V0_ADDR, "JP", "V0|${nnn:03X}"),
    (0xF000, 0xC000, Instruction.RND_VX_BYTE, "RND", "V{x:X}|#${kk:02X}"),
    (0xF000, 0xD000, Instruction.DRW, "DRW", "V{x:X}|V{y:X}|{n}"),
    (0xF0FF, 0xE09E, Instruction.SKP_VX, "SKP", "V{x:X}"),
    (0xF0FF, 0xE0A1, Instruction.SKNP_VX, "SKNP", "V{x:X}"),
    (0xF0FF, 0xF007, Instruction.LD_VX_DT, "LD", "V{x:X}|DT"),
    (0xF0FF, 0xF00A, Instruction.LD_VX_K, "LD", "V{x:X}|K"),
    (0xF0FF, 0xF015, Instruction.LD_DT_VX, "LD", "DT|V{x:X}"),
    (0xF0FF, 0xF018, Instruction.LD_ST_VX, "LD", "ST|V{x:X}"),
    (0xF0FF, 0xF01E, Instruction.ADD_I_VX, "ADD", "I|V{x:X}"),
    (0xF0FF, 0xF029, Instruction.LD_F_VX, "LD", "F|V{x:X}"),
    (0xF0FF, 0xF033, Instruction.LD_B_VX, "LD", "B|V{x:X}"),
    (0xF0FF, 0xF055, Instruction.LD_MEM_VX, "LD", "[I]|V{x:X}"),
    (0xF0FF, 0xF065, Instruction.LD_VX_MEM, "LD", "V{x:X}|[I]"),
]

Handler = Callable[[ExecutionContext, Operation], None]

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP: Dict[Instruction, Handler] = {
    # Graphics
    Instruction.CLS: graphics.execute_cls,
    Instruction.DRW: graphics.execute_drw,

    # Control
    Instruction.RET: control.execute_ret,
    Instruction.JP_ADDR: control.execute_jp_addr,
    Instruction.CALL: control.execute_call,
    Instruction.SE_VX_BYTE: control.execute_se_vx_byte,
    Instruction.SNE_VX_BYTE: control.execute_sne_vx_byte,
    Instruction.SE_VX_VY: control.execute_se_vx_vy,
    Instruction.SNE_VX_VY: control.execute_sne_vx_vy,
    Instruction.JP_V0_ADDR: control.execute_jp_v0_addr,
    Instruction.SKP_VX: control.execute_skp_vx,
    Instruction.SKNP_VX: control.execute_sknp_vx,
    Instruction.LD_VX_K: control.execute_ld_vx_k,

    # ALU
    Instruction.LD_VX_BYTE: alu.execute_ld_vx_byte,
    Instruction.ADD_VX_BYTE: alu.execute_add_vx_byte,
    Instruction.LD_VX_VY: alu.execute_ld_vx_vy,
    Instruction.OR_VX_VY: alu.execute_or_vx_vy,
    Instruction.AND_VX_VY: alu.execute_and_vx_vy,
    Instruction.XOR_VX_VY: alu.execute_xor_vx_vy,
    Instruction.ADD_VX_VY: alu.execute_add_vx_vy,
    Instruction.SUB_VX_VY: alu.execute_sub_vx_vy,
    Instruction.SHR_VX: alu.execute_shr_vx,
    Instruction.SUBN_VX_VY: alu.execute_subn_vx_vy,
    Instruction.SHL_VX: alu.execute_shl_vx,
    Instruction.RND_VX_BYTE: alu.execute_rnd_vx_byte,

    # Load / Store / Timers
    Instruction.LD_I_ADDR: load.execute_ld_i_addr,
    Instruction.LD_VX_DT: load.execute_ld_vx_dt,
    Instruction.LD_DT_VX: load.execute_ld_dt_vx,
    Instruction.LD_ST_VX: load.execute_ld_st_vx,
    Instruction.ADD_I_VX: load.execute_add_i_vx,
    Instruction.LD_F_VX: load.execute_ld_f_vx,
    Instruction.LD_B_VX: load.execute_ld_b_vx,
    Instruction.LD_MEM_VX: load.execute_ld_mem_vx,
    Instruction.LD_VX_MEM: load.execute_ld_vx_mem,
}
