# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
レジスタ転送・算術論理演算命令の実装。

8xy4 は結果を格納してからVFへフラグを書き込みます。
8xy5, 8xy6, 8xy7, 8xyE は先にVFへフラグを書き込み、その後のレジスタ値から結果を求めます。
x == F（または y == F）の場合は、後から書いた値がVFに残ります。
"""
from chip8_tracer.core.snapshot import Operation
from .base import ExecutionContext, split_opcode

# --- 6xkk LD Vx, byte ---
def execute_ld_vx_byte(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    ctx.state.v[f.x] = f.kk

# --- 7xkk ADD Vx, byte ---
# @intent:note 8xy4と異なり、キャリーはVFへ出力しません。
def execute_add_vx_byte(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    ctx.state.v[f.x] = (ctx.state.v[f.x] + f.kk) & 0xFF

# --- 8xy0 LD Vx, Vy ---
def execute_ld_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    ctx.state.v[f.x] = ctx.state.v[f.y]

# --- 8xy1 OR Vx, Vy ---
def execute_or_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    ctx.state.v[f.x] |= ctx.state.v[f.y]

# --- 8xy2 AND Vx, Vy ---
def execute_and_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    ctx.state.v[f.x] &= ctx.state.v[f.y]

# --- 8xy3 XOR Vx, Vy ---
def execute_xor_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    ctx.state.v[f.x] ^= ctx.state.v[f.y]

# --- 8xy4 ADD Vx, Vy ---
# @intent:responsibility 加算し、8bitを超えた場合VF=1（キャリー）とします。
def execute_add_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    v = ctx.state.v
    total = v[f.x] + v[f.y]
    v[f.x] = total & 0xFF
    ctx.state.vf = 1 if total > 0xFF else 0

# --- 8xy5 SUB Vx, Vy ---
# @intent:responsibility Vx > Vy のときVF=1（ボローなし）。等しい場合は0。
def execute_sub_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    v = ctx.state.v
    ctx.state.vf = 1 if v[f.x] > v[f.y] else 0
    v[f.x] = (v[f.x] - v[f.y]) & 0xFF

# --- 8xy6 SHR Vx ---
# @intent:note Vyは使用しません（シフト対象はVx自身）。
def execute_shr_vx(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    v = ctx.state.v
    ctx.state.vf = v[f.x] & 0x01
    v[f.x] >>= 1

# --- 8xy7 SUBN Vx, Vy ---
def execute_subn_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    v = ctx.state.v
    ctx.state.vf = 1 if v[f.y] > v[f.x] else 0
    v[f.x] = (v[f.y] - v[f.x]) & 0xFF

# --- 8xyE SHL Vx ---
def execute_shl_vx(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    v = ctx.state.v
    ctx.state.vf = (v[f.x] & 0x80) >> 7
    v[f.x] = (v[f.x] << 1) & 0xFF

# --- Cxkk RND Vx, byte ---
def execute_rnd_vx_byte(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    ctx.state.v[f.x] = ctx.rng.randrange(0x100) & f.kk
