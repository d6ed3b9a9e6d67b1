# src/chip8_tracer/arch/chip8/instructions/load.py
"""
インデックスレジスタ、タイマ、メモリ転送命令の実装。
メモリへのアクセスは全てバス経由で行い、範囲外アドレスはバスがOutOfBoundsAccessErrorとして報告します。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.fonts import glyph_address
from .base import ExecutionContext, split_opcode

# --- Annn LD I, addr ---
def execute_ld_i_addr(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.i = split_opcode(op.opcode).nnn

# --- Fx07 LD Vx, DT ---
def execute_ld_vx_dt(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.v[split_opcode(op.opcode).x] = ctx.state.delay_timer

# --- Fx15 LD DT, Vx ---
def execute_ld_dt_vx(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.delay_timer = ctx.state.v[split_opcode(op.opcode).x]

# --- Fx18 LD ST, Vx ---
def execute_ld_st_vx(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.sound_timer = ctx.state.v[split_opcode(op.opcode).x]

# --- Fx1E ADD I, Vx ---
# @intent:note フラグ出力なし。Iは12bitに丸めません。
def execute_add_i_vx(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.i += ctx.state.v[split_opcode(op.opcode).x]

# --- Fx29 LD F, Vx ---
# @intent:note Vx > 0xF はフォント表の外を指します（丸めません）。
def execute_ld_f_vx(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.i = glyph_address(ctx.state.v[split_opcode(op.opcode).x])

# --- Fx33 LD B, Vx ---
# @intent:responsibility Vxの10進3桁（百、十、一）を I, I+1, I+2 に格納します。
def execute_ld_b_vx(ctx: ExecutionContext, op: Operation) -> None:
    value = ctx.state.v[split_opcode(op.opcode).x]
    base = ctx.state.i
    ctx.bus.write(base, value // 100)
    ctx.bus.write(base + 1, (value // 10) % 10)
    ctx.bus.write(base + 2, value % 10)

# --- Fx55 LD [I], Vx ---
# @intent:responsibility V0..Vx（両端含む）を I から順にメモリへ格納します。
def execute_ld_mem_vx(ctx: ExecutionContext, op: Operation) -> None:
    x = split_opcode(op.opcode).x
    for k in range(x + 1):
        ctx.bus.write(ctx.state.i + k, ctx.state.v[k])

# --- Fx65 LD Vx, [I] ---
# @intent:responsibility I から順にメモリを V0..Vx（両端含む）へ読み込みます。
def execute_ld_vx_mem(ctx: ExecutionContext, op: Operation) -> None:
    x = split_opcode(op.opcode).x
    for k in range(x + 1):
        ctx.state.v[k] = ctx.bus.read(ctx.state.i + k)
