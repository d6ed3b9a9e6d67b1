# src/chip8_tracer/arch/chip8/instructions/graphics.py
"""
画面消去とスプライト描画命令の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.constants import SPRITE_WIDTH
from .base import ExecutionContext, split_opcode

# --- 00E0 CLS ---
def execute_cls(ctx: ExecutionContext, op: Operation) -> None:
    ctx.framebuffer.clear()

# --- Dxyn DRW Vx, Vy, n ---
# @intent:responsibility I から n バイトのスプライトを (Vx, Vy) にXOR描画し、衝突をVFに出力します。
# @intent:note 座標は画面サイズの剰余で折り返します（クリップしません）。
#               VFは描画前に0にするため、x または y が F の場合の原点は0になります。
def execute_drw(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    state = ctx.state
    fb = ctx.framebuffer
    state.vf = 0
    origin_x = state.v[f.x]
    origin_y = state.v[f.y]
    collision = 0
    for row in range(f.n):
        sprite_byte = ctx.bus.read(state.i + row)
        ty = (origin_y + row) % fb.height
        for bit in range(SPRITE_WIDTH):
            pixel = (sprite_byte >> (7 - bit)) & 1
            tx = (origin_x + bit) % fb.width
            if fb.xor_pixel(tx, ty, pixel):
                collision = 1
    state.vf = collision
