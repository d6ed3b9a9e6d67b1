# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力待ち）の実装。
全てのハンドラは、PCが既に次の命令（フェッチ位置+2）を指している前提で動作します。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.arch.chip8.constants import STACK_DEPTH, KEY_COUNT
from .base import ExecutionContext, split_opcode, skip_next

# --- 00EE RET ---
# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
# @intent:pre-condition sp > 0。空のスタックからの復帰はStackUnderflowError。
def execute_ret(ctx: ExecutionContext, op: Operation) -> None:
    state = ctx.state
    if state.sp == 0:
        raise StackUnderflowError(state.pc - 2)
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- 1nnn JP addr ---
def execute_jp_addr(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.pc = split_opcode(op.opcode).nnn

# --- 2nnn CALL addr ---
# @intent:responsibility 現在のPC（次の命令）をプッシュしてからジャンプします。
# @intent:pre-condition sp < 16。満杯のスタックへのプッシュはStackOverflowError。
def execute_call(ctx: ExecutionContext, op: Operation) -> None:
    state = ctx.state
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError(state.pc - 2, state.sp)
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = split_opcode(op.opcode).nnn

# --- 3xkk SE Vx, byte ---
def execute_se_vx_byte(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    if ctx.state.v[f.x] == f.kk:
        skip_next(ctx.state)

# --- 4xkk SNE Vx, byte ---
def execute_sne_vx_byte(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    if ctx.state.v[f.x] != f.kk:
        skip_next(ctx.state)

# --- 5xy0 SE Vx, Vy ---
def execute_se_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    if ctx.state.v[f.x] == ctx.state.v[f.y]:
        skip_next(ctx.state)

# --- 9xy0 SNE Vx, Vy ---
def execute_sne_vx_vy(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    if ctx.state.v[f.x] != ctx.state.v[f.y]:
        skip_next(ctx.state)

# --- Bnnn JP V0, addr ---
def execute_jp_v0_addr(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.pc = split_opcode(op.opcode).nnn + ctx.state.v[0]

# --- Ex9E SKP Vx ---
# @intent:note キー番号にはVxの下位ニブルを使用します。
def execute_skp_vx(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    if ctx.keypad.is_pressed(ctx.state.v[f.x]):
        skip_next(ctx.state)

# --- ExA1 SKNP Vx ---
def execute_sknp_vx(ctx: ExecutionContext, op: Operation) -> None:
    f = split_opcode(op.opcode)
    if not ctx.keypad.is_pressed(ctx.state.v[f.x]):
        skip_next(ctx.state)

# --- Fx0A LD Vx, K ---
# @intent:responsibility キーが押されるまで同じ命令を繰り返し実行させます。
# @intent:rationale 真の中断ではなく、PCを2戻して待機サブ状態(awaiting_key)に入ることで表現します。
#                  ホストループが次のstepを呼ぶと同じ命令が再フェッチされます。
def execute_ld_vx_k(ctx: ExecutionContext, op: Operation) -> None:
    state = ctx.state
    x = split_opcode(op.opcode).x
    pressed = None
    for key in range(KEY_COUNT):
        if ctx.keypad.is_pressed(key):
            pressed = key  # 複数押下時は最後に一致したキーを採用
    if pressed is None:
        state.pc -= 2
        state.awaiting_key = x
    else:
        state.v[x] = pressed
        state.awaiting_key = None
