# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.core.snapshot import Operation
from .base import ExecutionContext, Instruction, split_opcode
from .maps import DECODE_TABLE, EXECUTE_MAP

# @intent:responsibility 16bit命令語を命令種別タグ付きのOperationへデコードします。
def decode_opcode(opcode: int) -> Operation:
    """
    CHIP-8の命令語をデコードし、Operationオブジェクトを返します。
    未定義の命令語は instruction=None の UNKNOWN として返します。
    """
    fields = split_opcode(opcode)
    for mask, pattern, instruction, mnemonic, operand_format in DECODE_TABLE:
        if opcode & mask == pattern:
            operands = operand_format.format(**fields._asdict()).split("|") if operand_format else []
            return Operation(opcode_hex=f"{opcode:04X}", mnemonic=mnemonic, operands=operands,
                             opcode=opcode, instruction=instruction)
    return Operation(opcode_hex=f"{opcode:04X}", mnemonic="UNKNOWN", operands=[f"${opcode:04X}"], opcode=opcode)

# @intent:responsibility デコードされた命令を1回だけディスパッチして実行します。
def execute_instruction(operation: Operation, ctx: ExecutionContext) -> None:
    executor = EXECUTE_MAP.get(operation.instruction)
    if executor:
        executor(ctx, operation)
