# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリをCHIP-8のニーモニックに変換します。
Instruction Layerのデコードロジックを再利用し、バスアクセスログを汚さないようにpeekで読み出します。
"""
from typing import List, Tuple

from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.constants import MEMORY_SIZE
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を2バイト単位で逆アセンブルします。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    Returns:
        List of (address, hex_word, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = start_addr + length

    while current_addr < end_addr:
        # 命令語の2バイト目がメモリ外にかかる場合は終了
        if current_addr + 1 >= MEMORY_SIZE:
            break

        opcode = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        operation = decode_opcode(opcode)

        mnemonic_str = operation.mnemonic
        if operation.operands:
            mnemonic_str += " " + ", ".join(operation.operands)

        result.append((current_addr, operation.opcode_hex, mnemonic_str))
        current_addr += operation.length

    return result
