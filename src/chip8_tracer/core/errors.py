# chip8_tracer/core/errors.py
"""
Core Layer (実行時フォールト)

インタプリタが続行不能と判断した状態を表す例外群を定義します。
いずれも単一の step() 呼び出しの中で送出され、以後CPUは reset() されるまで停止します。
"""
from typing import Optional


# @intent:responsibility 全ての致命的なマシンフォールトの基底クラス。
class MachineFault(Exception):
    pass


# @intent:responsibility スタックが満杯の状態でのサブルーチン呼び出し（2nnn）。
class StackOverflowError(MachineFault):
    def __init__(self, pc: int, depth: int):
        super().__init__(f"Stack overflow at PC {pc:#05x}: call depth already {depth}.")
        self.pc = pc
        self.depth = depth


# @intent:responsibility 空のスタックからの復帰（00EE）。
class StackUnderflowError(MachineFault):
    def __init__(self, pc: int):
        super().__init__(f"Stack underflow at PC {pc:#05x}: return with empty stack.")
        self.pc = pc


# @intent:responsibility メモリ配列の範囲外を指すアドレスへのアクセス。
# @intent:rationale IndexErrorも継承し、バスを直接扱う呼び出し側の従来の例外処理と互換にします。
class OutOfBoundsAccessError(MachineFault, IndexError):
    def __init__(self, address: int, message: Optional[str] = None):
        super().__init__(message or f"Address {address:#05x} is outside memory.")
        self.address = address


# @intent:responsibility フォールト後、reset() を挟まずに step() が呼ばれた。
class MachineHaltedError(MachineFault):
    def __init__(self, cause: MachineFault):
        super().__init__(f"Machine halted by previous fault ({cause}); reset() is required.")
        self.cause = cause
