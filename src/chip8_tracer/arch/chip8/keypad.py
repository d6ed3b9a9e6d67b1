# src/chip8_tracer/arch/chip8/keypad.py
"""
16キーの入力ラッチ。
"""
from typing import Iterable, List, Sequence

from chip8_tracer.arch.chip8.constants import KEY_COUNT

# @intent:responsibility キー0x0-0xFの押下状態を保持します。
# @intent:rationale 入力側は毎サイクル全16キーを一括で上書きし、インタプリタは読むだけです。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    # @intent:responsibility 16要素のスナップショットでラッチ全体を上書きします。
    def latch(self, states: Sequence[bool]) -> None:
        if len(states) != KEY_COUNT:
            raise ValueError(f"Key latch expects {KEY_COUNT} states, got {len(states)}.")
        self._keys = [bool(s) for s in states]

    # @intent:responsibility 押下中のキー番号集合からラッチ全体を作り直します。
    def press_only(self, indices: Iterable[int]) -> None:
        states = [False] * KEY_COUNT
        for index in indices:
            if not 0 <= index < KEY_COUNT:
                raise ValueError(f"Key index {index} is not in 0x0-0xF.")
            states[index] = True
        self._keys = states

    def is_pressed(self, key: int) -> bool:
        return self._keys[key & 0xF]

    def pressed_keys(self) -> List[int]:
        return [index for index, state in enumerate(self._keys) if state]

    def states(self) -> List[bool]:
        return list(self._keys)
