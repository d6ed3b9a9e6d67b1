"""
UIとデバッガが共有するレジスタ表示用の型。
"""
from typing import List, NamedTuple

# @intent:data_structure 1本のレジスタの名前とビット幅。名前は get_register_map() のキーと一致させる。
class RegisterInfo(NamedTuple):
    name: str
    width: int

    # @intent:accessor 16進表示に必要な桁数（8bit -> 2桁, 12/16bit -> 3/4桁）。
    @property
    def hex_digits(self) -> int:
        return (self.width + 3) // 4

# @intent:data_structure パネル上でまとめて表示するレジスタの組（"General", "Timers" など）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
