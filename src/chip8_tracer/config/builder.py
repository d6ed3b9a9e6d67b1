import random
from typing import Tuple

from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.constants import MEMORY_SIZE
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.loader.loader import ProgramLoader
from .models import SystemConfig

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、CPUを生成・接続し、プログラムをロードします。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        rng = random.Random(config.rng_seed)
        cpu = Chip8Cpu(bus, rng=rng)

        if config.program:
            ProgramLoader().load_file(config.program, bus)

        return cpu, bus
