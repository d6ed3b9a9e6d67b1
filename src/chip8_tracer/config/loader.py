import warnings
import yaml
from typing import Dict, Any

from chip8_tracer.arch.chip8.constants import KEY_COUNT
from .models import SystemConfig, DisplayConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.load_from_dict(data or {})

    def load_from_dict(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}.")

        cycle_period_ms = float(data.get("cycle_period_ms", SystemConfig.cycle_period_ms))
        if cycle_period_ms <= 0:
            raise ValueError(f"cycle_period_ms must be positive: {cycle_period_ms}")

        display = self._parse_display(data.get("display", {}))
        keymap = self._parse_keymap(data.get("keymap"))

        rng_seed = data.get("rng_seed")
        if rng_seed is not None:
            rng_seed = self._parse_int(rng_seed)

        return SystemConfig(
            cycle_period_ms=cycle_period_ms,
            display=display,
            keymap=keymap,
            program=data.get("program"),
            rng_seed=rng_seed,
        )

    def _parse_display(self, data: Dict[str, Any]) -> DisplayConfig:
        defaults = DisplayConfig()
        scale = self._parse_int(data.get("scale", defaults.scale))
        if scale <= 0:
            raise ValueError(f"display.scale must be positive: {scale}")
        return DisplayConfig(
            scale=scale,
            on_color=str(data.get("on_color", defaults.on_color)),
            off_color=str(data.get("off_color", defaults.off_color)),
        )

    # @intent:responsibility ホストキー名 -> CHIP-8キー番号 の対応表を検証します。
    # @intent:rationale 割り当てのないCHIP-8キーは致命的ではないため、警告に留めます。
    def _parse_keymap(self, data: Any) -> Dict[str, int]:
        if data is None:
            return dict(DEFAULT_KEYMAP)
        keymap = {}
        for host_key, target in data.items():
            index = self._parse_int(target)
            if not 0 <= index < KEY_COUNT:
                raise ValueError(f"Keymap entry '{host_key}' targets {index}, outside 0x0-0xF.")
            keymap[str(host_key).upper()] = index

        unmapped = sorted(set(range(KEY_COUNT)) - set(keymap.values()))
        if unmapped:
            names = ", ".join(f"{k:X}" for k in unmapped)
            warnings.warn(f"Keymap leaves CHIP-8 keys unmapped: {names}")
        return keymap

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
