# tests/config/test_config.py
"""
chip8_tracer.config パッケージ（YAML読み込み、検証、システム構築）の単体テスト。
"""
import pytest

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import SystemConfig, DisplayConfig, DEFAULT_KEYMAP

# @intent:test_suite 構成ファイルの解釈と検証。
class TestConfigLoader:
    def test_defaults(self):
        config = ConfigLoader().load_from_dict({})
        assert config.cycle_period_ms == 2.0
        assert config.display == DisplayConfig()
        assert config.keymap == DEFAULT_KEYMAP
        assert config.program is None
        assert config.rng_seed is None

    def test_default_keymap_covers_all_keys(self):
        assert sorted(DEFAULT_KEYMAP.values()) == list(range(16))

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "system.yaml"
        path.write_text(
            "cycle_period_ms: 1.5\n"
            "rng_seed: '0x2A'\n"
            "program: games/pong.ch8\n"
            "display:\n"
            "  scale: 4\n"
            "  on_color: '#FFFFFF'\n"
        )
        config = ConfigLoader().load_from_file(str(path))
        assert config.cycle_period_ms == 1.5
        assert config.rng_seed == 0x2A
        assert config.program == "games/pong.ch8"
        assert config.display.scale == 4
        assert config.display.on_color == "#FFFFFF"
        assert config.display.off_color == "#000000"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ConfigLoader().load_from_file(str(path)) == SystemConfig()

    # @intent:test_case_keymap_partial 割り当てのないキーがある場合は警告し、キー名は大文字に正規化する。
    def test_partial_keymap_warns(self):
        keymap = {"x": 0, "1": "0x1"}
        with pytest.warns(UserWarning, match="unmapped"):
            config = ConfigLoader().load_from_dict({"keymap": keymap})
        assert config.keymap == {"X": 0, "1": 1}

    @pytest.mark.parametrize("data", [
        {"cycle_period_ms": 0},
        {"display": {"scale": -1}},
        {"keymap": {"Q": 16}},
        {"keymap": {"Q": True}},
        {"rng_seed": "seed"},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ValueError):
            ConfigLoader().load_from_dict(data)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            ConfigLoader().load_from_file(str(path))

# @intent:test_suite 構成からのシステム構築。
class TestSystemBuilder:
    def test_build_loads_program(self, tmp_path):
        program = tmp_path / "prog.ch8"
        program.write_bytes(bytes([0x60, 0x07]))
        cpu, bus = SystemBuilder().build_system(SystemConfig(program=str(program)))
        assert bus.peek(0x200) == 0x60
        cpu.step()
        assert cpu.get_state().v[0] == 7

    def test_seed_makes_random_reproducible(self):
        results = []
        for _ in range(2):
            cpu, _ = SystemBuilder().build_system(SystemConfig(rng_seed=99))
            cpu.load_program(bytes([0xC0, 0xFF, 0xC1, 0xFF, 0xC2, 0xFF]))
            for _ in range(3):
                cpu.step()
            results.append(cpu.get_state().v[:3])
        assert results[0] == results[1]
