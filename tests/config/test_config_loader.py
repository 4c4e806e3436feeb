# tests/config/test_config_loader.py
"""
chip8_tracer.config.loaderモジュールの単体テスト。
"""
import pytest

from chip8_tracer.config.builder import MachineBuilder
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.errors import ProgramLoadError
from chip8_tracer.peripherals.keypad import KeyMap

# @intent:test_suite YAML設定ファイルの解析と検証、設定からのマシン構築を検証します。

class TestConfigLoader:
    @pytest.fixture
    def loader(self):
        return ConfigLoader()

    def test_empty_file_gives_defaults(self, loader, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = loader.load_from_file(str(path))
        assert config == EmulatorConfig()
        assert config.instruction_hz == 500
        assert config.timer_hz == 60
        assert config.trace_capacity == 100
        assert config.keymap == KeyMap.default()
        assert config.display.scale == 10

    def test_full_file(self, loader, tmp_path):
        path = tmp_path / "chip8.yaml"
        path.write_text(
            "instruction_hz: 700\n"
            "timer_hz: '0x3C'\n"
            "trace_capacity: 50\n"
            "keymap: 1234qwerasdfzxcv\n"
            "display:\n"
            "  scale: 8\n"
            "  foreground: '#00FF00'\n"
        )
        config = loader.load_from_file(str(path))
        assert config.instruction_hz == 700
        assert config.timer_hz == 60
        assert config.trace_capacity == 50
        assert config.keymap.index_of(ord("1")) == 0
        assert config.keymap.index_of(ord("Q")) == 4
        assert config.display.scale == 8
        assert config.display.foreground == "#00FF00"
        assert config.display.background == "#101010"

    def test_keymap_as_list(self, loader):
        codes = list(range(0x41, 0x51))
        config = loader.parse({"keymap": codes})
        assert config.keymap.codes == tuple(codes)

        config = loader.parse({"keymap": ["x", "1", "2", "3", "q", "w", "e", "a",
                                          "s", "d", "z", "c", "4", "r", "f", "v"]})
        assert config.keymap == KeyMap.default()

    @pytest.mark.parametrize("data", [
        {"instruction_hz": 0},
        {"timer_hz": -60},
        {"trace_capacity": 0},
        {"instruction_hz": True},
        {"instruction_hz": 1.5},
        {"instruction_hz": "fast"},
        {"keymap": "123"},
        {"keymap": 42},
        {"display": {"scale": 0}},
    ])
    def test_invalid_values(self, loader, data):
        with pytest.raises(ValueError):
            loader.parse(data)

    def test_not_a_mapping(self, loader):
        with pytest.raises(ValueError):
            loader.parse(["instruction_hz", 500])

    def test_invalid_yaml(self, loader, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("instruction_hz: [500\n")
        with pytest.raises(ValueError):
            loader.load_from_file(str(path))


class TestMachineBuilder:
    def test_build_cpu_and_scheduler(self):
        builder = MachineBuilder(EmulatorConfig(instruction_hz=250, timer_hz=50))
        cpu = builder.build_cpu(bytes([0x00, 0xE0]))
        assert cpu.get_state().memory[0x201] == 0xE0
        scheduler = builder.build_scheduler()
        assert scheduler.instruction_gate.period_ms == 4
        assert scheduler.timer_gate.period_ms == 20

    def test_build_cpu_rejects_oversized_program(self):
        with pytest.raises(ProgramLoadError):
            MachineBuilder().build_cpu(bytes(0xE01))
