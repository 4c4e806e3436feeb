import logging
from typing import Any, Dict, List

import yaml

from chip8_tracer.peripherals.keypad import KeyMap
from .models import DisplayConfig, EmulatorConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        logger.info("Loaded configuration from %s", path)
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")
        defaults = EmulatorConfig()

        instruction_hz = self._parse_int(data.get("instruction_hz", defaults.instruction_hz))
        timer_hz = self._parse_int(data.get("timer_hz", defaults.timer_hz))
        trace_capacity = self._parse_int(data.get("trace_capacity", defaults.trace_capacity))
        for name, value in (("instruction_hz", instruction_hz), ("timer_hz", timer_hz),
                            ("trace_capacity", trace_capacity)):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        keymap = defaults.keymap
        if "keymap" in data:
            keymap = self._parse_keymap(data["keymap"])

        # Parse Display
        display_data = data.get("display", {}) or {}
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", defaults.display.scale)),
            foreground=str(display_data.get("foreground", defaults.display.foreground)),
            background=str(display_data.get("background", defaults.display.background)),
        )
        if display.scale <= 0:
            raise ValueError(f"display.scale must be positive, got {display.scale}")

        return EmulatorConfig(
            instruction_hz=instruction_hz,
            timer_hz=timer_hz,
            trace_capacity=trace_capacity,
            keymap=keymap,
            display=display,
        )

    # キーマップは論理キー0x0から順に16個。文字列 "1234QWERASDFZXCV" 形式、または文字/整数のリスト。
    def _parse_keymap(self, value: Any) -> KeyMap:
        if isinstance(value, str):
            entries: List[Any] = list(value)
        elif isinstance(value, list):
            entries = value
        else:
            raise ValueError(f"Invalid keymap format: {value!r}")
        return KeyMap(self._parse_key_code(entry) for entry in entries)

    def _parse_key_code(self, value: Any) -> int:
        if isinstance(value, str) and len(value) == 1:
            return ord(value.upper())
        return self._parse_int(value)

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
