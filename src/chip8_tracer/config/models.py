from dataclasses import dataclass, field

from chip8_tracer.peripherals.keypad import KeyMap


@dataclass
class DisplayConfig:
    scale: int = 10               # 1ピクセルあたりの画面上のピクセル数
    foreground: str = "#E0E0E0"   # 点灯セルの色
    background: str = "#101010"


@dataclass
class EmulatorConfig:
    instruction_hz: int = 500
    timer_hz: int = 60
    trace_capacity: int = 100
    keymap: KeyMap = field(default_factory=KeyMap.default)
    display: DisplayConfig = field(default_factory=DisplayConfig)
