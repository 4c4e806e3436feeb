# tests/loader/test_program_loader.py
"""
chip8_tracer.loader.loaderモジュールの単体テスト。
"""
import pytest

from chip8_tracer.core.errors import ProgramLoadError
from chip8_tracer.loader.loader import ProgramLoader

# @intent:test_suite プログラムイメージの読み込みとサイズ検証を検証します。

class TestProgramLoader:
    def test_load_file(self, tmp_path):
        path = tmp_path / "pong.ch8"
        path.write_bytes(bytes([0x6A, 0x02, 0x12, 0x02]))
        assert ProgramLoader().load_file(path) == bytes([0x6A, 0x02, 0x12, 0x02])

    def test_load_max_size(self, tmp_path):
        path = tmp_path / "big.ch8"
        path.write_bytes(bytes(0xE00))
        assert len(ProgramLoader().load_file(str(path))) == 0xE00

    def test_oversized_image(self, tmp_path):
        path = tmp_path / "huge.ch8"
        path.write_bytes(bytes(0xE01))
        with pytest.raises(ProgramLoadError):
            ProgramLoader().load_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProgramLoadError):
            ProgramLoader().load_file(tmp_path / "missing.ch8")
