# chip8_tracer/loader/loader.py
"""
プログラムローダーモジュール。

ストレージ上のCHIP-8プログラムイメージ（ヘッダ無しの生バイト列）を読み込みます。
"""
import logging
from pathlib import Path
from typing import Union

from chip8_tracer.arch.chip8.state import MAX_PROGRAM_SIZE
from chip8_tracer.core.errors import ProgramLoadError

logger = logging.getLogger(__name__)

# @intent:responsibility 生のプログラムイメージを読み込み、サイズを検証します。
class ProgramLoader:
    def load_file(self, path: Union[str, Path]) -> bytes:
        """
        ファイルを読み込んでバイト列を返します。
        読み込めない場合や 0xE00 バイトを超える場合は ProgramLoadError を送出します。
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise ProgramLoadError(f"Cannot read program image '{path}': {e}") from e
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramLoadError(
                f"Program image '{path}' is {len(data)} bytes, exceeds the maximum of {MAX_PROGRAM_SIZE} bytes"
            )
        logger.debug("Read %d bytes from %s", len(data), path)
        return data
