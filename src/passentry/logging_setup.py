"""logging の初期化。

- コンソール: stderr に RichHandler（stdout は JSON/YAML 出力専用）
- 詳細ログ: `log_file` 指定時のみ RotatingFileHandler

パスワードやメモ本文はログに出さない。エントリ名と件数のみ。
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(*, level: str = "WARNING", log_file: Path | None = None) -> None:
    # 既に設定済みなら二重設定しない
    if getattr(setup_logging, "_configured", False):
        return

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    console = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    console.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=2_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        fmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(fmt)
        root_logger.addHandler(handler)

    setup_logging._configured = True  # type: ignore[attr-defined]
