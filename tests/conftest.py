from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from rich.logging import RichHandler

from passentry.logging_setup import setup_logging

SAMPLE_ENTRY = """password123
url: https://some.test.biz
notes line 1
login: user
notes line 2
notes line 3"""


@pytest.fixture(autouse=True)
def reset_logging():
    """setup_logging の一度きりガードとハンドラをテストごとに戻す。"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    if hasattr(setup_logging, "_configured"):
        del setup_logging._configured  # type: ignore[attr-defined]
    yield
    for h in list(root.handlers):
        if h not in handlers and isinstance(h, (RichHandler, RotatingFileHandler)):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    if hasattr(setup_logging, "_configured"):
        del setup_logging._configured  # type: ignore[attr-defined]


@pytest.fixture()
def store_root(tmp_path: Path) -> Path:
    """最小限の pass ストア（中身は空の .gpg ファイル）を作る。"""
    root = tmp_path / "password-store"
    (root / "email").mkdir(parents=True)
    (root / "web" / "shop").mkdir(parents=True)
    (root / ".git").mkdir()

    (root / ".gpg-id").write_text("ABCDEF\n", encoding="utf-8")
    (root / "email" / "work.gpg").write_bytes(b"")
    (root / "email" / "personal.gpg").write_bytes(b"")
    (root / "web" / "shop" / "books.example.gpg").write_bytes(b"")
    (root / "top.gpg").write_bytes(b"")
    (root / ".git" / "stray.gpg").write_bytes(b"")
    (root / "email" / "README.txt").write_text("not an entry", encoding="utf-8")
    return root


@pytest.fixture()
def sample_entry() -> str:
    """url/login/メモを含む典型的なエントリ本文。"""
    return SAMPLE_ENTRY
