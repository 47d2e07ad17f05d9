"""pass ストアへのアクセス。

- `pass show <name>` を実行して stdout（bytes）を受け取る
- ストアディレクトリの `*.gpg` を列挙してエントリ名にする

復号は pass/gpg に任せる。このモジュールは stdout をデコーダに渡すだけ。
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from passentry.config import PassConfig
from passentry.entry import Entry, decode_bytes
from passentry.errors import InvalidName, StoreError

log = logging.getLogger(__name__)

ENTRY_SUFFIX = ".gpg"


@dataclass
class PassStore:
    config: PassConfig = field(default_factory=PassConfig)

    @property
    def root(self) -> Path:
        return self.config.store_dir

    def _env(self) -> dict[str, str]:
        env = dict(os.environ)
        env["PASSWORD_STORE_DIR"] = str(self.root)
        return env

    def show(self, name: str) -> bytes:
        """`pass show <name>` の stdout を返す。"""
        if not name:
            raise InvalidName()

        cmd = [*self.config.pass_command, "show", name]
        log.debug("running %s show for %s", self.config.pass_command[0], name)
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.config.timeout_seconds,
                check=False,
                env=self._env(),
            )
        except FileNotFoundError as e:
            raise StoreError(f"pass not found: {self.config.pass_command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise StoreError(f"pass timed out after {self.config.timeout_seconds}s: {name}") from e

        if proc.returncode != 0:
            stderr = (proc.stderr or b"").decode("utf-8", errors="replace").strip()
            log.warning("pass show failed for %s (exit %d)", name, proc.returncode)
            raise StoreError(stderr or f"pass show failed: {name}")
        return proc.stdout

    def list_names(self) -> list[str]:
        """ストア内のエントリ名（相対パス、`.gpg` 抜き）をソートして返す。"""
        if not self.root.is_dir():
            raise StoreError(f"password store not found: {self.root}")

        names: list[str] = []
        for p in self.root.rglob(f"*{ENTRY_SUFFIX}"):
            rel = p.relative_to(self.root)
            # .git など隠しファイル・ディレクトリは対象外
            if any(part.startswith(".") for part in rel.parts):
                continue
            if not p.is_file():
                continue
            names.append(rel.with_suffix("").as_posix())
        names.sort()
        log.info("found %d entries in %s", len(names), self.root)
        return names

    def fetch(self, name: str) -> Entry:
        return decode_bytes(name, self.show(name))

    def fetch_all(self, names: Iterable[str] | None = None) -> Iterator[Entry]:
        if names is None:
            names = self.list_names()
        for name in names:
            yield self.fetch(name)
