"""passentry の設定。

設定ファイル: `passentry.toml`（デフォルト、カレントディレクトリ）

```toml
[store]
dir = "~/.password-store"
command = ["pass"]
timeout_seconds = 30

[logging]
level = "INFO"
file = "~/.cache/passentry/passentry.log"
```

環境変数がファイルより優先される:
- PASSWORD_STORE_DIR（pass 本体と同じ）
- PASSENTRY_LOG_LEVEL
- PASSENTRY_LOG_FILE
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

from passentry.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("passentry.toml")
DEFAULT_STORE_DIR = "~/.password-store"


@dataclass
class PassConfig:
    store_dir: Path = field(default_factory=lambda: Path(DEFAULT_STORE_DIR).expanduser())
    pass_command: list[str] = field(default_factory=lambda: ["pass"])
    timeout_seconds: int = 30
    log_level: str = "WARNING"
    log_file: Path | None = None


def _command(value: object) -> list[str]:
    if isinstance(value, str):
        value = shlex.split(value)
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"store.command must be a non-empty string or list of strings: {value!r}")


def _section(raw: dict, name: str) -> dict:
    sec = raw.get(name, {})
    if not isinstance(sec, dict):
        raise ConfigError(f"[{name}] must be a table")
    return sec


def load_config(path: Path | None = None, *, env: dict[str, str] | None = None) -> PassConfig:
    """設定を読み込む。ファイルがなければデフォルト + 環境変数。"""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if env is None:
        env = dict(os.environ)

    raw: dict = {}
    if path.exists():
        try:
            raw = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"{path}: {e}") from e

    store = _section(raw, "store")
    logging_ = _section(raw, "logging")

    cfg = PassConfig()
    if "dir" in store:
        cfg.store_dir = Path(str(store["dir"])).expanduser()
    if "command" in store:
        cfg.pass_command = _command(store["command"])
    if "timeout_seconds" in store:
        try:
            cfg.timeout_seconds = int(store["timeout_seconds"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"store.timeout_seconds must be an integer: {store['timeout_seconds']!r}") from e
    cfg.log_level = str(logging_.get("level", cfg.log_level))
    if logging_.get("file"):
        cfg.log_file = Path(str(logging_["file"])).expanduser()

    # env wins
    if env.get("PASSWORD_STORE_DIR"):
        cfg.store_dir = Path(env["PASSWORD_STORE_DIR"]).expanduser()
    if env.get("PASSENTRY_LOG_LEVEL"):
        cfg.log_level = env["PASSENTRY_LOG_LEVEL"]
    if env.get("PASSENTRY_LOG_FILE"):
        cfg.log_file = Path(env["PASSENTRY_LOG_FILE"]).expanduser()

    return cfg
