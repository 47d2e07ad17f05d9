"""passentry CLI エントリポイント。"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn

import typer
import yaml
from rich.console import Console

from passentry.config import PassConfig, load_config
from passentry.entry import decode_bytes
from passentry.errors import ConfigError, PassEntryError
from passentry.logging_setup import setup_logging
from passentry.store import PassStore

APP_HELP = "pass エントリを name/password/login/url/notes に分解して JSON/YAML で出力する"

app = typer.Typer(add_completion=False, help=APP_HELP)
# stdout は JSON/YAML 専用。人間向けメッセージは stderr。
console = Console(stderr=True)

log = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    json = "json"
    yaml = "yaml"


def _fail(message: str) -> NoReturn:
    console.print(f"❌ {message}", style="red", markup=False, highlight=False)
    raise typer.Exit(code=1)


def _render(data: Any, fmt: OutputFormat) -> str:
    if fmt == OutputFormat.yaml:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, ensure_ascii=False, indent=2)


def _emit(data: Any, fmt: OutputFormat) -> None:
    typer.echo(_render(data, fmt).rstrip("\n"))


def _config(ctx: typer.Context) -> PassConfig:
    cfg = ctx.obj
    if not isinstance(cfg, PassConfig):
        cfg = load_config()
    return cfg


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", help="設定ファイル (デフォルト: ./passentry.toml)"
    ),
) -> None:
    """pass エントリのデコーダ。"""
    if config is not None and not config.exists():
        _fail(f"設定ファイルが見つかりません: {config}")
    try:
        cfg = load_config(config)
    except ConfigError as e:
        _fail(str(e))

    setup_logging(level=cfg.log_level, log_file=cfg.log_file)
    ctx.obj = cfg


@app.command()
def decode(
    path: Path | None = typer.Argument(
        None, help="エントリ本文のファイル ('-' または省略で stdin)"
    ),
    name: str | None = typer.Option(
        None, "--name", help="エントリ名 (デフォルト: ファイル名の stem)"
    ),
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format", help="出力形式"),
    omit_none: bool = typer.Option(False, "--omit-none", help="未設定のフィールドを出力しない"),
) -> None:
    """ファイルまたは stdin のエントリ本文をデコードする。"""
    if path is None or str(path) == "-":
        if not name:
            _fail("stdin から読む場合は --name が必要です")
        data = typer.get_binary_stream("stdin").read()
    else:
        if not path.is_file():
            _fail(f"ファイルが見つかりません: {path}")
        data = path.read_bytes()
        if name is None:
            name = path.stem

    try:
        entry = decode_bytes(name or "", data)
    except PassEntryError as e:
        _fail(str(e))

    _emit(entry.to_dict(omit_none=omit_none), fmt)


@app.command()
def show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="エントリ名 (例: email/work)"),
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format", help="出力形式"),
    omit_none: bool = typer.Option(False, "--omit-none", help="未設定のフィールドを出力しない"),
) -> None:
    """`pass show` でエントリを取り出してデコードする。"""
    store = PassStore(_config(ctx))
    try:
        entry = store.fetch(name)
    except PassEntryError as e:
        _fail(str(e))

    _emit(entry.to_dict(omit_none=omit_none), fmt)


@app.command("ls")
def list_entries(ctx: typer.Context) -> None:
    """ストア内のエントリ名を一覧する。"""
    store = PassStore(_config(ctx))
    try:
        names = store.list_names()
    except PassEntryError as e:
        _fail(str(e))

    for n in names:
        typer.echo(n)


@app.command()
def export(
    ctx: typer.Context,
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format", help="出力形式"),
    omit_none: bool = typer.Option(False, "--omit-none", help="未設定のフィールドを出力しない"),
    keep_going: bool = typer.Option(
        False, "--keep-going", help="失敗したエントリをスキップして続行する"
    ),
) -> None:
    """ストア内の全エントリをデコードして出力する。"""
    store = PassStore(_config(ctx))
    try:
        names = store.list_names()
    except PassEntryError as e:
        _fail(str(e))

    out: list[dict[str, str | None]] = []
    skipped = 0
    for n in names:
        try:
            entry = store.fetch(n)
        except PassEntryError as e:
            if not keep_going:
                _fail(f"{n}: {e}")
            console.print(f"⚠️  skip {n}: {e}", style="yellow", markup=False, highlight=False)
            skipped += 1
            continue
        out.append(entry.to_dict(omit_none=omit_none))

    log.info("exported %d entries (%d skipped)", len(out), skipped)
    _emit(out, fmt)
