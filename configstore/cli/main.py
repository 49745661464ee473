#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置存储CLI示例程序
"""
import logging
from typing import Any, Optional

import typer
import yaml

from configstore.config import Settings
from configstore.exceptions import ConfigStoreError
from configstore.manager import ConfigManager
from configstore.serializers import available_formats
from configstore.cli.utils import print_error, print_info, print_success, print_warning
from configstore.utils.logger import get_logger, init_logger, set_log_level

logger = get_logger("configstore.cli")

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in ("true", "yes", "y", "1", "on"):
        return True
    if lowered in ("false", "no", "n", "0", "off"):
        return False
    raise ValueError(f"无法解析为布尔值: {text}")


# 命令行值类型 -> 解析函数
VALUE_PARSERS = {
    "str": str,
    "int": int,
    "float": float,
    "bool": _parse_bool,
    "yaml": yaml.safe_load
}

# 命令行值类型 -> 读取时校验的类型
VALUE_TYPES = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool
}


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value)


def _get_manager(ctx: typer.Context) -> ConfigManager:
    return ctx.obj["manager"]


def _persist(manager: ConfigManager) -> None:
    # 关闭自动保存时由命令结束前统一保存
    if not manager.auto_save:
        manager.save()


@app.callback()
def main(
    ctx: typer.Context,
    settings_path: Optional[str] = typer.Option(None, "--settings", "-c", help="设置文件路径"),
    store: Optional[str] = typer.Option(None, "--store", "-s", help="存储文件路径"),
    store_format: Optional[str] = typer.Option(None, "--format", "-f", help="存储格式 (yaml, pickle)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="日志级别 (DEBUG, INFO, WARNING, ERROR)"),
    log_dir: Optional[str] = typer.Option(None, "--log-dir", help="日志文件目录，指定后同时写入轮转日志文件")
):
    """配置存储CLI工具"""
    settings = Settings(settings_path)
    if store:
        settings.set("store.path", store)
    if store_format:
        settings.set("store.format", store_format)
    
    level_name = (log_level or settings.get("general.log_level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    if log_dir:
        init_logger(log_dir, level)
    set_log_level(level)
    
    try:
        manager = ConfigManager.from_settings(settings)
    except (ValueError, OSError) as e:
        print_error(f"打开存储失败: {e}")
        raise typer.Exit(1)
    
    if manager.load_error is not None:
        print_warning(f"存储文件无法解码，已使用空数据库: {manager.path}")
    
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["manager"] = manager


@app.command()
def get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="键"),
    value_type: Optional[str] = typer.Option(None, "--type", "-t", help="期望类型 (str, int, float, bool)")
):
    """读取配置值"""
    manager = _get_manager(ctx)
    expected = None
    if value_type:
        expected = VALUE_TYPES.get(value_type)
        if expected is None:
            print_error(f"不支持的类型: {value_type}")
            raise typer.Exit(1)
    
    if not manager.contains(key):
        print_warning(f"键不存在: {key}")
        raise typer.Exit(1)
    
    try:
        value = manager.get(key, expected)
    except ConfigStoreError as e:
        print_error(str(e))
        raise typer.Exit(1)
    typer.echo(_format_value(value))


@app.command("set")
def set_value(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="键"),
    value: str = typer.Argument(..., help="值"),
    value_type: str = typer.Option("str", "--type", "-t", help="值类型 (str, int, float, bool, yaml)")
):
    """设置配置值"""
    manager = _get_manager(ctx)
    parser = VALUE_PARSERS.get(value_type)
    if parser is None:
        print_error(f"不支持的类型: {value_type}")
        raise typer.Exit(1)
    
    try:
        parsed = parser(value)
    except (ValueError, yaml.YAMLError) as e:
        print_error(f"无法解析值 {value!r}: {e}")
        raise typer.Exit(1)
    
    try:
        manager.set(key, parsed)
        _persist(manager)
    except Exception as e:
        logger.error(f"保存 {key} 失败: {e}")
        print_error(f"保存失败: {e}")
        raise typer.Exit(1)
    print_success(f"已设置 {key}")


@app.command()
def remove(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="键")
):
    """删除配置值"""
    manager = _get_manager(ctx)
    existed = manager.contains(key)
    try:
        manager.remove(key)
        _persist(manager)
    except OSError as e:
        print_error(f"保存失败: {e}")
        raise typer.Exit(1)
    
    if existed:
        print_success(f"已删除 {key}")
    else:
        print_info(f"键不存在: {key}")


@app.command()
def contains(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="键")
):
    """检查键是否存在（存在时退出码为0，否则为1）"""
    manager = _get_manager(ctx)
    found = manager.contains(key)
    typer.echo("true" if found else "false")
    if not found:
        raise typer.Exit(1)


@app.command("list")
def list_values(ctx: typer.Context):
    """列出所有配置"""
    manager = _get_manager(ctx)
    if len(manager) == 0:
        print_info("存储为空")
        return
    
    for obj in manager.database:
        typer.echo(f"{obj.key} ({obj.type_name}): {_format_value(obj.value)}")


@app.command()
def formats():
    """列出支持的存储格式"""
    for name in available_formats():
        typer.echo(name)


@app.command()
def demo(ctx: typer.Context):
    """示例：首次运行写入 msg，之后读取它"""
    manager = _get_manager(ctx)
    if manager.contains("msg"):
        print_info("已找到 msg")
    else:
        print_info("未找到 msg，写入默认值")
        manager.set("msg", "Hello, World!")
        _persist(manager)
    
    typer.echo(manager.get("msg", str))


if __name__ == "__main__":
    app()
