"""命令行接口模块"""
from configstore.cli.main import app

main = app

__all__ = ["app", "main"]
