import typer

# 各类消息的前缀与颜色
MESSAGE_STYLES = {
    "success": ("[+]", typer.colors.GREEN),
    "error": ("[-]", typer.colors.RED),
    "warning": ("[!]", typer.colors.YELLOW),
    "info": ("[*]", typer.colors.BLUE),
}


def _echo(kind: str, message: str, err: bool = False) -> None:
    prefix, color = MESSAGE_STYLES[kind]
    # 输出不是终端时typer会自动去掉颜色
    typer.secho(f"{prefix} {message}", fg=color, err=err)


def print_success(message: str) -> None:
    """打印成功消息（绿色）"""
    _echo("success", message)


def print_error(message: str) -> None:
    """打印错误消息（红色，写到stderr）"""
    _echo("error", message, err=True)


def print_warning(message: str) -> None:
    _echo("warning", message)


def print_info(message: str) -> None:
    _echo("info", message)
