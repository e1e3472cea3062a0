from typing import Iterable

from .model import PathCommand


def format_path_number(value: float) -> str:
    value = float(value)
    magnitude = abs(value)
    if magnitude > 1e6 or (0.0 < magnitude < 1e-4):
        return f"{value:.3e}"
    rendered = f"{value:.4f}".rstrip("0").rstrip(".")
    if rendered in ("-0", ""):
        return "0"
    return rendered


def format_command(cmd: PathCommand) -> str:
    return cmd.command + " ".join(format_path_number(v) for v in cmd.values)


def serialize_path_data(commands: Iterable[PathCommand]) -> str:
    return "".join(format_command(cmd) for cmd in commands)
