"""Serialize generated instructions for the host build tool."""

from __future__ import annotations

import json
from typing import IO, Callable, Dict, List, Mapping

from stampgen.config.const import DEFAULT_DIRECTIVE, DEFAULT_FORMAT

from .enums import InstructionKey
from .errors import UnknownFormatError

__all__ = ["FORMATS", "render", "emit"]


def _directive_lines(cfg_map: Mapping[InstructionKey, str], directive: str) -> List[str]:
    return [f"{directive}={key.env_name}={value}" for key, value in cfg_map.items()]


def _env_lines(cfg_map: Mapping[InstructionKey, str], directive: str) -> List[str]:
    return [f"{key.env_name}={value}" for key, value in cfg_map.items()]


def _json_lines(cfg_map: Mapping[InstructionKey, str], directive: str) -> List[str]:
    payload = {key.env_name: value for key, value in cfg_map.items()}
    return [json.dumps(payload, ensure_ascii=False)]


FORMATS: Dict[str, Callable[[Mapping[InstructionKey, str], str], List[str]]] = {
    "directive": _directive_lines,
    "env": _env_lines,
    "json": _json_lines,
}


def render(
    cfg_map: Mapping[InstructionKey, str],
    fmt: str = DEFAULT_FORMAT,
    *,
    directive: str = DEFAULT_DIRECTIVE,
) -> List[str]:
    try:
        renderer = FORMATS[fmt]
    except KeyError:
        raise UnknownFormatError(fmt, choices=sorted(FORMATS)) from None
    return renderer(cfg_map, directive)


def emit(
    cfg_map: Mapping[InstructionKey, str],
    stream: IO[str],
    fmt: str = DEFAULT_FORMAT,
    *,
    directive: str = DEFAULT_DIRECTIVE,
) -> int:
    """Write one line per rendered instruction to ``stream``; returns the line count."""
    lines = render(cfg_map, fmt, directive=directive)
    for line in lines:
        stream.write(line + "\n")
    return len(lines)
