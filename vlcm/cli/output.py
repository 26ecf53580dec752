"""
Result formatting for the command line client
"""

import argparse
import json
import sys
from typing import Any, TextIO

import yaml

from ..settings.models import Record


FORMATS = ("text", "json", "yaml")


def add_output_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-o", "-output", "--output", dest="output", choices=FORMATS,
                        default="text", help="Output format (default: text)")


def to_plain(value: Any) -> Any:
    """Convert records (and containers of records) to JSON-compatible values"""
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def write_result(result: Any, fmt: str = "text", stream: TextIO = None,
                 listing: bool = False) -> None:
    """
    Write a command result.

    text prints scalars as a single line, mappings flagged as ``listing``
    as one ``key -> JSON`` entry per key, and anything else as indented JSON.
    json and yaml print the whole result as one document.
    """
    stream = stream or sys.stdout
    plain = to_plain(result)

    if fmt == "json":
        stream.write(json.dumps(plain, indent=2) + "\n")
    elif fmt == "yaml":
        yaml.safe_dump(plain, stream, default_flow_style=False, sort_keys=False)
    elif isinstance(plain, str):
        stream.write(plain + "\n")
    elif listing and isinstance(plain, dict):
        for key, value in plain.items():
            stream.write(f"{key} -> {json.dumps(value, indent=2)}\n")
    else:
        stream.write(json.dumps(plain, indent=2) + "\n")
