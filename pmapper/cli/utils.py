"""
CLI utility functions shared across commands.

Provides item file reading, argument value parsing, target resolution
and custom Click parameter types.
"""

import importlib
import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import click

from pmapper.core import get_logger
from pmapper.core.exceptions import TargetImportError

logger = get_logger(__name__)


def parse_value(raw: str) -> Any:
    """
    Parse a command-line value as JSON, falling back to the raw string.

    ``"3"`` becomes ``3``, ``"true"`` becomes ``True``, ``"[1, 2]"`` a list,
    and anything that isn't valid JSON (``"hello"``) stays a string.
    """
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class KeyValueParam(click.ParamType):
    """
    Custom Click parameter type for ``KEY=VALUE`` options.

    The value part goes through ``parse_value``.
    """

    name = "key=value"

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value

        key, sep, raw = value.partition("=")
        key = key.strip()
        if not sep or not key:
            self.fail(f"Expected KEY=VALUE, got '{value}'", param, ctx)
        if not key.isidentifier():
            self.fail(f"'{key}' is not a valid parameter name", param, ctx)

        return key, parse_value(raw)


# Singleton instance for use in Click options
KEY_VALUE = KeyValueParam()


def load_target(target: str) -> Callable:
    """
    Resolve a ``package.module:function`` string to a callable.

    Dotted attribute paths after the colon are followed, so
    ``package.module:Class.method`` works too. The current directory is
    put on ``sys.path`` first so modules in the working directory import.

    Raises:
        TargetImportError: If the module or attribute can't be found
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetImportError(
            f"Invalid target '{target}'. Use the form package.module:function"
        )

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetImportError(f"Cannot import module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise TargetImportError(
                f"Module '{module_name}' has no attribute '{attr_path}'"
            ) from e

    if not callable(obj):
        raise TargetImportError(f"'{target}' is not callable")

    logger.debug(f"Resolved target {target} -> {obj!r}")
    return obj


def read_items_file(items_path: Path, column: Optional[str] = None) -> List[Any]:
    """
    Read the items to map from a file.

    Supports JSON files holding an array, CSV files (one column is used),
    and plain text files with one item per line.

    Args:
        items_path: Path to items file
        column: CSV column to use (default: first column)

    Returns:
        List of items in file order

    Raises:
        ValueError: If file cannot be read or has the wrong shape
    """
    suffix = items_path.suffix.lower()

    try:
        if suffix == ".json":
            with open(items_path, "r") as f:
                items = json.load(f)
            if not isinstance(items, list):
                raise ValueError(
                    f"expected a JSON array, got {type(items).__name__}"
                )

        elif suffix == ".csv":
            import pandas as pd
            df = pd.read_csv(items_path)

            if column is None:
                column = df.columns[0]
                logger.debug(f"No column given, using first column '{column}'")
            elif column not in df.columns:
                raise ValueError(
                    f"column '{column}' not found (columns: {', '.join(map(str, df.columns))})"
                )

            items = df[column].dropna().tolist()

        else:
            # Text file, one item per line
            with open(items_path, "r") as f:
                items = [line.strip() for line in f if line.strip()]

        logger.info(f"Read {len(items)} items from {items_path}")
        return items

    except Exception as e:
        logger.error(f"Error reading items file {items_path}: {e}")
        raise ValueError(f"Failed to read items file: {e}") from e


def split_pairs(pairs: Tuple[Tuple[str, Any], ...]) -> dict:
    """Turn repeated ``--kwarg`` pairs into a dict; later keys win."""
    return {key: value for key, value in pairs}
