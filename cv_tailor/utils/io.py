"""Artifact file helpers.

Intermediate records (job description, tailored CV) and the merged CV are
written as plain JSON/YAML so a run can be audited or resumed later.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Literal

import yaml

logger = logging.getLogger(__name__)

ArtifactFormat = Literal["json", "yaml"]

_UNSAFE_CHARS = re.compile(r"[^a-z0-9:-]")
_DASH_RUNS = re.compile(r"-+")


def generate_file_name(name: str) -> str:
    """Turn an arbitrary label into a file-system friendly stem.

    Lower-cases the label, replaces every character outside ``[a-z0-9:-]``
    with ``-`` and collapses runs of dashes.

    Example:
        >>> generate_file_name("Senior Engineer at ACME, Inc.")
        'senior-engineer-at-acme-inc-'
    """
    return _DASH_RUNS.sub("-", _UNSAFE_CHARS.sub("-", name.lower()))


def _to_jsonable(value: object):
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    return str(value)


def dump_json(payload: object) -> str:
    """Serialize a payload (models included) to indented JSON."""
    return json.dumps(payload, indent=2, default=_to_jsonable, ensure_ascii=False)


def dump_yaml(payload: object) -> str:
    """Serialize a payload (models included) to block-style YAML."""
    data = json.loads(dump_json(payload))
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, indent=2)


def write_artifact(
    directory: Path,
    name: str,
    payload: object,
    fmt: ArtifactFormat = "json",
) -> Path:
    """Write a payload under ``directory`` using a slugged file name.

    Args:
        directory: Target directory (created if missing).
        name: Human label, slugged with :func:`generate_file_name`.
        payload: Model, dict or list to serialize.
        fmt: ``json`` or ``yaml``.

    Returns:
        Path of the written file.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{generate_file_name(name)}.{fmt}"
    content = dump_json(payload) if fmt == "json" else dump_yaml(payload)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {fmt} artifact: {path}")
    return path


def load_structured_file(path: Path) -> dict:
    """Load a JSON or YAML mapping from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content cannot be parsed or is not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid {suffix.lstrip('.') or 'structured'} file: {path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}")
    return data
