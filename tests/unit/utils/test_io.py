"""Tests for artifact file helpers."""

import json

import pytest
import yaml

from cv_tailor.utils.io import (
    dump_yaml,
    generate_file_name,
    load_structured_file,
    write_artifact,
)


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Senior Engineer at ACME, Inc.", "senior-engineer-at-acme-inc-"),
        ("jd-Staff Engineer-at-Initrode-2025-01-02T03:04:05.678Z", "jd-staff-engineer-at-initrode-2025-01-02t03:04:05-678z"),
        ("Zoë  Müller", "zo-m-ller"),
    ],
)
def test_generate_file_name(label, expected) -> None:
    assert generate_file_name(label) == expected


def test_write_artifact_json(tmp_path, sample_job) -> None:
    path = write_artifact(tmp_path / "tmp", "jd-Staff Engineer", sample_job)

    assert path == tmp_path / "tmp" / "jd-staff-engineer.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["structured"]["job_title"] == "Staff Engineer"


def test_write_artifact_yaml_keeps_field_order(tmp_path, sample_cv) -> None:
    path = write_artifact(tmp_path, "cv-Jane Doe", sample_cv, fmt="yaml")

    assert path.suffix == ".yaml"
    text = path.read_text(encoding="utf-8")
    assert text.index("name:") < text.index("titles:") < text.index("work:")
    assert yaml.safe_load(text)["work"][0]["company"] == "Acme"


def test_dump_yaml_handles_unicode() -> None:
    assert "Zoë" in dump_yaml({"name": "Zoë"})


def test_load_structured_file_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_structured_file(path)


def test_load_structured_file_invalid_json(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid json"):
        load_structured_file(path)
