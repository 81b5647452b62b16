# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (c) 2024-2025 CiteTrust Contributors
"""
Tests for the inspection CLI (status / image / check-src).
"""

import json

import pytest

from citetrust_cli.inspect_cmd import create_parser, main
from tests.fixtures.image_sources import (
    JAVASCRIPT_URI,
    PNG_DATA_URI,
    SVG_DATA_URI,
    TRUSTED_IMG,
    UNTRUSTED_HTTPS_IMG,
)


def _run(argv) -> int:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


@pytest.fixture
def write_json(tmp_path):
    def _write(payload, name="records.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


class TestParser:

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_verbose_flag(self):
        args = create_parser().parse_args(["-v", "check-src", TRUSTED_IMG])
        assert args.verbose is True
        assert args.candidates == [TRUSTED_IMG]


class TestStatus:

    def test_single_record(self, write_json, full_verification, capsys):
        assert _run(["status", write_json(full_verification)]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["status"]["is_verified"] is True
        assert out["label"] == "Verified"

    def test_wrapped_list(self, write_json, full_verification, capsys):
        path = write_json({"verifications": [full_verification, {"status": "not_found"}]})
        assert _run(["status", path]) == 0
        out = json.loads(capsys.readouterr().out)
        assert [r["label"] for r in out] == ["Verified", "Not Found"]

    def test_missing_file(self, tmp_path, capsys):
        assert _run(["status", str(tmp_path / "nope.json")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_bad_json(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert _run(["status", str(path)]) == 1
        assert "Failed to parse JSON" in capsys.readouterr().err

    def test_wrong_shape(self, write_json, capsys):
        assert _run(["status", write_json([1, 2, 3])]) == 1
        assert "must be an object" in capsys.readouterr().err

    def test_malformed_record_degrades_to_no_flags(self, write_json, capsys):
        assert _run(["status", write_json({"status": 123, "searchAttempts": [{"success": "maybe"}]})]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["status"]["is_verified"] is False
        assert out["label"] == ""


class TestImage:

    def test_resolves_match_page(self, write_json, full_verification, capsys):
        assert _run(["image", write_json(full_verification)]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["src"] == TRUSTED_IMG
        assert out["highlightBox"] == {"x": 10.0, "y": 20.0, "width": 100.0, "height": 50.0}
        assert out["textItems"][0]["text"] == "revenue grew 12%"

    def test_no_valid_candidate(self, write_json, capsys):
        record = {
            "status": "found",
            "pages": [{"isMatchPage": True, "source": UNTRUSTED_HTTPS_IMG}],
            "proof": {"proofImageUrl": SVG_DATA_URI},
        }
        assert _run(["image", write_json(record)]) == 1
        assert json.loads(capsys.readouterr().out) is None

    def test_malformed_tier_falls_through(self, write_json, capsys):
        record = {
            "pages": [{"isMatchPage": True, "source": 123, "highlightBox": {"x": "a"}}],
            "document": {"verificationImageSrc": "/demo/page-1.avif"},
        }
        assert _run(["image", write_json(record)]) == 0
        assert json.loads(capsys.readouterr().out)["src"] == "/demo/page-1.avif"


class TestCheckSrc:

    def test_all_trusted(self, capsys):
        assert _run(["check-src", TRUSTED_IMG, PNG_DATA_URI]) == 0
        out = json.loads(capsys.readouterr().out)
        assert [r["reason"] for r in out] == ["v1.src.https_trusted_host", "v1.src.data_raster_image"]

    def test_rejections_are_not_echoed(self, capsys):
        assert _run(["check-src", TRUSTED_IMG, JAVASCRIPT_URI, UNTRUSTED_HTTPS_IMG]) == 1
        captured = capsys.readouterr()
        out = json.loads(captured.out)
        assert [r["trusted"] for r in out] == [True, False, False]
        assert out[1]["reason"] == "v1.src.dangerous_scheme"
        assert out[2]["reason"] == "v1.src.https_untrusted_host"
        assert JAVASCRIPT_URI not in captured.out + captured.err
        assert UNTRUSTED_HTTPS_IMG not in captured.out + captured.err
