"""Tests for the command-line interface and the file pipeline.

WHY: The CLI is where every stage meets: parse, reconstruct, translate,
reflow, mark direction, write. These tests run the whole pipeline against
a fake translator and check the written file and the exit behaviour.

HOW: TranslationClient is patched in the cli module so that it is built
with an httpx.MockTransport. main() is called with an explicit argv;
SystemExit codes and stderr are checked for failures.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from vtt_translate.api.client import TranslationClient
from vtt_translate.api.models import Language
from vtt_translate.cli import _format_error, build_parser, main
from vtt_translate.core.direction import RIGHT_TO_LEFT_MARK as RLM
from vtt_translate.formats.vtt import parse_vtt

from conftest import BLOCK_A_ID, BLOCK_B_ID, TEST_ENDPOINT, FakeTranslator

PERSIAN = {
    "Hello there.": "سلام.",
    "How are you today?": "حالت امروز چطوره؟",
}


def _run_main(argv, fake):
    def _client(**kwargs):
        return TranslationClient(endpoint=TEST_ENDPOINT, transport=fake.transport(), **kwargs)

    with patch("vtt_translate.cli.TranslationClient", side_effect=_client):
        main(argv + ["--azure-resource-key", "k", "--azure-resource-region", "r"])


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["-f", "in.vtt"])
        assert args.source_vtt_file == "in.vtt"
        assert args.target_vtt_file is None
        assert args.source_language is None
        assert args.target_language is Language.FA
        assert args.flush_trailing is True
        assert args.verbose is False

    def test_language_flags(self):
        args = build_parser().parse_args(
            ["-f", "in.vtt", "--source-language", "en-GB", "-l", "en"])
        assert args.source_language is Language.EN_GB
        assert args.target_language is Language.EN

    def test_unknown_language_rejected(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["-f", "in.vtt", "-l", "xx"])
        assert excinfo.value.code == 2
        assert "Unsupported language" in capsys.readouterr().err

    def test_source_file_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_no_flush_trailing(self):
        args = build_parser().parse_args(["-f", "in.vtt", "--no-flush-trailing"])
        assert args.flush_trailing is False


class TestPipeline:

    def test_translates_to_derived_filename(self, sample_vtt_file):
        fake = FakeTranslator(translations=PERSIAN, detected={"language": "en", "score": 1.0})
        _run_main(["-f", str(sample_vtt_file)], fake)

        target = sample_vtt_file.parent / "talk-fa.vtt"
        assert target.exists()
        doc = parse_vtt(target)
        assert [b.id for b in doc.blocks] == [BLOCK_A_ID, BLOCK_B_ID]
        assert [len(b.lines) for b in doc.blocks] == [2, 1]

        # single-fragment sentence, ends in ASCII "." so marked on the right
        assert doc.blocks[0].lines[0] == "سلام." + RLM
        # second sentence spread over block A line 1 and block B line 0
        words = (doc.blocks[0].lines[1] + " " + doc.blocks[1].lines[0]).replace(RLM, "")
        assert words.split() == "حالت امروز چطوره؟.".split()
        assert doc.blocks[1].lines[0].endswith(RLM)

    def test_explicit_target_and_source(self, sample_vtt_file, tmp_path):
        fake = FakeTranslator(translations={
            "Hello there.": "Hi there.",
            "How are you today?": "How are you doing today.",
        })
        target = tmp_path / "out.vtt"
        _run_main([
            "-f", str(sample_vtt_file),
            "--target-vtt-file", str(target),
            "--source-language", "en-GB",
            "-l", "en",
        ], fake)

        assert fake.requests[0].url.params["from"] == "en-gb"
        doc = parse_vtt(target)
        assert doc.blocks[0].lines[0] == "Hi there."
        # "en" is LTR in the fake catalogue: no marks
        assert all(RLM not in line for b in doc.blocks for line in b.lines)

    def test_status_goes_to_stderr(self, sample_vtt_file, capsys):
        _run_main(["-f", str(sample_vtt_file)], FakeTranslator(translations=PERSIAN))
        out, err = capsys.readouterr()
        assert out == ""
        assert "Parsing VTT file" in err
        assert 'Identified source language as "en-gb"' in err
        assert "Done" in err


class TestFailures:

    def test_missing_source_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            _run_main(["-f", str(tmp_path / "missing.vtt")], FakeTranslator())
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert "Error: Failed to open VTT file" in err
        assert "Caused by:" in err

    def test_api_error_writes_nothing(self, sample_vtt_file, capsys):
        fake = FakeTranslator(translate_status=500)
        with pytest.raises(SystemExit) as excinfo:
            _run_main(["-f", str(sample_vtt_file)], fake)
        assert excinfo.value.code == 1
        assert "error response code 500" in capsys.readouterr().err
        assert sorted(p.name for p in sample_vtt_file.parent.iterdir()) == ["talk-en.vtt"]

    def test_missing_credentials(self, sample_vtt_file, monkeypatch, capsys):
        monkeypatch.delenv("AZURE_TRANSLATION_RESOURCE_KEY", raising=False)
        monkeypatch.delenv("AZURE_TRANSLATION_RESOURCE_REGION", raising=False)
        with pytest.raises(SystemExit) as excinfo:
            main(["-f", str(sample_vtt_file)])
        assert excinfo.value.code == 1
        assert "key not configured" in capsys.readouterr().err


class TestFormatError:

    def test_cause_chain(self):
        try:
            try:
                raise FileNotFoundError("no such file")
            except FileNotFoundError as inner:
                raise OSError("Failed to open VTT file x.vtt") from inner
        except OSError as exc:
            text = _format_error(exc)
        assert text.splitlines() == [
            "Error: Failed to open VTT file x.vtt",
            "  Caused by: no such file",
        ]
