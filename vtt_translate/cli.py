"""Command-line interface for VTT Translate.

WHY: Users need one command that takes a subtitle file and produces a
translated one with the original timing. The CLI wires together the
whole pipeline — parse, reconstruct sentences, translate, reflow, mark
direction, write — behind a single command.

HOW: Uses argparse for options (credentials default to the environment),
runs the async pipeline via asyncio.run(), and reports progress on
stderr. Any fault aborts the run with exit status 1 and the chain of
error causes; nothing is written unless the whole document was rebuilt.

RULES:
- Required: -f/--source-vtt-file
- Output defaults to default_target_filename() next to the source
- Source language is auto-detected unless --source-language is given
- Status output goes to stderr (not stdout)
- Exit 0 on success, 1 on any error, 130 on Ctrl-C
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from vtt_translate.api.client import TranslationClient
from vtt_translate.api.models import Language
from vtt_translate.config import DEFAULT_TARGET_LANGUAGE, load_credentials
from vtt_translate.core.reconstructor import reconstruct_sentences
from vtt_translate.core.reflow import reflow
from vtt_translate.formats.vtt import parse_vtt, write_vtt
from vtt_translate.naming import default_target_filename


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _format_error(exc: BaseException) -> str:
    """Render an exception and its chained causes, one per line.

    WHY: Wrapped errors ("Failed to open VTT file x") are only useful
    together with their cause ("No such file or directory").
    """
    lines = ["Error: {}".format(exc)]
    cause = exc.__cause__
    while cause is not None:
        lines.append("  Caused by: {}".format(cause))
        cause = cause.__cause__
    return "\n".join(lines)


async def translate_file(
    source_path: Path,
    target_path: Optional[Path],
    source_language: Optional[Language],
    target_language: Language,
    client: TranslationClient,
    flush_trailing: bool = True,
) -> Path:
    """Translate one VTT file and return the path it was written to.

    WHY: The pipeline is kept separate from argument handling so tests
    and other callers can drive it with their own client.

    HOW: Parse → reconstruct → translate (one batch) → replace sentence
    texts → reflow into a blanked copy → write with the target direction.

    Args:
        source_path: VTT file to translate.
        target_path: Output path, or None to derive one from the source.
        source_language: Source language, or None to auto-detect.
        target_language: Language to translate into.
        client: An entered TranslationClient.
        flush_trailing: Keep a final sentence that has no fullstop.

    Returns:
        The path of the written file.
    """
    _status("Parsing VTT file {}...".format(source_path))
    source_document = parse_vtt(source_path)

    sentences = reconstruct_sentences(source_document, flush_trailing=flush_trailing)
    _status("  {} blocks, {} sentences".format(len(source_document.blocks), len(sentences)))

    _status("Calling Azure translation API...")
    result = await client.translate(
        [s.text for s in sentences],
        source_language,
        target_language,
        on_status=_status,
    )
    _status('Identified source language as "{}"...'.format(result.source_language))
    _status("Text direction for target language {} is {}...".format(
        target_language, result.direction.value))

    for sentence, translated in zip(sentences, result.sentences):
        sentence.text = translated

    target_document = reflow(source_document, sentences)

    if target_path is None:
        target_path = default_target_filename(
            source_path, result.source_language, target_language
        )
    _status("Writing translated VTT file to {}...".format(target_path))
    write_vtt(target_document, target_path, result.direction)

    _status("Done")
    return target_path


async def _run_pipeline(args: argparse.Namespace) -> Path:
    key, region = load_credentials(args.azure_resource_key, args.azure_resource_region)
    async with TranslationClient(key=key, region=region) as client:
        return await translate_file(
            source_path=Path(args.source_vtt_file),
            target_path=Path(args.target_vtt_file) if args.target_vtt_file else None,
            source_language=args.source_language,
            target_language=args.target_language,
            client=client,
            flush_trailing=args.flush_trailing,
        )


def _language_arg(value: str) -> Language:
    try:
        return Language.from_code(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running the pipeline.
    """
    language_codes = ", ".join(lang.value for lang in Language)

    parser = argparse.ArgumentParser(
        prog="vtt-translate",
        description="Translate a WebVTT subtitle file sentence by sentence, "
                    "keeping the original cue timing.",
    )

    parser.add_argument(
        "-f", "--source-vtt-file",
        required=True,
        help="The VTT file to translate.",
    )

    parser.add_argument(
        "--target-vtt-file",
        default=None,
        help="The translated VTT file to write (overwritten if it exists). "
             "Defaults to a name derived from the source file and target language.",
    )

    parser.add_argument(
        "--source-language",
        type=_language_arg,
        default=None,
        help="Language of the source file ({}). Auto-detected if omitted.".format(
            language_codes),
    )

    parser.add_argument(
        "-l", "--target-language",
        type=_language_arg,
        default=Language.from_code(DEFAULT_TARGET_LANGUAGE),
        help="Language to translate to ({}; default: %(default)s).".format(language_codes),
    )

    parser.add_argument(
        "--azure-resource-key",
        default=None,
        help="Key for the Azure Translator resource "
             "(default: $AZURE_TRANSLATION_RESOURCE_KEY).",
    )

    parser.add_argument(
        "--azure-resource-region",
        default=None,
        help="Region of the Azure Translator resource "
             "(default: $AZURE_TRANSLATION_RESOURCE_REGION).",
    )

    parser.add_argument(
        "--flush-trailing",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Translate text after the last fullstop as a final sentence "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        asyncio.run(_run_pipeline(args))
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except Exception as e:
        print(_format_error(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
