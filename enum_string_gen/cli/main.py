"""
CLI entry point for enum-string-gen.

Usage
─────
  # Generate extension classes for every annotated enum under src/
  enum-string-gen generate src/ --output src/Generated

  # Report diagnostics only, write nothing
  enum-string-gen check src/MyApp src/MyLib

  # Write just the attribute definitions
  enum-string-gen attributes --output src/Generated --attribute-namespace MyApp.Localisation

Exit codes: 0 success, 1 error diagnostics were reported, 2 the pass
could not run (unreadable or unparsable input, output not writable).

Subcommands are implemented as standalone functions (cmd_generate,
cmd_check, cmd_attributes) so they can be unit-tested without argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from enum_string_gen.config import GeneratorConfig
from enum_string_gen.diagnostics import format_diagnostic
from enum_string_gen.emitter import AUTO_GENERATED_HEADER, attribute_file_name, attribute_source
from enum_string_gen.exceptions import GeneratorBaseError, OutputError
from enum_string_gen.generator import ExtensionGenerator, GeneratedSource, GeneratorResult
from enum_string_gen.resolver import FormattingMode
from enum_string_gen.syntax import SourceDiscovery

__all__ = ["build_parser", "cmd_generate", "cmd_check", "cmd_attributes", "main"]

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "Generated"
_EXTENSION_FILE_GLOB = "*LocalizationExtensions*.cs"

EXIT_OK          = 0
EXIT_DIAGNOSTICS = 1
EXIT_FAILURE     = 2


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: generate | check | attributes
    """
    parser = argparse.ArgumentParser(
        prog="enum-string-gen",
        description="Generate localised description lookups for C# enums",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── generate ──────────────────────────────────────────────────────────
    gen = sub.add_parser("generate", help="Generate extension classes for annotated enums")
    gen.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="C# source files or directories to scan",
    )
    gen.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        metavar="DIR",
        help=f"Directory for generated files (default: ./{DEFAULT_OUTPUT_DIR}/)",
    )
    gen.add_argument(
        "--no-attributes",
        action="store_true",
        default=False,
        help="Do not write the localisation attribute definitions",
    )
    _add_config_arguments(gen)
    gen.add_argument(
        "--name-format",
        default=None,
        metavar="FMT",
        help="Default resource name format, {0} = enum type, {1} = value (default: {0}{1}Description)",
    )
    gen.add_argument(
        "--method-name",
        default=None,
        metavar="NAME",
        help="Default extension method name (default: GetDescription)",
    )

    # ── check ─────────────────────────────────────────────────────────────
    chk = sub.add_parser("check", help="Report diagnostics without writing any files")
    chk.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="C# source files or directories to scan",
    )

    # ── attributes ────────────────────────────────────────────────────────
    att = sub.add_parser("attributes", help="Write the localisation attribute definitions")
    att.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        metavar="DIR",
        help=f"Directory for the attribute files (default: ./{DEFAULT_OUTPUT_DIR}/)",
    )
    _add_config_arguments(att)

    return parser


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--attribute-namespace",
        default=None,
        metavar="NS",
        help="Namespace of the generated attribute classes (default: EnumStringGenerator)",
    )
    parser.add_argument(
        "--encoding",
        default=None,
        metavar="ENC",
        help="Encoding for generated files (default: utf-8)",
    )


# ── Helpers ───────────────────────────────────────────────────────────────────


def _run_pass(
    paths: list[str],
    config: GeneratorConfig,
    exclude: tuple = (),
) -> GeneratorResult:
    compilation = SourceDiscovery(exclude=exclude).load_compilation(paths)
    return ExtensionGenerator(config).execute(compilation)


def _print_diagnostics(result: GeneratorResult) -> None:
    for diagnostic in result.diagnostics.sorted():
        print(format_diagnostic(diagnostic), file=sys.stderr)


def _write_sources(
    sources: list[GeneratedSource],
    output_dir: str,
    encoding: str,
) -> list[Path]:
    """
    Write each source to <output_dir>/<hint_name>, skipping files whose
    content is already identical. Returns the paths actually written.

    Raises:
        OutputError: The directory or a file could not be written.
    """
    out_dir = Path(output_dir)
    written: list[Path] = []
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        for source in sources:
            out_path = out_dir / source.hint_name
            if out_path.is_file() and out_path.read_text(encoding=encoding) == source.text:
                logger.debug("Unchanged: %s", out_path)
                continue
            with open(out_path, "w", encoding=encoding, newline="") as fh:
                fh.write(source.text)
            logger.info("Wrote %s", out_path)
            written.append(out_path)
    except (OSError, UnicodeError) as exc:
        raise OutputError(f"Cannot write generated sources to {out_dir}: {exc}") from exc
    return written


def _remove_stale_sources(
    sources: list[GeneratedSource],
    output_dir: str,
    encoding: str,
) -> list[Path]:
    """
    Delete extension files left in <output_dir> by an earlier run that this
    run no longer produces. Only files starting with the auto-generated
    header are touched. Returns the paths removed.

    Raises:
        OutputError: A stale file could not be read or deleted.
    """
    out_dir = Path(output_dir)
    if not out_dir.is_dir():
        return []
    produced = {s.hint_name for s in sources}
    removed: list[Path] = []
    try:
        for path in sorted(out_dir.glob(_EXTENSION_FILE_GLOB)):
            if path.name in produced or not path.is_file():
                continue
            with open(path, encoding=encoding, errors="replace") as fh:
                if not fh.readline().startswith(AUTO_GENERATED_HEADER):
                    logger.debug("Keeping %s: not generated", path)
                    continue
            path.unlink()
            logger.info("Removed stale %s", path)
            removed.append(path)
    except OSError as exc:
        raise OutputError(f"Cannot remove stale sources from {out_dir}: {exc}") from exc
    return removed


# ── Command implementations ───────────────────────────────────────────────────


def cmd_generate(
    paths: list[str],
    output_dir: str,
    config: GeneratorConfig,
) -> tuple[GeneratorResult, list[Path]]:
    """
    Full pipeline: discover → parse → resolve → emit → write.

    The output directory is excluded from discovery so earlier output is
    never read back as input. Extension files from an earlier run that
    this run no longer produces are deleted.

    Returns:
        (result, paths of the files written this run)

    Raises:
        FileNotFoundError:  A source path does not exist.
        GeneratorBaseError: Input could not be read/parsed or output written.
    """
    result = _run_pass(paths, config, exclude=(Path(output_dir),))
    _print_diagnostics(result)
    removed = _remove_stale_sources(result.sources, output_dir, config.encoding)
    written = _write_sources(result.sources, output_dir, config.encoding)
    print(
        f"{len(result.sources)} file(s) generated, {len(written)} written, "
        f"{len(removed)} removed, {result.diagnostics.error_count} error(s)"
    )
    return result, written


def cmd_check(paths: list[str], config: GeneratorConfig) -> GeneratorResult:
    """Run the pass and print diagnostics and a summary; writes nothing."""
    result = _run_pass(paths, config)
    _print_diagnostics(result)
    attribute_files = {attribute_file_name(mode) for mode in FormattingMode}
    extensions = [s.hint_name for s in result.sources if s.hint_name not in attribute_files]
    for name in extensions:
        print(f"  would generate {name}")
    print(f"{len(extensions)} extension file(s), {result.diagnostics.error_count} error(s)")
    return result


def cmd_attributes(output_dir: str, config: GeneratorConfig) -> list[Path]:
    """Write the two attribute definition files and return the paths written."""
    sources = [
        GeneratedSource(attribute_file_name(mode), attribute_source(mode, config.attribute_namespace))
        for mode in FormattingMode
    ]
    written = _write_sources(sources, output_dir, config.encoding)
    print(f"{len(written)} attribute file(s) written to {output_dir}")
    return written


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return EXIT_OK

    config = GeneratorConfig.from_env().with_overrides(
        attribute_namespace=getattr(ns, "attribute_namespace", None),
        encoding=getattr(ns, "encoding", None),
        default_name_format=getattr(ns, "name_format", None),
        default_method_name=getattr(ns, "method_name", None),
    )

    try:
        if ns.subcommand == "generate":
            if ns.no_attributes:
                config = config.with_overrides(emit_attribute_sources=False)
            result, _ = cmd_generate(paths=ns.paths, output_dir=ns.output, config=config)
            return EXIT_DIAGNOSTICS if result.has_errors else EXIT_OK

        if ns.subcommand == "check":
            result = cmd_check(paths=ns.paths, config=config)
            return EXIT_DIAGNOSTICS if result.has_errors else EXIT_OK

        if ns.subcommand == "attributes":
            cmd_attributes(output_dir=ns.output, config=config)
            return EXIT_OK
    except (GeneratorBaseError, OSError) as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
