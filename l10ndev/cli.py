#!/usr/bin/env python3
"""
l10n-dev - Localization tooling for VS Code extensions

Extracts l10n.t() strings from TypeScript/JavaScript sources and moves them
through the XLIFF round trip used by translation teams.

Commands:
    export           - Extract strings into bundle.l10n.json
    generate-xlf     - Combine l10n bundles into one XLIFF file
    import-xlf       - Turn translated XLIFF files into l10n bundles
    generate-pseudo  - Write pseudo-localized bundles
    generate-azure   - Machine-translate bundles with Azure Translator
    generate-aws     - Machine-translate bundles with Amazon Translate
    translators      - List translation backends

Example Workflow:
    1. l10n-dev export ./src
       → Writes: l10n/bundle.l10n.json (location from package.json "l10n")

    2. l10n-dev generate-xlf ./l10n package.nls.json --outFile ./loc/ext.xlf

    3. [Translation team returns ext.de.xlf, ext.fr.xlf, ...]

    4. l10n-dev import-xlf ./loc/translated --outDir ./l10n
       → Writes: bundle.l10n.de.json, package.nls.de.json, ...
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .analyzer import ScriptAnalyzer
from .api import (
    get_l10n_aws_localized,
    get_l10n_azure_localized,
    get_l10n_files_from_xlf,
    get_l10n_json,
    get_l10n_pseudo_localized,
    get_l10n_xlf,
)
from .config import (
    DEFAULT_LANGUAGES,
    DEFAULT_PSEUDO_LANGUAGE,
    DEFAULT_SOURCE_LANGUAGE,
    AwsTranslatorConfig,
    AzureTranslatorConfig,
)
from .files import (
    BUNDLE_FILE,
    bundle_name,
    find_l10n_files,
    find_script_files,
    find_xlf_files,
    localized_file_name,
    read_bundle,
    read_script_files,
    resolve_export_dir,
    translated_bundle_path,
    write_json,
    write_text,
)
from .translators import TranslatorRegistry

logger = logging.getLogger(__name__)


def cmd_export(args) -> dict:
    """Export strings from source files."""
    paths = find_script_files(args.path)
    if not paths:
        return {
            "status": "ok",
            "files": 0,
            "strings": 0,
            "output": None,
            "summary": "No TypeScript/JavaScript files found.",
        }

    logger.info("Found %d TypeScript/JavaScript files. Extracting strings...", len(paths))
    analyzer = ScriptAnalyzer(detect_literals=args.detect_literals)
    bundle = get_l10n_json(read_script_files(paths), analyzer)

    if not bundle:
        return {
            "status": "ok",
            "files": len(paths),
            "strings": 0,
            "output": None,
            "summary": f"No strings found in {len(paths)} files. Skipping writing to a {BUNDLE_FILE}.",
        }

    out_dir = resolve_export_dir(args.out_dir, Path.cwd())
    if out_dir is None:
        return {
            "status": "ok",
            "files": len(paths),
            "strings": len(bundle),
            "output": None,
            "summary": f"Extracted {len(bundle)} strings but no package.json was found and no --outDir "
                       f"was given, so nothing was written.",
        }

    output = out_dir / BUNDLE_FILE
    write_json(output, bundle)
    return {
        "status": "ok",
        "files": len(paths),
        "strings": len(bundle),
        "output": str(output),
        "summary": f"Extracted {len(bundle)} strings from {len(paths)} files to {output}.",
    }


def cmd_generate_xlf(args) -> dict:
    """Generate an XLF file from l10n bundles."""
    paths = find_l10n_files(args.path)
    contents = {bundle_name(path): read_bundle(path) for path in paths}

    if not contents:
        return {
            "status": "ok",
            "bundles": [],
            "output": None,
            "summary": "No L10N JSON files found so skipping generating XLF.",
        }

    logger.info("Found %d L10N JSON files. Generating XLF...", len(contents))
    xlf = get_l10n_xlf(contents, source_language=args.language)
    output = Path(args.out_file).resolve()
    write_text(output, xlf)
    return {
        "status": "ok",
        "bundles": sorted(contents),
        "output": str(output),
        "summary": f"Wrote XLF file with {len(contents)} bundles to {output}.",
    }


def cmd_import_xlf(args) -> dict:
    """Import XLF files into localized l10n bundles."""
    paths = find_xlf_files(args.path)
    if not paths:
        return {
            "status": "ok",
            "outputs": [],
            "summary": "No XLF files found.",
        }

    details = []
    for path in paths:
        details.extend(get_l10n_files_from_xlf(path.read_text(encoding="utf-8")))

    out_dir = Path(args.out_dir).resolve()
    outputs = []
    for detail in details:
        output = out_dir / localized_file_name(detail.name, detail.language)
        write_json(output, detail.messages)
        outputs.append(str(output))

    return {
        "status": "ok",
        "outputs": outputs,
        "summary": f"Wrote {len(outputs)} localized L10N JSON files to {out_dir}.",
    }


def cmd_generate_pseudo(args) -> dict:
    """Generate pseudo-localized bundles next to each input."""
    paths = find_l10n_files(args.path)
    outputs = []
    for path in paths:
        localized = get_l10n_pseudo_localized(read_bundle(path))
        output = translated_bundle_path(path, args.language)
        write_json(output, localized)
        outputs.append(str(output))

    return {
        "status": "ok",
        "language": args.language,
        "outputs": outputs,
        "summary": f"Wrote {len(outputs)} L10N JSON files." if outputs else "No L10N JSON files.",
    }


def _write_translations(paths: list[Path], languages: list[str], translate) -> list[str]:
    """Translate each bundle and write one file per language once all of it is done."""
    async def run() -> list[str]:
        outputs = []
        for path in paths:
            translated = await translate(read_bundle(path))
            for language, bundle in zip(languages, translated):
                output = translated_bundle_path(path, language)
                write_json(output, bundle)
                outputs.append(str(output))
        return outputs

    return asyncio.run(run())


def cmd_generate_azure(args) -> dict:
    """Machine-translate bundles with Azure Translator."""
    config = AzureTranslatorConfig.from_env()
    paths = find_l10n_files(args.path)
    outputs = _write_translations(
        paths,
        args.languages,
        lambda bundle: get_l10n_azure_localized(bundle, args.languages, config),
    )
    return {
        "status": "ok",
        "translator": "azure",
        "languages": args.languages,
        "outputs": outputs,
        "summary": f"Wrote {len(outputs)} L10N JSON files." if paths else "No L10N JSON files.",
    }


def cmd_generate_aws(args) -> dict:
    """Machine-translate bundles with Amazon Translate."""
    config = AwsTranslatorConfig(
        region=args.region,
        source_language=args.source_language,
        formality=args.formality,
        profanity=None if args.no_profanity else 'MASK',
        profile=args.sso_profile or None,
    )
    logger.debug("AWS config: %s", config.to_dict())
    paths = find_l10n_files(args.path)
    outputs = _write_translations(
        paths,
        args.languages,
        lambda bundle: get_l10n_aws_localized(bundle, args.languages, config),
    )
    return {
        "status": "ok",
        "translator": "aws",
        "languages": args.languages,
        "outputs": outputs,
        "summary": f"Wrote {len(outputs)} L10N JSON files." if paths else "No L10N JSON files.",
    }


def cmd_translators(args) -> dict:
    """List translation backends."""
    translators = TranslatorRegistry.list_translators()
    return {
        "status": "ok",
        "translators": translators,
        "summary": f"{len(translators)} translators available: {', '.join(t['name'] for t in translators)}",
    }


COMMANDS = {
    "export": cmd_export,
    "generate-xlf": cmd_generate_xlf,
    "import-xlf": cmd_import_xlf,
    "generate-pseudo": cmd_generate_pseudo,
    "generate-azure": cmd_generate_azure,
    "generate-aws": cmd_generate_aws,
    "translators": cmd_translators,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="l10n-dev",
        description="l10n-dev - Localization tooling for VS Code extensions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Paths may be files, folders or glob patterns. node_modules is always skipped.

Examples:
  # Export strings (output folder comes from the "l10n" entry of package.json)
  l10n-dev export ./src

  # Export to an explicit folder and also pick up JSX attribute literals
  l10n-dev export ./src --outDir ./l10n --detect-literals

  # Build an XLF for the translation team
  l10n-dev generate-xlf ./l10n/bundle.l10n.json ./package.nls.json --outFile ./loc/ext.xlf

  # Import translated XLF files
  l10n-dev import-xlf ./loc/translated --outDir ./l10n

  # Pseudo-localize for layout testing
  l10n-dev generate-pseudo ./l10n ./package.nls.json

  # Machine-translate (AZURE_TRANSLATOR_KEY and AZURE_TRANSLATOR_REGION must be set)
  l10n-dev generate-azure ./l10n -l de fr
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # export command
    export_parser = subparsers.add_parser("export", help="Export strings from source files")
    export_parser.add_argument("path", nargs="+", help="TypeScript/JavaScript files, folders or globs")
    export_parser.add_argument("--outDir", "--out-dir", "-o", dest="out_dir", help="Output directory")
    export_parser.add_argument("--detect-literals", action="store_true",
                               help="Also extract template literals used as JSX attribute values")

    # generate-xlf command
    xlf_parser = subparsers.add_parser("generate-xlf", help="Generate an XLF file from l10n bundles")
    xlf_parser.add_argument("path", nargs="+", help="*.l10n.json / package.nls.json files, folders or globs")
    xlf_parser.add_argument("--outFile", "--out-file", "-o", dest="out_file", required=True, help="Output file")
    xlf_parser.add_argument("--language", "-l", default=DEFAULT_SOURCE_LANGUAGE,
                            help=f"Source language written to the XLF file (default: {DEFAULT_SOURCE_LANGUAGE})")

    # import-xlf command
    import_parser = subparsers.add_parser("import-xlf", help="Import XLF files into l10n bundles")
    import_parser.add_argument("path", nargs="+", help="XLF files, folders or globs")
    import_parser.add_argument("--outDir", "--out-dir", "-o", dest="out_dir", default=".",
                               help="Output directory for the <name>.l10n.<language>.json files (default: .)")

    # generate-pseudo command
    pseudo_parser = subparsers.add_parser("generate-pseudo", help="Generate pseudo-localized bundles")
    pseudo_parser.add_argument("path", nargs="+", help="*.l10n.json / package.nls.json files, folders or globs")
    pseudo_parser.add_argument("--language", "-l", default=DEFAULT_PSEUDO_LANGUAGE,
                               help=f"Pseudo language id (default: {DEFAULT_PSEUDO_LANGUAGE})")

    # generate-azure command
    azure_parser = subparsers.add_parser("generate-azure", help="(Experimental) Translate bundles with Azure")
    azure_parser.add_argument("path", nargs="+", help="*.l10n.json / package.nls.json files, folders or globs")
    azure_parser.add_argument("--languages", "-l", nargs="+", default=list(DEFAULT_LANGUAGES),
                              help="Target languages")

    # generate-aws command
    aws_parser = subparsers.add_parser("generate-aws", help="(Experimental) Translate bundles with AWS")
    aws_parser.add_argument("path", nargs="+", help="*.l10n.json / package.nls.json files, folders or globs")
    aws_parser.add_argument("--languages", "-l", nargs="+", default=list(DEFAULT_LANGUAGES),
                            help="Target languages")
    aws_parser.add_argument("--region", default="us-west-2", help="AWS region (default: us-west-2)")
    aws_parser.add_argument("--source-language", "-s", default=DEFAULT_SOURCE_LANGUAGE,
                            help=f"Language of the source (default: {DEFAULT_SOURCE_LANGUAGE})")
    aws_parser.add_argument("--sso-profile", default="", help="SSO profile name")
    aws_parser.add_argument("--formality", choices=["FORMAL", "INFORMAL"], default="FORMAL",
                            help="Formality of the translation (default: FORMAL)")
    aws_parser.add_argument("--no-profanity", action="store_true", help="Do not mask profanities")

    # translators command
    subparsers.add_parser("translators", help="List translation backends")

    return parser


def configure_logging(args) -> None:
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args)

    try:
        result = COMMANDS[args.command](args)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
