#!/usr/bin/env python3
"""
File discovery and I/O for the CLI.

Path arguments may be files, directories or glob patterns:
- a file whose name already has the wanted form is used as-is
- a directory is searched recursively (node_modules is skipped)
- anything else is expanded with glob (** supported)

Results are absolute, de-duplicated and sorted.
"""

import glob
import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from .common import Bundle, ScriptFile

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = ('.ts', '.tsx', '.js', '.jsx')
L10N_SUFFIX = '.l10n.json'
PACKAGE_NLS = 'package.nls.json'
BUNDLE_FILE = 'bundle.l10n.json'
EXCLUDED_DIRS = {'node_modules'}


def is_script_file(name: str) -> bool:
    return name.endswith(SCRIPT_SUFFIXES)


def is_l10n_file(name: str) -> bool:
    return name.endswith(L10N_SUFFIX) or name == PACKAGE_NLS


def is_xlf_file(name: str) -> bool:
    return name.endswith('.xlf')


def _excluded(path: Path) -> bool:
    return any(part in EXCLUDED_DIRS for part in path.parts)


def _find(paths: Iterable[str], matcher: Callable[[str], bool]) -> list[Path]:
    found: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_file() and matcher(path.name):
            found.add(path.resolve())
        elif path.is_dir():
            for candidate in path.rglob('*'):
                if _excluded(candidate.relative_to(path)):
                    continue
                if candidate.is_file() and matcher(candidate.name):
                    found.add(candidate.resolve())
        else:
            for match in glob.glob(raw, recursive=True):
                candidate = Path(match)
                if _excluded(candidate) or not candidate.is_file():
                    continue
                if matcher(candidate.name):
                    found.add(candidate.resolve())
    return sorted(found)


def find_script_files(paths: Iterable[str]) -> list[Path]:
    """Find TypeScript/JavaScript sources (.ts, .tsx, .js, .jsx)."""
    return _find(paths, is_script_file)


def find_l10n_files(paths: Iterable[str]) -> list[Path]:
    """Find *.l10n.json and package.nls.json bundles."""
    return _find(paths, is_l10n_file)


def find_xlf_files(paths: Iterable[str]) -> list[Path]:
    """Find *.xlf files."""
    return _find(paths, is_xlf_file)


def read_script_files(paths: Iterable[Path]) -> list[ScriptFile]:
    """
    Read source files for analysis.

    Args:
        paths: Source file paths

    Returns:
        ScriptFile per path, with the extension taken from the file name
    """
    return [
        ScriptFile(extension=path.suffix, contents=path.read_text(encoding="utf-8"), path=str(path))
        for path in paths
    ]


def read_bundle(path: Path) -> Bundle:
    """
    Load a bundle from a JSON file.

    Raises:
        ValueError: If the file is not a JSON object
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data


def bundle_name(path: Path) -> str:
    """
    Get the bundle name of an l10n file.

    Args:
        path: *.l10n.json or package.nls.json path

    Returns:
        'bundle' for bundle.l10n.json, 'package' for package.nls.json
    """
    name = Path(path).name
    if name == PACKAGE_NLS:
        return 'package'
    if name.endswith(L10N_SUFFIX):
        return name.split(L10N_SUFFIX)[0]
    raise ValueError(f"Not an l10n bundle file: {path}")


def localized_file_name(name: str, language: str) -> str:
    """File name of a translated bundle: package.nls.<lang>.json or <name>.l10n.<lang>.json."""
    kind = 'nls' if name == 'package' else 'l10n'
    return f"{name}.{kind}.{language}.json"


def translated_bundle_path(source_path: Path, language: str) -> Path:
    """Path of the translation of `source_path` into `language`, next to the source."""
    source_path = Path(source_path)
    return source_path.parent / localized_file_name(bundle_name(source_path), language)


def load_package_json(directory: Path) -> Optional[dict]:
    """
    Read package.json from a directory.

    Returns:
        Parsed manifest, or None if it is missing or unreadable
    """
    path = Path(directory) / 'package.json'
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.debug("Ignoring unreadable %s: %s", path, e)
        return None


def resolve_export_dir(out_dir: Optional[str], directory: Path) -> Optional[Path]:
    """
    Decide where bundle.l10n.json is written.

    An explicit out dir always wins but is checked against the "l10n"
    entry of package.json. Without one, the "l10n" entry (or ".") is used.
    With neither package.json nor an out dir, nothing is written.

    Args:
        out_dir: --outDir value, if given
        directory: Directory holding package.json (the working directory)

    Returns:
        Output directory, or None when nothing should be written
    """
    directory = Path(directory)
    package_json = load_package_json(directory)
    if package_json is None:
        if not out_dir:
            logger.debug("No package.json found in directory and no outDir specified.")
            return None
        return (directory / out_dir).resolve()

    l10n = package_json.get('l10n')
    if out_dir:
        resolved = (directory / out_dir).resolve()
        if not l10n or (directory / l10n).resolve() != resolved:
            logger.warning(
                "The l10n property in the package.json does not match the outDir specified. "
                "For an extension to work correctly, l10n must be set to the location of the bundle files."
            )
        return resolved
    return (directory / (l10n or '.')).resolve()


def write_text(path: Path, text: str) -> None:
    """Write text as UTF-8 without newline translation, creating parent dirs."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)


def write_json(path: Path, data: Any) -> None:
    """Write JSON with 2-space indent, non-ASCII kept and no trailing newline."""
    write_text(path, json.dumps(data, indent=2, ensure_ascii=False))
