from __future__ import annotations

import glob
import io
import logging
import tokenize
from pathlib import Path

from style_lint.errors import LoadError
from style_lint.models import ScanSettings, SourceUnit


logger = logging.getLogger(__name__)

GLOB_CHARS = set("*?[")


def discover_files(targets: list[str], settings: ScanSettings) -> list[Path]:
    found: list[Path] = []
    for target in targets:
        if GLOB_CHARS & set(target):
            matches = [Path(item) for item in sorted(glob.glob(target, recursive=True))]
            if not matches:
                raise LoadError(target, "pattern matched no files")
            for path in matches:
                if path.is_dir():
                    found.extend(_iter_candidate_files(path, settings))
                elif _is_candidate(path, settings):
                    found.append(path)
            continue

        path = Path(target)
        if path.is_dir():
            found.extend(_iter_candidate_files(path, settings))
        elif path.is_file():
            # Explicitly named files are linted whatever their extension.
            found.append(path)
        else:
            raise LoadError(target, "no such file or directory")

    deduped: list[Path] = []
    seen: set[Path] = set()
    for path in sorted(found, key=lambda item: item.as_posix()):
        resolved = path.resolve()
        if resolved not in seen:
            deduped.append(path)
            seen.add(resolved)
    return deduped


def load_source(path: Path, settings: ScanSettings) -> SourceUnit:
    display = path.as_posix()
    try:
        if path.stat().st_size > settings.max_file_size_bytes:
            raise LoadError(display, f"file exceeds {settings.max_file_size_bytes} bytes")
        data = path.read_bytes()
    except OSError as exc:
        raise LoadError(display, exc.strerror or str(exc)) from exc

    try:
        encoding, _ = tokenize.detect_encoding(io.BytesIO(data).readline)
        text = data.decode(encoding)
    except (SyntaxError, LookupError, UnicodeDecodeError) as exc:
        raise LoadError(display, f"cannot decode source: {exc}") from exc

    logger.debug("Loaded %s (%s, %d bytes)", display, encoding, len(data))
    return SourceUnit(path=display, text=text)


def _iter_candidate_files(root: Path, settings: ScanSettings):
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        if any(part in settings.exclude_dirs for part in path.relative_to(root).parts):
            continue
        if _is_candidate(path, settings):
            yield path


def _is_candidate(path: Path, settings: ScanSettings) -> bool:
    return path.is_file() and path.suffix.lower() in settings.include_extensions
