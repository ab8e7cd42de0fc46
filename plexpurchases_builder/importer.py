"""Decode YAML text into purchase configurations.

A file holds either one mapping or a sequence of mappings. Text that fails
to parse gets one repair pass (trailing commas before ``]``/``}``) and a
single retry. Candidates without a productId or subscriptionId are dropped
and counted.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .entities import PurchaseConfiguration
from .normalizer import Accepted, evaluate
from .store import ConfigurationStore

logger = logging.getLogger("plexpurchases_builder.importer")

YAML_SUFFIXES: frozenset[str] = frozenset({".yml", ".yaml"})

_TRAILING_COMMA_BRACKET = re.compile(r",\s*]")
_TRAILING_COMMA_BRACE = re.compile(r",\s*}")


class ConfigurationImportError(Exception):
    """Base class for a failed import. ``str(exc)`` is the user-facing message."""

    message = "Import failed."

    def __init__(self, message: str | None = None, detail: str = ""):
        super().__init__(message or self.message)
        self.detail = detail


class DecodeError(ConfigurationImportError):
    """Raised when text is not valid YAML, even after repair."""

    message = "Invalid file format. Please use a valid YAML file."


class EmptyResultError(ConfigurationImportError):
    """Raised when decoding worked but no candidate is a configuration."""

    message = "No valid configurations found in the file."


@dataclass
class ImportResult:
    accepted: list[PurchaseConfiguration] = field(default_factory=list)
    rejected_count: int = 0

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)


@dataclass
class DirectoryImportReport:
    """Outcome of importing every YAML file under a directory."""

    accepted: list[PurchaseConfiguration] = field(default_factory=list)
    files_loaded: list[Path] = field(default_factory=list)
    failures: dict[Path, str] = field(default_factory=dict)

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)


def repair(text: str) -> str:
    """Strip trailing-comma artifacts left by hand edits or JSON exports."""
    text = _TRAILING_COMMA_BRACKET.sub("]", text)
    return _TRAILING_COMMA_BRACE.sub("}", text)


def decode(text: str) -> Any:
    """Parse YAML, with one repair-and-retry on failure."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.debug("YAML parsing failed, retrying after repair: %s", e)

    try:
        data = yaml.safe_load(repair(text))
    except yaml.YAMLError as e:
        logger.warning("YAML parsing still failed after repair: %s", e)
        raise DecodeError(detail=str(e)) from e

    logger.info("Parsed YAML after removing trailing commas")
    return data


def import_text(text: str) -> ImportResult:
    """Decode ``text`` and normalize every accepted candidate, in order."""
    data = decode(text)
    candidates = data if isinstance(data, list) else [data]

    result = ImportResult()
    for position, candidate in enumerate(candidates):
        outcome = evaluate(candidate)
        if isinstance(outcome, Accepted):
            result.accepted.append(outcome.configuration)
        else:
            result.rejected_count += 1
            logger.debug("Dropped candidate %d: %s", position, outcome.reason)

    if not result.accepted:
        logger.warning("No valid configurations among %d candidates", len(candidates))
        raise EmptyResultError()

    logger.info(
        "Imported %d configuration(s), dropped %d", result.accepted_count, result.rejected_count
    )
    return result


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeError(detail=f"{path}: not UTF-8 text") from e
    except OSError as e:
        raise DecodeError("Error reading file. Please try again.", detail=str(e)) from e


def import_file(path: Path) -> ImportResult:
    logger.debug("Importing %s", path)
    return import_text(read_text(path))


def import_into(store: ConfigurationStore, text: str) -> ImportResult:
    """Import ``text`` and append the result to ``store``.

    The store is only touched when the whole import succeeds.
    """
    result = import_text(text)
    store.extend(result.accepted)
    return result


def import_directory(directory: Path) -> DirectoryImportReport:
    """Import every ``*.yml``/``*.yaml`` file below ``directory``.

    Each file stands alone: a broken file is recorded and skipped.
    """
    report = DirectoryImportReport()
    if not directory.is_dir():
        logger.warning("Not a directory: %s", directory)
        return report

    files = sorted(p for p in directory.rglob("*") if p.is_file() and p.suffix.lower() in YAML_SUFFIXES)
    logger.info("Found %d YAML files in %s", len(files), directory)

    for path in files:
        try:
            result = import_file(path)
        except ConfigurationImportError as e:
            report.failures[path] = str(e)
            logger.warning("Failed to import %s: %s", path.name, e)
            continue
        report.accepted.extend(result.accepted)
        report.files_loaded.append(path)

    logger.info(
        "Loaded %d configurations from %d files (%d failed)",
        report.accepted_count, len(report.files_loaded), len(report.failures),
    )
    return report
