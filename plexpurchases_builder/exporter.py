"""Serialize configurations into per-configuration YAML files and a ZIP archive."""

import io
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .entities import PRODUCT_ONLY_KEYS, SUBSCRIPTION_ONLY_KEYS, PurchaseConfiguration

logger = logging.getLogger("plexpurchases_builder.exporter")

FILE_EXTENSION = ".yml"


class _ConfigDumper(yaml.SafeDumper):
    """Block-style dumper: no anchors/aliases, sequences indented under their key."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


@dataclass
class ExportResult:
    data: bytes
    filenames: list[str] = field(default_factory=list)
    collisions: dict[str, int] = field(default_factory=dict)  # filename -> times written

    @property
    def entry_count(self) -> int:
        return len(self.filenames)


def project(configuration: PurchaseConfiguration) -> dict[str, Any]:
    """Variant-minimal document: drops the other variant's fields."""
    dropped = PRODUCT_ONLY_KEYS if configuration.is_subscription else SUBSCRIPTION_ONLY_KEYS
    return {k: v for k, v in configuration.to_document().items() if k not in dropped}


def filename_for(configuration: PurchaseConfiguration) -> str:
    return f"{configuration.identifier}{FILE_EXTENSION}"


def serialize(document: dict[str, Any]) -> str:
    return yaml.dump(
        document,
        Dumper=_ConfigDumper,
        indent=2,
        width=float("inf"),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def render(configurations: list[PurchaseConfiguration]) -> dict[str, str]:
    """Map filename -> YAML text. Later configurations win on a shared filename."""
    files: dict[str, str] = {}
    for configuration in configurations:
        name = filename_for(configuration)
        if not configuration.identifier:
            logger.warning("Configuration without identifier exported as '%s'", name)
        if name in files:
            logger.warning("Duplicate filename '%s': overwriting earlier configuration", name)
        files[name] = serialize(project(configuration))
    return files


def export_archive(configurations: list[PurchaseConfiguration]) -> ExportResult:
    """Build an in-memory ZIP with one ``<identifier>.yml`` per configuration."""
    configurations = list(configurations)
    files = render(configurations)

    written: dict[str, int] = {}
    for configuration in configurations:
        name = filename_for(configuration)
        written[name] = written.get(name, 0) + 1

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content in files.items():
            archive.writestr(name, content)

    result = ExportResult(
        data=buffer.getvalue(),
        filenames=list(files),
        collisions={name: n for name, n in written.items() if n > 1},
    )
    logger.info(
        "Archive built: %d entries from %d configurations (%.1f KB)",
        result.entry_count, len(configurations), len(result.data) / 1024,
    )
    return result


def write_archive(result: ExportResult, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(result.data)
    logger.info("Archive written: %s", path)
    return path


def write_documents(configurations: list[PurchaseConfiguration], directory: Path) -> list[Path]:
    """Write the loose ``.yml`` files, laid out as the plugin's purchases folder."""
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for name, content in render(list(configurations)).items():
        path = directory / name
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        paths.append(path)
    logger.info("Wrote %d configuration files to %s", len(paths), directory)
    return paths
