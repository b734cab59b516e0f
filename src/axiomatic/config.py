"""TOML config loading for axiomatic.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "axiomatic.toml"


@dataclass
class PackageConfig:
    name: str = "untitled"
    version: str = "0.0.0"


@dataclass
class CheckConfig:
    sources: list[str] = field(default_factory=lambda: ["."])
    extension: str = ".axm"
    furthest_offset: bool = True


@dataclass
class AxiomaticConfig:
    package: PackageConfig = field(default_factory=PackageConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    root: Path = field(default_factory=Path.cwd)

    def source_files(self) -> list[Path]:
        """Definition files named by ``[check] sources``, sorted, deduplicated."""
        found: set[Path] = set()
        for entry in self.check.sources:
            path = self.root / entry
            if path.is_dir():
                found.update(path.rglob(f"*{self.check.extension}"))
            elif path.is_file():
                found.add(path)
        return sorted(found)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find axiomatic.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> AxiomaticConfig:
    """Parse an axiomatic.toml file into an AxiomaticConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = AxiomaticConfig(root=path.resolve().parent)

    if "package" in data:
        pkg = data["package"]
        config.package = PackageConfig(
            name=pkg.get("name", "untitled"),
            version=pkg.get("version", "0.0.0"),
        )

    if "check" in data:
        chk = data["check"]
        config.check = CheckConfig(
            sources=chk.get("sources", ["."]),
            extension=chk.get("extension", ".axm"),
            furthest_offset=chk.get("furthest_offset", True),
        )

    return config
