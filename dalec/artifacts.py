"""Descriptions of the artifacts that go into a package and where they are installed."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field


def _base(path: str) -> str:
    """Return the last element of a slash separated path."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return posixpath.basename(stripped)


@dataclass
class ArtifactConfig:
    """Where an artifact of a given type is placed when installed."""

    sub_path: str = ""
    name: str = ""

    def resolve_name(self, path: str) -> str:
        """Name to install the artifact as: the configured name or the path's base name."""
        return self.name or _base(path)


@dataclass
class ArtifactDirConfig:
    """A directory to create, with the permission bits it should get."""

    mode: int = 0


@dataclass
class CreateArtifactDirectories:
    """Directories to create under the config (/etc) and state (/var/lib) roots."""

    config: dict[str, ArtifactDirConfig] = field(default_factory=dict)
    state: dict[str, ArtifactDirConfig] = field(default_factory=dict)

    def get_config(self) -> dict[str, ArtifactDirConfig]:
        return dict(self.config)

    def get_state(self) -> dict[str, ArtifactDirConfig]:
        return dict(self.state)


@dataclass
class ArtifactSymlinkConfig:
    """A symlink at ``dest`` pointing to ``source``."""

    source: str = ""
    dest: str = ""


@dataclass
class SystemdUnitConfig:
    """A systemd unit file shipped with the package."""

    name: str = ""
    enable: bool = False

    def split_name(self, name: str) -> tuple[str, str]:
        """Split the resolved unit name into its base name and unit type suffix."""
        resolved = self.name or _base(name)
        base, sep, suffix = resolved.rpartition(".")
        if not sep:
            return resolved, ""
        return base, suffix


@dataclass
class SystemdDropinConfig:
    """A drop-in file for the systemd unit named ``unit``."""

    unit: str = ""
    name: str = ""

    def artifact(self) -> ArtifactConfig:
        return ArtifactConfig(name=self.name)


@dataclass
class SystemdConfiguration:
    """Systemd units and drop-ins for the package."""

    units: dict[str, SystemdUnitConfig] = field(default_factory=dict)
    dropins: dict[str, SystemdDropinConfig] = field(default_factory=dict)

    def get_units(self) -> dict[str, SystemdUnitConfig]:
        return dict(self.units)

    def get_dropins(self) -> dict[str, SystemdDropinConfig]:
        return dict(self.dropins)


@dataclass
class Artifacts:
    """All artifacts to include in a package, grouped by type."""

    binaries: dict[str, ArtifactConfig] = field(default_factory=dict)
    manpages: dict[str, ArtifactConfig] = field(default_factory=dict)
    data_dirs: dict[str, ArtifactConfig] = field(default_factory=dict)
    directories: CreateArtifactDirectories | None = None
    config_files: dict[str, ArtifactConfig] = field(default_factory=dict)
    docs: dict[str, ArtifactConfig] = field(default_factory=dict)
    licenses: dict[str, ArtifactConfig] = field(default_factory=dict)
    systemd: SystemdConfiguration | None = None
    libs: dict[str, ArtifactConfig] = field(default_factory=dict)
    links: list[ArtifactSymlinkConfig] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when there is nothing at all to include in the package."""
        if self.binaries or self.manpages:
            return False
        if self.directories is not None and (
            self.directories.config or self.directories.state
        ):
            return False
        if self.data_dirs or self.config_files:
            return False
        if self.systemd is not None and (self.systemd.units or self.systemd.dropins):
            return False
        return not (self.docs or self.licenses or self.libs or self.links)