"""The package spec model and the checks a deb build needs from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .artifacts import Artifacts
from .inline import InlineSource


class MissingFieldError(ValueError):
    """Raised when a spec lacks a field that is required."""

    def __init__(self, field_name: str):
        self.field = field_name
        super().__init__(f"{field_name}: missing required field")


@dataclass
class PackageConstraints:
    """Version and architecture constraints on a package dependency."""

    version: list[str] = field(default_factory=list)
    arch: list[str] = field(default_factory=list)


@dataclass
class PackageDependencies:
    """Build, runtime and recommended dependencies, keyed by package name."""

    build: dict[str, PackageConstraints] = field(default_factory=dict)
    runtime: dict[str, PackageConstraints] = field(default_factory=dict)
    recommends: dict[str, PackageConstraints] = field(default_factory=dict)


@dataclass
class BuildStep:
    """A single shell command run during the build, with its own environment."""

    command: str = ""
    env: dict[str, str] = field(default_factory=dict)


@dataclass
class BuildConfig:
    """Environment and steps of the package build."""

    env: dict[str, str] = field(default_factory=dict)
    steps: list[BuildStep] = field(default_factory=list)


@dataclass
class PatchSpec:
    """A patch, taken from another source, applied to a source tree."""

    source: str = ""
    path: str = ""
    strip: int = 1


@dataclass
class ChangelogEntry:
    """One entry of the package changelog."""

    date: datetime = field(default_factory=lambda: datetime.fromtimestamp(0, timezone.utc))
    author: str = ""
    changes: list[str] = field(default_factory=list)


@dataclass
class Source:
    """A source tree or file used by the build."""

    path: str = ""
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)
    inline: InlineSource | None = None
    http_url: str = ""
    generators: list[str] = field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        """Whether the source produces a directory rather than a single file."""
        if self.inline is not None:
            return self.inline.dir is not None
        return not self.http_url

    @property
    def has_gomod(self) -> bool:
        return "gomod" in self.generators


@dataclass
class Spec:
    """A package specification."""

    name: str = ""
    description: str = ""
    website: str = ""
    version: str = ""
    revision: str = ""
    license: str = ""
    vendor: str = ""
    packager: str = ""
    no_arch: bool = False
    args: dict[str, str] = field(default_factory=dict)
    sources: dict[str, Source] = field(default_factory=dict)
    patches: dict[str, list[PatchSpec]] = field(default_factory=dict)
    build: BuildConfig = field(default_factory=BuildConfig)
    artifacts: Artifacts = field(default_factory=Artifacts)
    dependencies: PackageDependencies | None = None
    target_dependencies: dict[str, PackageDependencies] = field(default_factory=dict)
    replaces: dict[str, PackageConstraints] = field(default_factory=dict)
    conflicts: dict[str, PackageConstraints] = field(default_factory=dict)
    provides: dict[str, PackageConstraints] = field(default_factory=dict)
    changelog: list[ChangelogEntry] = field(default_factory=list)

    @property
    def has_gomods(self) -> bool:
        return any(src.has_gomod for src in self.sources.values())

    def get_package_deps(self, target: str) -> PackageDependencies | None:
        """Dependencies for ``target``: the target's own if set, else the spec's."""
        deps = self.target_dependencies.get(target)
        if deps is not None:
            return deps
        return self.dependencies


def validate_spec(spec: Spec) -> None:
    """Check the fields a deb build requires."""
    if not spec.packager:
        raise MissingFieldError("packager")


def sanitize_source_key(key: str) -> str:
    """Drop the characters that debian source names cannot carry."""
    return key.translate(str.maketrans("", "", "_-."))