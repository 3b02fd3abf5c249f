"""tdnf install commands and the distroless manifest script used by the RPM workers."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

MANIFEST_SH = "manifest.sh"
MANIFEST_PATH = "/tmp/" + MANIFEST_SH

_QUERY_FORMAT = (
    "%{NAME}\\t%{VERSION}-%{RELEASE}\\t%{INSTALLTIME}\\t%{BUILDTIME}\\t%{VENDOR}"
    "\\t(none)\\t%{SIZE}\\t%{ARCH}\\t%{EPOCHNUM}\\t%{SOURCERPM}\\n"
)

_CHROOTED_PATHS = (
    "/usr/local/bin",
    "/usr/local/sbin",
    "/usr/bin",
    "/usr/sbin",
    "/bin",
    "/sbin",
)


def _join(*parts: str) -> str:
    """Join slash separated path elements, skipping empty ones, and clean the result."""
    joined = "/".join(p for p in parts if p)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


@dataclass
class InstallConfig:
    """Options for a tdnf install."""

    manifest: bool = False
    """Generate the distroless rpm manifest after installing."""
    no_gpg_check: bool = False
    """Skip GPG checks, needed for unsigned RPMs."""
    root: str = ""
    """Install into this root, like a chroot."""


def tdnf_install_flags(cfg: InstallConfig) -> str:
    """Extra command line flags for tdnf, each preceded by a space."""
    flags = ""
    if cfg.no_gpg_check:
        flags += " --nogpgcheck"
    if cfg.root:
        flags += " --installroot=" + cfg.root
        flags += " --setopt=reposdir=/etc/yum.repos.d"
    return flags


def manifest_script(work_path: str) -> str:
    """A script that writes rpm manifests and drops the rpmdb when the root has no rpm."""
    manifest_dir = _join(work_path, "var/lib/rpmmanifest")
    manifest1 = _join(manifest_dir, "container-manifest-1")
    manifest2 = _join(manifest_dir, "container-manifest-2")
    rpmdb_dir = _join(work_path, "var/lib/rpm")
    path_env = ":".join(_join(work_path, p) for p in _CHROOTED_PATHS)

    return (
        "\n#!/usr/bin/env sh\n"
        "\n"
        "# If the rpm command is in the rootfs then we don't need to do anything\n"
        "# If not then this is a distroless image and we need to generate manifests "
        "of the installed rpms and cleanup the rpmdb.\n"
        "\n"
        f'PATH="{path_env}" command -v rpm && exit 0\n'
        "\n"
        "set -e\n"
        "\n"
        f"mkdir -p {manifest_dir}\n"
        "\n"
        f"rpm --dbpath={rpmdb_dir} -qa > {manifest1}\n"
        f'rpm --dbpath={rpmdb_dir} -qa --qf "' + _QUERY_FORMAT + f'" > {manifest2}\n'
        f"rm -rf {rpmdb_dir}\n"
    )


def tdnf_install_command(cfg: InstallConfig, release_version: str, packages: list[str]) -> str:
    """The shell command that installs ``packages`` with tdnf."""
    command = (
        f"set -ex; tdnf install -y --refresh --releasever={release_version} "
        f"{tdnf_install_flags(cfg)} {' '.join(packages)}"
    )
    if cfg.manifest:
        command += "; " + MANIFEST_PATH
    return command