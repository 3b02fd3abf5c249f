"""Fragments of the debian/rules makefile generated from a spec."""

from __future__ import annotations

from ..artifacts import ArtifactDirConfig, SystemdUnitConfig
from ..spec import Spec

GOMODS_NAME = "xxxdalecGomodsInternal"
CUSTOM_SYSTEMD_POSTINST_FILE = "custom_systemd_postinst.sh.partial"


def _units(spec: Spec) -> dict[str, SystemdUnitConfig]:
    systemd = spec.artifacts.systemd
    return systemd.get_units() if systemd is not None else {}


def _directories(spec: Spec) -> list[ArtifactDirConfig]:
    dirs = spec.artifacts.directories
    if dirs is None:
        return []
    return [*dirs.get_config().values(), *dirs.get_state().values()]


def envs(spec: Spec) -> str:
    """Makefile exports for the build environment."""
    out = "".join(f"export {key} := {value}\n" for key, value in spec.build.env.items())
    if spec.has_gomods:
        out += f"export GOMODCACHE := $(PWD)/{GOMODS_NAME}\n"
    return out


def override_perms(spec: Spec) -> str:
    """A fixperms hook, present only when some created directory has a mode set."""
    if any(cfg.mode != 0 for cfg in _directories(spec)):
        return "execute_after_dh_fixperms:\n\tdebian/dalec/fix_perms.sh\n\n"
    return ""


def group_units_by_base_name(
    units: dict[str, SystemdUnitConfig],
) -> dict[str, dict[str, SystemdUnitConfig]]:
    """Index units by base name; each group is keyed on the fully resolved unit name."""
    grouped: dict[str, dict[str, SystemdUnitConfig]] = {}
    for key, cfg in units.items():
        base, suffix = cfg.split_name(key)
        grouped.setdefault(base, {})[f"{base}.{suffix}"] = cfg
    return grouped


def requires_custom_enable(units: dict[str, SystemdUnitConfig]) -> bool:
    """True when units sharing a base name mix enabled and not enabled."""
    enabled = sum(1 for cfg in units.values() if cfg.enable)
    return 0 < enabled < len(units)


def override_systemd(spec: Spec) -> str:
    """The override_dh_installsystemd target, or nothing when there are no units."""
    units = _units(spec)
    if not units:
        return ""

    lines = ["override_dh_installsystemd:\n"]
    include_custom_enable = False
    grouped = group_units_by_base_name(units)
    for basename in sorted(grouped):
        grouping = grouped[basename]
        needs_custom_enable = requires_custom_enable(grouping)
        include_custom_enable = include_custom_enable or needs_custom_enable

        enable = next(iter(grouping.values())).enable
        line = f"\tdh_installsystemd --name={basename}"
        if not enable or needs_custom_enable:
            line += " --no-enable"
        lines.append(line + "\n")

    if include_custom_enable:
        lines.append(
            "\t[ -f debian/postinst ] || (echo '#!/bin/sh' > debian/postinst; "
            "echo 'set -e' >> debian/postinst)\n"
        )
        lines.append("\t[ -x debian/postinst ] || chmod +x debian/postinst\n")
        lines.append(f"\tcat debian/dalec/{CUSTOM_SYSTEMD_POSTINST_FILE} >> debian/postinst\n")

    return "".join(lines)