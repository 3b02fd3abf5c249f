"""Build arguments derived from a target or build platform."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Platform:
    """An OS / architecture / variant triple."""

    os: str = ""
    architecture: str = ""
    variant: str = ""

    def format(self) -> str:
        """The platform as ``os/arch[/variant]``, or ``unknown`` without an OS."""
        if not self.os:
            return "unknown"
        return "/".join(p for p in (self.os, self.architecture, self.variant) if p)


def fill_platform_args(prefix: str, args: dict[str, str], platform: Platform) -> dict[str, str]:
    """Set ``<prefix>OS``, ``ARCH``, ``VARIANT`` and ``PLATFORM`` in ``args``; returns ``args``."""
    args[prefix + "OS"] = platform.os
    args[prefix + "ARCH"] = platform.architecture
    args[prefix + "VARIANT"] = platform.variant
    args[prefix + "PLATFORM"] = platform.format()
    return args