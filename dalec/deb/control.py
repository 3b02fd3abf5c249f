"""Fields of the debian/control file generated from a spec."""

from __future__ import annotations

from ..spec import PackageConstraints, Spec

DEB_HELPER_COMPAT = "13"


def architecture(spec: Spec) -> str:
    """The Architecture value: "all" for arch-independent packages, else "linux-any"."""
    if spec.no_arch:
        arch = "all"
    else:
        arch = "linux-any"
    return arch


def append_constraints(deps: dict[str, PackageConstraints] | None) -> list[str]:
    """Package names with their constraints in debian relationship syntax, sorted by name."""
    if not deps:
        return []
    out = []
    for name in sorted(deps):
        constraints = deps[name]
        entry = name
        if constraints.version:
            entry += f" ({', '.join(sorted(constraints.version))})"
        if constraints.arch:
            entry += f" [{', '.join(sorted(constraints.arch))}]"
        out.append(entry)
    return out


def multiline(field: str, values: list[str]) -> str:
    """Format a multi-valued field with one value per line, aligned under the first."""
    indent = " " * (len(field) + 2)
    return f"{field}: " + f",\n{indent}".join(values)


def _field(name: str, deps: dict[str, PackageConstraints] | None) -> str:
    if not deps:
        return ""
    return multiline(name, append_constraints(deps)) + "\n"


def build_deps(spec: Spec, target: str) -> str:
    deps_spec = spec.get_package_deps(target)
    deps = append_constraints(deps_spec.build) if deps_spec is not None else []
    deps.append(f"debhelper-compat (= {DEB_HELPER_COMPAT})")
    return multiline("Build-Depends", deps) + "\n"


def runtime_deps(spec: Spec, target: str) -> str:
    deps_spec = spec.get_package_deps(target)
    if deps_spec is None:
        return ""
    return _field("Depends", deps_spec.runtime) + _field("Recommends", deps_spec.recommends)


def replaces(spec: Spec) -> str:
    return _field("Replaces", spec.replaces)


def conflicts(spec: Spec) -> str:
    return _field("Conflicts", spec.conflicts)


def provides(spec: Spec) -> str:
    return _field("Provides", spec.provides)