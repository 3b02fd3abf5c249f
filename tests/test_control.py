from dalec.deb.control import (
    append_constraints,
    architecture,
    build_deps,
    conflicts,
    multiline,
    provides,
    replaces,
    runtime_deps,
)
from dalec.spec import PackageConstraints, PackageDependencies, Spec


def test_architecture():
    assert architecture(Spec(no_arch=True)) == "all"
    assert architecture(Spec()) == "linux-any"


def test_append_constraints_sorted_names():
    deps = {"zeta": PackageConstraints(), "alpha": PackageConstraints()}
    assert append_constraints(deps) == ["alpha", "zeta"]
    assert append_constraints(None) == []


def test_append_constraints_formats_version_and_arch():
    deps = {"foo": PackageConstraints(version=[">= 1.0"], arch=["amd64"])}
    assert append_constraints(deps) == ["foo (>= 1.0) [amd64]"]


def test_append_constraints_sorts_versions_without_mutating():
    versions = [">= 2", "<< 3"]
    deps = {"foo": PackageConstraints(version=versions)}
    (entry,) = append_constraints(deps)
    inner = entry[entry.index("(") + 1 : entry.index(")")].split(", ")
    assert inner == sorted(versions)
    assert versions == [">= 2", "<< 3"]


def test_multiline_single_value():
    assert multiline("X", ["a"]) == "X: a"


def test_multiline_alignment():
    values = ["a", "b", "c"]
    out = multiline("Depends", values)
    lines = out.split("\n")
    assert lines[0].startswith("Depends: ")
    for line in lines[1:]:
        assert line.startswith(" " * len("Depends: "))
    assert [v.strip().rstrip(",") for v in out[len("Depends: "):].split("\n")] == values


def test_build_deps_without_dependencies():
    assert build_deps(Spec(), "t") == "Build-Depends: debhelper-compat (= 13)\n"


def test_build_deps_uses_target_dependencies():
    spec = Spec(
        dependencies=PackageDependencies(build={"gcc": PackageConstraints()}),
        target_dependencies={"t": PackageDependencies(build={"clang": PackageConstraints()})},
    )
    out = build_deps(spec, "t")
    assert "clang" in out
    assert "gcc" not in out
    assert out.rstrip("\n").endswith("debhelper-compat (= 13)")


def test_runtime_deps_empty():
    assert runtime_deps(Spec(), "t") == ""
    assert runtime_deps(Spec(dependencies=PackageDependencies()), "t") == ""


def test_runtime_deps_depends_and_recommends():
    spec = Spec(
        dependencies=PackageDependencies(
            runtime={"libc": PackageConstraints()},
            recommends={"curl": PackageConstraints()},
        )
    )
    out = runtime_deps(spec, "t")
    assert out.startswith("Depends: libc\n")
    assert "Recommends: curl\n" in out
    assert out.index("Depends") < out.index("Recommends")


def test_relationship_fields():
    spec = Spec(
        replaces={"old": PackageConstraints()},
        conflicts={"other": PackageConstraints()},
        provides={"virt": PackageConstraints()},
    )
    assert replaces(spec).startswith("Replaces: old")
    assert conflicts(spec).startswith("Conflicts: other")
    assert provides(spec).startswith("Provides: virt")
    assert all(f(spec).endswith("\n") for f in (replaces, conflicts, provides))
    assert replaces(Spec()) == conflicts(Spec()) == provides(Spec()) == ""