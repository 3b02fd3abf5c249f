# dalec

A package spec model and pure-Python generators for the text of Debian and
Azure Linux (RPM) packaging files, plus a small command that turns test JSON
event streams into GitHub Actions log output. There are no runtime
dependencies.

## Modules

- `dalec.spec` — the spec model: `Spec`, `Source`, `BuildConfig`,
  `BuildStep`, `PatchSpec`, `ChangelogEntry`, `PackageDependencies`,
  `PackageConstraints`. `Spec.get_package_deps(target)` returns a target's
  own dependencies if set, otherwise the spec-wide ones. `validate_spec`
  raises `MissingFieldError` when `packager` is empty; `sanitize_source_key`
  removes `_`, `-` and `.` from a source name.
- `dalec.artifacts` — what gets installed: `Artifacts` (binaries, manpages,
  data dirs, config files, docs, licenses, libs, links, directories to
  create, systemd units and drop-ins), `ArtifactConfig.resolve_name`,
  `CreateArtifactDirectories`, `ArtifactDirConfig`, `ArtifactSymlinkConfig`,
  `SystemdConfiguration`, `SystemdUnitConfig.split_name`,
  `SystemdDropinConfig`. `Artifacts.is_empty()` tells whether there is
  anything to install.
- `dalec.inline` — inline sources: `InlineFile`, `InlineDir`,
  `InlineSource`. `validate()` raises `InlineValidationError` listing every
  problem found (negative uid/gid, both or neither of file and dir, a path on
  an inline file, a path separator in a file name). `doc(name)` returns shell
  commands that recreate the file or directory.
- `dalec.deb.control` — `debian/control` field text: `architecture`,
  `append_constraints`, `multiline`, `build_deps`, `runtime_deps`,
  `replaces`, `conflicts`, `provides`.
- `dalec.deb.rules` — `debian/rules` fragments: `envs`, `override_perms`,
  `override_systemd`, with `group_units_by_base_name` and
  `requires_custom_enable` for units that share a base name but mix enabled
  and disabled.
- `dalec.deb.changelog` — `changelog_change` (the earliest-dated entry, or a
  dummy entry when there is none), `distro_version_id`,
  `distro_version_separator`.
- `dalec.deb.debroot` — script and file contents for the debian directory:
  `create_build_script`, `create_patch_script`, `fixup_sources`,
  `fixup_artifact_perms`, `install_files` (install, conffiles, manpages,
  dirs, docs files and systemd unit link targets), `links_file`, and
  `parse_os_release`, which returns `ID` + `VERSION_ID` from os-release text.
- `dalec.azlinux.install` — `InstallConfig`, `tdnf_install_flags`,
  `tdnf_install_command` and `manifest_script` (the distroless rpm manifest
  script).
- `dalec.platform_args` — `Platform` with `format()`, and
  `fill_platform_args(prefix, args, platform)`, which sets `<prefix>OS`,
  `<prefix>ARCH`, `<prefix>VARIANT` and `<prefix>PLATFORM`.
- `dalec.test2json2gha` — `process`, `write_result`, `get_test_output_loc`
  and the `main` entry point of the command below.

## Example

```python
from dalec.artifacts import Artifacts, SystemdConfiguration, SystemdUnitConfig
from dalec.spec import Spec
from dalec.deb.rules import override_systemd

spec = Spec(
    name="foo",
    artifacts=Artifacts(
        systemd=SystemdConfiguration(
            units={"foo.service": SystemdUnitConfig(enable=True)},
        ),
    ),
)
print(override_systemd(spec))
# override_dh_installsystemd:
# 	dh_installsystemd --name=foo
```

## Command

```sh
go test -json ./... | test2json2gha --module example.com/mymod
```

Events are read from standard input and each test's output is written to
standard output as a `::group::` block, with its duration. Failed tests are
marked and also get an `::error file=...,line=...::` annotation built from
the last `file:line:` location in their output. `--module` is stripped from
package names. The exit status is 2 when any test failed and 1 when the
input is not valid JSON events.

## What it does not do

The package produces text only. It does not run builds, talk to a build
daemon, fetch sources, write files to disk, or render complete `control`,
`rules` or `changelog` files; it provides the pieces that go into them.

## Tests

```sh
pip install -e ".[test]"
pytest
```