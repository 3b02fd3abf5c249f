"""Scripts and helper files placed in the debian directory of a package build."""

from __future__ import annotations

import json
import posixpath

from ..spec import Spec, sanitize_source_key

_INSTALL_HEADER = "#!/usr/bin/dh-exec\n\n"


def _join(*parts: str) -> str:
    """Join slash separated path elements and clean the result."""
    joined = posixpath.join(*(p for p in parts if p))
    return posixpath.normpath(joined) if joined else ""


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return posixpath.basename(stripped)


def _dir(path: str) -> str:
    parent = posixpath.dirname(path)
    return posixpath.normpath(parent) if parent else "."


def _quote(value: str) -> str:
    return json.dumps(value)


def _script_header() -> str:
    return "#!/usr/bin/env sh\n\nset -ex\n"


def fixup_artifact_perms(spec: Spec) -> str:
    """A script that sets the modes of created directories; empty when there are none."""
    dirs = spec.artifacts.directories
    if dirs is None:
        return ""

    out = "#!/usr/bin/env sh\nset -ex\n\n"
    base_path = _join("debian", spec.name)

    config = dirs.get_config()
    for name in sorted(config):
        perm = config[name].mode & 0o777
        if perm:
            out += f"chmod {perm:o} {_quote(_join(base_path, 'etc', name))}\n"

    state = dirs.get_state()
    for name in sorted(state):
        perm = state[name].mode & 0o777
        if perm:
            out += f"chmod {perm:o} {_quote(_join(base_path, 'var/lib', name))}\n"

    return out


def fixup_sources(spec: Spec) -> str:
    """A script that restores source names and layouts after the source tarballs are unpacked."""
    out = _script_header()
    for name in sorted(spec.sources):
        src = spec.sources[name]
        dir_name = sanitize_source_key(name)

        if src.is_dir:
            if dir_name != name:
                out += f"mv '{dir_name}' '{name}'\n"
            continue

        out += (
            f"mv '{dir_name}/{name}' '{name}.dalec.tmp' || "
            f"(ls -lh {_quote(dir_name)}; exit 2)\n"
        )
        out += f"rm -rf '{dir_name}'\n"
        out += f"mv '{name}.dalec.tmp' '{name}'\n"
        out += "\n"
    return out


def create_patch_script(spec: Spec) -> str:
    """A script that applies every patch to its source tree."""
    out = _script_header()
    for name in sorted(spec.patches):
        for patch in spec.patches[name]:
            path = _join("${DEBIAN_DIR:=debian}/dalec/patches", name, patch.source)
            out += f"patch -d {_quote(name)} -p{patch.strip} -s < {_quote(path)}\n"
    return out


def create_build_script(spec: Spec) -> str:
    """A script that exports the build environment and runs each build step in a subshell."""
    out = _script_header()
    env = spec.build.env
    for key in sorted(env):
        out += f"export {_quote(key)}={_quote(env[key])}\n"

    for step in spec.build.steps:
        out += "\n(\n"
        for key in sorted(step.env):
            out += f"\texport {_quote(key)}={_quote(step.env[key])}\n"
        out += f"{step.command}\n)\n"
    return out


class _InstallWriter:
    """Accumulates lines of the dh-exec install file."""

    def __init__(self) -> None:
        self.text = ""

    def add(self, src: str, directory: str, name: str) -> None:
        if not self.text:
            self.text = _INSTALL_HEADER
        if _base(src) != name:
            self.text += f"{src} => {_join(directory, name)}\n"
        else:
            self.text += f"{src} {directory}/\n"


def install_files(spec: Spec) -> dict[str, str]:
    """Files for the debian directory that install the package artifacts.

    Keys are file names inside the debian directory. Values are file contents,
    except for systemd unit entries, whose value is the relative path that the
    symlink of that name points to.
    """
    artifacts = spec.artifacts
    if artifacts.is_empty():
        return {}

    files: dict[str, str] = {}
    install = _InstallWriter()

    for key in sorted(artifacts.binaries):
        cfg = artifacts.binaries[key]
        install.add(key, _join("/usr/bin", cfg.sub_path), cfg.resolve_name(key))

    if artifacts.config_files:
        conffiles = ""
        for path in sorted(artifacts.config_files):
            cfg = artifacts.config_files[path]
            directory = _join("/etc", cfg.sub_path)
            name = cfg.resolve_name(path)
            install.add(path, directory, name)
            conffiles += _join(directory, name) + "\n"
        files["conffiles"] = conffiles

    if artifacts.manpages:
        manpages = ""
        for key in sorted(artifacts.manpages):
            cfg = artifacts.manpages[key]
            if cfg.name or (cfg.sub_path and cfg.sub_path != _base(_dir(key))):
                install.add(
                    key,
                    _join("/usr/share/doc/manpages", spec.name, cfg.sub_path),
                    cfg.resolve_name(key),
                )
                continue
            manpages += key + "\n"
        if manpages:
            files[f"{spec.name}.manpages"] = manpages

    if artifacts.directories is not None:
        dirs = ""
        for name in sorted(artifacts.directories.config):
            dirs += _join("/etc", name) + "\n"
        for name in sorted(artifacts.directories.state):
            dirs += _join("/var/lib", name) + "\n"
        files[f"{spec.name}.dirs"] = dirs

    if artifacts.docs or artifacts.licenses:
        docs = ""
        for group in (artifacts.docs, artifacts.licenses):
            for key in sorted(group):
                cfg = group[key]
                resolved = cfg.resolve_name(key)
                if resolved != key or cfg.sub_path:
                    install.add(
                        key, _join("/usr/share/doc", spec.name, cfg.sub_path), resolved
                    )
                else:
                    docs += key + "\n"
        if docs:
            files[f"{spec.name}.docs"] = docs

    systemd = artifacts.systemd
    units = systemd.get_units() if systemd is not None else {}
    for key in sorted(units):
        name, suffix = units[key].split_name(key)
        if name != spec.name:
            name = f"{spec.name}.{name}"
        files[f"{name}.{suffix}"] = f"../{key}"

    dropins = systemd.get_dropins() if systemd is not None else {}
    for key in sorted(dropins):
        cfg = dropins[key]
        install.add(
            key,
            _join("/lib/systemd/system", cfg.unit + ".d"),
            cfg.artifact().resolve_name(key),
        )

    for key in sorted(artifacts.data_dirs):
        cfg = artifacts.data_dirs[key]
        install.add(key, _join("/usr/share", cfg.sub_path), cfg.resolve_name(key))

    for key in sorted(artifacts.libs):
        cfg = artifacts.libs[key]
        install.add(key, _join("/usr/lib", spec.name, cfg.sub_path), cfg.resolve_name(key))

    if install.text:
        files[f"{spec.name}.install"] = install.text

    return files


def links_file(spec: Spec) -> str:
    """Contents of the package .links file; empty when there are no links."""
    out = ""
    for link in spec.artifacts.links:
        src = link.source.removeprefix("/")
        dst = link.dest.removeprefix("/")
        out += f"{src} {dst}\n"
    return out


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1]:
        quote = value[0]
        inner = value[1:-1]
        if quote == '"':
            try:
                return json.loads(value)
            except ValueError:
                return value
        if quote == "`" and "`" not in inner:
            return inner
        if quote == "'" and len(inner) == 1:
            return inner
    return value


def parse_os_release(text: str) -> str:
    """Concatenate ID and VERSION_ID from os-release contents."""
    distro_id = ""
    version = ""
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        if key == "ID":
            distro_id = _unquote(value)
        elif key == "VERSION_ID":
            version = _unquote(value)
        if distro_id and version:
            break

    if not distro_id or not version:
        raise ValueError("could not determine distro or version ID")
    return distro_id + version