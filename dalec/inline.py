"""Inline file and directory sources embedded directly in a spec."""

from __future__ import annotations

import json
import os
import posixpath
from dataclasses import dataclass, field

DEFAULT_FILE_PERMS = 0o644
DEFAULT_DIR_PERMS = 0o755

SOURCE_NAME_PATH_SEPARATOR_MESSAGE = "source name must not contain path separator"


def _quote(value: str) -> str:
    return json.dumps(value)


class InlineValidationError(ValueError):
    """Raised when an inline source is invalid; ``errors`` holds every problem found."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


def _check(errors: list[str]) -> None:
    if errors:
        raise InlineValidationError(errors)


def _owner_errors(uid: int, gid: int) -> list[str]:
    errors = []
    if uid < 0:
        errors.append(f"uid {uid} must be non-negative")
    if gid < 0:
        errors.append(f"gid {gid} must be non-negative")
    return errors


def _owner_doc(uid: int, gid: int, name: str) -> str:
    out = ""
    if uid != 0:
        out += f"\tchown {uid} {name}\n"
    if gid != 0:
        out += f"\tchgrp {gid} {name}\n"
    return out


def _chmod_doc(permissions: int, name: str) -> str:
    perms = (permissions & 0o777) or 0o644
    return f"\tchmod {perms:o} {name}\n"


@dataclass
class InlineFile:
    """A file whose contents are given inline."""

    contents: str = ""
    permissions: int = 0
    uid: int = 0
    gid: int = 0

    def _errors(self) -> list[str]:
        return _owner_errors(self.uid, self.gid)

    def validate(self) -> None:
        _check(self._errors())

    def doc(self, name: str) -> str:
        """Shell commands that recreate this file at ``name``."""
        out = f"\tcat << EOF > {name}\n{self.contents}\n\tEOF\n"
        out += _owner_doc(self.uid, self.gid, name)
        return out + _chmod_doc(self.permissions, name)


@dataclass
class InlineDir:
    """A directory of inline files."""

    files: dict[str, InlineFile] = field(default_factory=dict)
    permissions: int = 0
    uid: int = 0
    gid: int = 0

    def _errors(self) -> list[str]:
        errors = _owner_errors(self.uid, self.gid)
        for key, inline_file in self.files.items():
            label = f"file {_quote(key)}"
            if os.sep in key:
                errors.append(f"{label}: {SOURCE_NAME_PATH_SEPARATOR_MESSAGE}")
            nested = inline_file._errors()
            if nested:
                errors.append(f"{label}: " + "\n".join(nested))
        return errors

    def validate(self) -> None:
        _check(self._errors())

    def doc(self, name: str) -> str:
        """Shell commands that recreate this directory and its files at ``name``."""
        out = f"\tmkdir -p {name}\n"
        out += _owner_doc(self.uid, self.gid, name)
        for key in sorted(self.files):
            path = posixpath.normpath(posixpath.join(name, key))
            out += self.files[key].doc(path)
        return out + _chmod_doc(self.permissions, name)


@dataclass
class InlineSource:
    """An inline source: exactly one of a file or a directory."""

    file: InlineFile | None = None
    dir: InlineDir | None = None

    def _errors(self, subpath: str) -> list[str]:
        errors = []
        if self.file is None and self.dir is None:
            errors.append("inline source is missing contents to inline")
        if self.file is not None and self.dir is not None:
            errors.append("inline source variant cannot have both a file and dir set")
        if self.dir is not None:
            nested = self.dir._errors()
            if nested:
                errors.append("\n".join(nested))
        if self.file is not None:
            if subpath:
                errors.append("inline file source cannot have a path set")
            nested = self.file._errors()
            if nested:
                errors.append("\n".join(nested))
        return errors

    def validate(self, subpath: str = "") -> None:
        _check(self._errors(subpath))

    def doc(self, name: str) -> str:
        """Shell commands that recreate this source at ``name``."""
        out = ""
        if self.file is not None:
            out += self.file.doc(name)
        if self.dir is not None:
            out += self.dir.doc(name)
        return out