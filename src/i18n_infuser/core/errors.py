"""Exceptions raised while rebuilding component files."""

from __future__ import annotations


class InfuseError(Exception):
    """Base class for every failure surfaced by the infuser."""


class SfcParseError(InfuseError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot parse {path}: {reason}")
        self.path = path
        self.reason = reason


class EntryCountError(InfuseError, ValueError):
    """Raised when a file has more <i18n> blocks than meta entries."""

    def __init__(self, path: str, blocks: int, entries: int) -> None:
        super().__init__(
            f"{path} has {blocks} <i18n> block(s) but the meta supplies only {entries} entr"
            f"{'y' if entries == 1 else 'ies'}"
        )
        self.path = path
        self.blocks = blocks
        self.entries = entries


class FormatError(InfuseError):
    """Raised when messages cannot be decoded, encoded or pretty-printed."""

    def __init__(self, lang: str, reason: str, path: str | None = None, block_index: int | None = None) -> None:
        location = ""
        if path is not None:
            location = f" in {path}"
            if block_index is not None:
                location += f" (i18n block #{block_index})"
        super().__init__(f"Invalid {lang} content{location}: {reason}")
        self.lang = lang
        self.reason = reason
        self.path = path
        self.block_index = block_index


class MetaError(InfuseError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid meta file {path}: {reason}")
        self.path = path
        self.reason = reason
