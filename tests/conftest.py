"""Shared fixtures and helpers for tests."""

import re
from pathlib import Path

import pytest

from i18n_infuser.models import Block, BlockKind, FileDescriptor, SfcFile

_TESTS_ROOT = Path(__file__).parent

_BLOCK_RE = re.compile(r"<(?P<tag>[\w-]+)(?P<attrs>[^>]*)>(?P<content>.*?)</(?P=tag)>", re.DOTALL)
_ATTR_RE = re.compile(r'([\w-]+)(?:="([^"]*)")?')
_KINDS = {
    "template": BlockKind.TEMPLATE,
    "script": BlockKind.SCRIPT,
    "style": BlockKind.STYLE,
    "i18n": BlockKind.I18N,
}


# ---------------------------------------------------------------------------
# Auto-marker: every test collected here is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# RegexSfcParser — a stand-in for the tree-sitter parser on simple sources
# ---------------------------------------------------------------------------


def make_block(raw: str, tag: str, occurrence: int = 0) -> Block:
    """Build the descriptor block for the ``occurrence``-th top-level ``<tag>`` in ``raw``."""
    matches = [m for m in _BLOCK_RE.finditer(raw) if m.group("tag") == tag]
    match = matches[occurrence]
    attrs: dict[str, str | bool] = {}
    for name, value in _ATTR_RE.findall(match.group("attrs")):
        attrs[name] = value if f'{name}="' in match.group("attrs") else True
    return Block(
        kind=_KINDS.get(tag, BlockKind.CUSTOM),
        tag=tag,
        start=match.start("content"),
        end=match.end("content"),
        attrs=attrs,
        content=match.group("content"),
    )


def make_descriptor(path: str, raw: str) -> FileDescriptor:
    template = script = None
    styles: list[Block] = []
    custom_blocks: list[Block] = []
    counts: dict[str, int] = {}
    for match in _BLOCK_RE.finditer(raw):
        tag = match.group("tag")
        block = make_block(raw, tag, counts.get(tag, 0))
        counts[tag] = counts.get(tag, 0) + 1
        if block.kind is BlockKind.TEMPLATE:
            template = block
        elif block.kind is BlockKind.SCRIPT:
            script = block
        elif block.kind is BlockKind.STYLE:
            styles.append(block)
        else:
            custom_blocks.append(block)
    return FileDescriptor(
        content_path=path,
        component=Path(path).stem,
        hierarchy=[Path(path).stem],
        raw=raw,
        template=template,
        script=script,
        styles=styles,
        custom_blocks=custom_blocks,
    )


class RegexSfcParser:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def parse(self, source: SfcFile, base_path: str) -> FileDescriptor:
        self.calls.append((source.path, base_path))
        return make_descriptor(source.path, source.content)


@pytest.fixture
def regex_parser() -> RegexSfcParser:
    return RegexSfcParser()


@pytest.fixture
def use_regex_parser(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the default parser of ``infuse``/``squeeze`` the regex stand-in."""
    monkeypatch.setattr("i18n_infuser.core.sfc.TreeSitterSfcParser", RegexSfcParser)
