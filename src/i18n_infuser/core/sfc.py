"""Split a Vue single-file component into its top-level blocks using tree-sitter."""

import logging
from pathlib import PurePath
from typing import cast

from pydantic import ValidationError
from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from i18n_infuser.core.errors import SfcParseError
from i18n_infuser.models import Block, BlockKind, FileDescriptor, SfcFile

logger = logging.getLogger(__name__)

_KINDS = {
    "template": BlockKind.TEMPLATE,
    "script": BlockKind.SCRIPT,
    "style": BlockKind.STYLE,
    "i18n": BlockKind.I18N,
}


def _first_child(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _attributes(start_tag: Node, source: bytes) -> dict[str, str | bool]:
    attrs: dict[str, str | bool] = {}
    for child in start_tag.children:
        if child.type != "attribute":
            continue
        name = _first_child(child, "attribute_name")
        if name is None:
            continue
        value: str | bool = True
        for part in child.children:
            if part.type == "attribute_value":
                value = _text(part, source)
            elif part.type == "quoted_attribute_value":
                inner = _first_child(part, "attribute_value")
                value = _text(inner, source) if inner is not None else ""
        attrs[_text(name, source)] = value
    return attrs


def _hierarchy(path: str, base_path: str) -> tuple[str, list[str]]:
    file_path = PurePath(path)
    try:
        relative = file_path.relative_to(base_path)
    except ValueError:
        relative = PurePath(file_path.name)
    return file_path.stem, [*relative.parent.parts, file_path.stem]


class TreeSitterSfcParser:
    """Build ``FileDescriptor`` values from component sources.

    Implements the ``SfcParser`` protocol. Block offsets are character
    offsets into the decoded source, pointing at the inner content between
    the opening and the closing tag.
    """

    def __init__(self) -> None:
        self._parser = get_parser(cast(SupportedLanguage, "vue"))

    def parse(self, source: SfcFile, base_path: str) -> FileDescriptor:
        raw = source.content
        data = raw.encode("utf-8")
        tree = self._parser.parse(data)

        ascii_only = len(data) == len(raw)

        def to_char(offset: int) -> int:
            # tree-sitter reports byte offsets
            return offset if ascii_only else len(data[:offset].decode("utf-8"))

        template: Block | None = None
        script: Block | None = None
        script_setup: Block | None = None
        styles: list[Block] = []
        custom_blocks: list[Block] = []

        for node in tree.root_node.children:
            if node.type == "ERROR":
                row, column = node.start_point
                raise SfcParseError(source.path, f"unexpected markup at line {row + 1}, column {column + 1}")
            start_tag = _first_child(node, "start_tag")
            if start_tag is None:
                # comments, stray text and self-closing tags carry no content
                continue
            tag_name = _first_child(start_tag, "tag_name")
            tag = _text(tag_name, data).lower() if tag_name is not None else ""
            end_tag = _first_child(node, "end_tag")
            if end_tag is None or end_tag.start_byte == end_tag.end_byte:
                raise SfcParseError(source.path, f"<{tag}> block is not closed")

            start = to_char(start_tag.end_byte)
            end = to_char(end_tag.start_byte)
            block = Block(
                kind=_KINDS.get(tag, BlockKind.CUSTOM),
                tag=tag,
                start=start,
                end=end,
                attrs=_attributes(start_tag, data),
                content=raw[start:end],
            )
            logger.debug("block: type=%s, start=%d, end=%d", block.tag, block.start, block.end)

            if block.kind is BlockKind.TEMPLATE:
                if template is not None:
                    raise SfcParseError(source.path, "more than one <template> block")
                template = block
            elif block.kind is BlockKind.SCRIPT and "setup" in block.attrs:
                if script_setup is not None:
                    raise SfcParseError(source.path, "more than one <script setup> block")
                script_setup = block
            elif block.kind is BlockKind.SCRIPT:
                if script is not None:
                    raise SfcParseError(source.path, "more than one <script> block")
                script = block
            elif block.kind is BlockKind.STYLE:
                styles.append(block)
            else:
                custom_blocks.append(block)

        component, hierarchy = _hierarchy(source.path, base_path)
        try:
            return FileDescriptor(
                content_path=source.path,
                component=component,
                hierarchy=hierarchy,
                raw=raw,
                template=template,
                script=script,
                script_setup=script_setup,
                styles=styles,
                custom_blocks=custom_blocks,
            )
        except ValidationError as exc:
            raise SfcParseError(source.path, str(exc)) from exc


def parse_sfc(source: SfcFile, base_path: str = ".") -> FileDescriptor:
    return TreeSitterSfcParser().parse(source, base_path)
