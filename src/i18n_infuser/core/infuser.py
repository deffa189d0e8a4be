"""Merge meta locale messages back into component ``<i18n>`` blocks."""

import logging
from collections.abc import Mapping, Sequence
from html import escape
from typing import Any

from i18n_infuser.core.errors import EntryCountError, FormatError
from i18n_infuser.core.ports.parser import SfcParser
from i18n_infuser.core.representations import Representation, format_source, parse_content, stringify_content
from i18n_infuser.models import Block, BlockKind, FileDescriptor, MessageEntry, RebuiltFile, SfcFile

logger = logging.getLogger(__name__)


def _serialize(messages: Any, lang: Representation) -> str:
    return format_source(stringify_content(messages, lang), lang)


def resolve_messages(block: Block, entry: MessageEntry) -> tuple[Any, bool]:
    """Pick the messages to write into ``block``.

    Returns ``(messages, matched)``. When the entry's lang or locale differs
    from the block's declaration, the block's own content is kept.
    """
    lang = block.lang
    locale = block.locale
    logger.debug(
        "meta.lang = %s, block.lang = %s, meta.locale = %s, block.locale = %s",
        entry.lang,
        lang,
        entry.locale,
        locale,
    )
    if lang is entry.lang and locale == entry.locale:
        return entry.payload, True
    return parse_content(block.content, lang), False


def _build_content(entries: Sequence[MessageEntry], raw: str, blocks: Sequence[Block]) -> tuple[str, list[int]]:
    contents: list[str] = []
    skipped: list[int] = []
    offset = 0
    counter = 0

    for block in blocks:
        if block.kind is not BlockKind.I18N:
            contents.append(raw[offset : block.end])
            offset = block.end
            continue

        contents.append(raw[offset : block.start])
        try:
            messages, matched = resolve_messages(block, entries[counter])
            contents.append(f"\n{_serialize(messages, block.lang)}")
        except FormatError as exc:
            raise FormatError(exc.lang, exc.reason, block_index=counter) from exc
        if not matched:
            logger.debug("unmatch meta block and sfc block #%d", counter)
            skipped.append(counter)
        offset = block.end
        counter += 1

    contents.append(raw[offset:])
    contents.extend(build_i18n_tag(entry) for entry in entries[counter:])
    return "".join(contents), skipped


def build_content(entries: Sequence[MessageEntry], raw: str, blocks: Sequence[Block]) -> str:
    """Rebuild ``raw`` with the ``<i18n>`` blocks replaced by ``entries``.

    ``blocks`` must be sorted by ``start``. Everything outside the inner
    content of ``<i18n>`` blocks is copied verbatim; entries without a
    matching block are appended as new blocks.
    """
    content, _ = _build_content(entries, raw, blocks)
    return content


def build_i18n_tag(entry: MessageEntry) -> str:
    tag = "<i18n"
    if entry.locale:
        tag += f' locale="{escape(entry.locale)}"'
    if entry.lang is not Representation.JSON:
        tag += f' lang="{escape(entry.lang.value)}"'
    tag += ">"
    return f"\n\n{tag}\n{_serialize(entry.payload, entry.lang)}</i18n>"


def rebuild_file(descriptor: FileDescriptor, entries: Sequence[MessageEntry]) -> RebuiltFile:
    path = descriptor.content_path
    blocks = descriptor.blocks()
    i18n_count = sum(1 for b in blocks if b.kind is BlockKind.I18N)
    if len(entries) < i18n_count:
        raise EntryCountError(path, i18n_count, len(entries))

    try:
        content, skipped = _build_content(entries, descriptor.raw, blocks)
    except FormatError as exc:
        raise FormatError(exc.lang, exc.reason, path=path, block_index=exc.block_index) from exc
    for index in skipped:
        logger.warning("%s: i18n block #%d does not match its meta entry, keeping its own messages", path, index)
    logger.debug("build content:\n%s", content)
    logger.debug("content size: raw=%d, content=%d", len(descriptor.raw), len(content))

    return RebuiltFile(path=path, content=format_source(content, Representation.VUE), skipped_blocks=skipped)


def infuse(
    base_path: str,
    sources: Sequence[SfcFile],
    meta: Mapping[str, Sequence[MessageEntry]],
    parser: SfcParser | None = None,
) -> list[RebuiltFile]:
    """Rebuild every source file with the meta entries recorded for its path."""
    if parser is None:
        from i18n_infuser.core.sfc import TreeSitterSfcParser

        parser = TreeSitterSfcParser()

    results: list[RebuiltFile] = []
    for source in sources:
        descriptor = parser.parse(source, base_path)
        entries = meta.get(descriptor.content_path, [])
        logger.debug("target i18n blocks for %s: %s", descriptor.content_path, entries)
        rebuilt = rebuild_file(descriptor, entries)
        logger.info(
            "Infused %s (%d entr%s, %d skipped)",
            rebuilt.path,
            len(entries),
            "y" if len(entries) == 1 else "ies",
            len(rebuilt.skipped_blocks),
        )
        results.append(rebuilt)
    return results
