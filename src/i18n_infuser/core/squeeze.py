import logging
from collections.abc import Sequence

from pydantic import ValidationError

from i18n_infuser.core.errors import FormatError
from i18n_infuser.core.ports.parser import SfcParser
from i18n_infuser.core.representations import parse_content
from i18n_infuser.models import LocalizedEntry, MessageEntry, MetaLocaleMessage, SfcFile, UnlocalizedEntry

logger = logging.getLogger(__name__)


def squeeze(base_path: str, sources: Sequence[SfcFile], parser: SfcParser | None = None) -> MetaLocaleMessage:
    """Collect the messages of every ``<i18n>`` block into a meta document.

    Entries are recorded in block order, so infusing the result back into
    the same files only reformats their message blocks.
    """
    if parser is None:
        from i18n_infuser.core.sfc import TreeSitterSfcParser

        parser = TreeSitterSfcParser()

    components: dict[str, list[MessageEntry]] = {}
    for source in sources:
        descriptor = parser.parse(source, base_path)
        entries: list[MessageEntry] = []
        for index, block in enumerate(descriptor.i18n_blocks()):
            lang = block.lang
            try:
                messages = parse_content(block.content, lang)
            except FormatError as exc:
                raise FormatError(exc.lang, exc.reason, path=descriptor.content_path, block_index=index) from exc
            if not isinstance(messages, dict):
                raise FormatError(
                    lang.value,
                    f"expected a mapping of messages, got {type(messages).__name__}",
                    path=descriptor.content_path,
                    block_index=index,
                )
            try:
                if block.locale:
                    entry: MessageEntry = LocalizedEntry(
                        lang=lang, locale=block.locale, messages={block.locale: messages}
                    )
                else:
                    entry = UnlocalizedEntry(lang=lang, messages=messages)
            except ValidationError as exc:
                raise FormatError(lang.value, str(exc), path=descriptor.content_path, block_index=index) from exc
            entries.append(entry)

        if entries:
            components[descriptor.content_path] = entries
        logger.debug("squeezed %d i18n block(s) from %s", len(entries), descriptor.content_path)

    return MetaLocaleMessage(target=base_path, components=components)
