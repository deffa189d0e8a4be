"""Unit tests for collecting meta entries from components."""

import pytest

from i18n_infuser.core.errors import FormatError
from i18n_infuser.core.infuser import infuse
from i18n_infuser.core.representations import Representation
from i18n_infuser.core.squeeze import squeeze
from i18n_infuser.models import LocalizedEntry, SfcFile, UnlocalizedEntry
from tests.conftest import RegexSfcParser

_HELLO = """<template><p>{{ $t('hello') }}</p></template>

<i18n>
{
  "en": {
    "hello": "hello"
  }
}
</i18n>

<i18n locale="ja" lang="yaml">
hello: こんにちは
</i18n>
"""


def test_squeezes_blocks_in_source_order(regex_parser: RegexSfcParser) -> None:
    meta = squeeze("src", [SfcFile(path="src/Hello.vue", content=_HELLO)], parser=regex_parser)

    assert meta.target == "src"
    first, second = meta.components["src/Hello.vue"]
    assert first == UnlocalizedEntry(lang=Representation.JSON, messages={"en": {"hello": "hello"}})
    assert second == LocalizedEntry(
        lang=Representation.YAML, locale="ja", messages={"ja": {"hello": "こんにちは"}}
    )


def test_files_without_i18n_blocks_are_omitted(regex_parser: RegexSfcParser) -> None:
    sources = [SfcFile(path="Plain.vue", content="<template><p/></template>")]

    assert squeeze(".", sources, parser=regex_parser).components == {}


def test_non_mapping_messages_are_rejected(regex_parser: RegexSfcParser) -> None:
    sources = [SfcFile(path="List.vue", content="<i18n>[1, 2]</i18n>")]

    with pytest.raises(FormatError) as excinfo:
        squeeze(".", sources, parser=regex_parser)

    assert excinfo.value.path == "List.vue"
    assert excinfo.value.block_index == 0


def test_yaml_locale_keys_stay_strings(regex_parser: RegexSfcParser) -> None:
    sources = [SfcFile(path="Nb.vue", content='<i18n lang="yaml">\nno:\n  hello: Hei\n</i18n>\n')]

    (entry,) = squeeze(".", sources, parser=regex_parser).components["Nb.vue"]

    assert entry == UnlocalizedEntry(lang=Representation.YAML, messages={"no": {"hello": "Hei"}})


def test_invalid_messages_name_file_and_block(regex_parser: RegexSfcParser) -> None:
    content = '<i18n locale="en">{"a": "b"}</i18n>\n<i18n lang="yaml">\n1: one\n</i18n>\n'
    sources = [SfcFile(path="Numbers.vue", content=content)]

    with pytest.raises(FormatError) as excinfo:
        squeeze(".", sources, parser=regex_parser)

    assert excinfo.value.path == "Numbers.vue"
    assert excinfo.value.block_index == 1
    assert excinfo.value.lang == "yaml"


def test_infusing_squeezed_meta_is_a_no_op_on_formatted_files(regex_parser: RegexSfcParser) -> None:
    sources = [SfcFile(path="src/Hello.vue", content=_HELLO)]
    meta = squeeze("src", sources, parser=regex_parser)

    (rebuilt,) = infuse("src", sources, meta.components, parser=regex_parser)

    assert rebuilt.content == _HELLO
    assert rebuilt.skipped_blocks == []
