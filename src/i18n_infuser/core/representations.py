"""Textual representations of locale messages inside ``<i18n>`` blocks."""

import json
import logging
import math
import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any

import json5
import yaml

from i18n_infuser.core.errors import FormatError

logger = logging.getLogger(__name__)

INDENT_WIDTH = 2


class Representation(StrEnum):
    JSON = "json"
    JSON5 = "json5"
    YAML = "yaml"
    YML = "yml"
    # Whole-file pass-through, never the format of a message payload.
    VUE = "vue"

    @classmethod
    def from_attr(cls, value: object) -> "Representation":
        """Resolve a block ``lang`` attribute, falling back to JSON.

        Tags are matched exactly, so ``lang="YAML"`` is not ``yaml``.
        """
        if isinstance(value, str):
            try:
                resolved = cls(value)
            except ValueError:
                return cls.JSON
            if resolved is not cls.VUE:
                return resolved
        return cls.JSON


_DECODE_ERRORS = (ValueError, TypeError, yaml.YAMLError)

_BOOL_TAG = "tag:yaml.org,2002:bool"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_NULL_TAG = "tag:yaml.org,2002:null"

# YAML 1.2 core schema, without octal/hex ints and the 1.1 yes/no/on/off booleans.
_CORE_RESOLVERS = [
    (_BOOL_TAG, re.compile(r"^(?:true|false)$"), list("tf")),
    (_INT_TAG, re.compile(r"^-?[0-9]+$"), list("-0123456789")),
    (
        _FLOAT_TAG,
        re.compile(r"^(?:-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?|-?\.inf|\.nan)$"),
        list("-0123456789."),
    ),
    (_NULL_TAG, re.compile(r"^(?:~|null|)$"), ["~", "n", ""]),
]


def _canonical_int(value: str) -> bool:
    return str(int(value)) == value


def _canonical_float(value: str) -> bool:
    if value in (".inf", "-.inf", ".nan"):
        return True
    text = repr(float(value))
    if "." not in text and "e" in text:
        text = text.replace("e", ".0e", 1)
    return text == value


_CANONICAL: dict[str, Callable[[str], bool]] = {_INT_TAG: _canonical_int, _FLOAT_TAG: _canonical_float}


class _CoreResolverMixin:
    """Resolve plain scalars only when dumping them back gives the same text.

    ``1.10`` or ``007`` stay strings, so reformatting a block never rewrites them.
    """

    def resolve(self, kind: Any, value: Any, implicit: Any) -> str:
        tag: str = super().resolve(kind, value, implicit)  # type: ignore[misc]
        check = _CANONICAL.get(tag)
        if check is not None and not check(value):
            return yaml.resolver.BaseResolver.DEFAULT_SCALAR_TAG
        return tag


class _CoreLoader(_CoreResolverMixin, yaml.SafeLoader):
    pass


class _CoreDumper(_CoreResolverMixin, yaml.SafeDumper):
    pass


for _cls in (_CoreLoader, _CoreDumper):
    _cls.yaml_implicit_resolvers = {}
    for _tag, _regexp, _first in _CORE_RESOLVERS:
        _cls.add_implicit_resolver(_tag, _regexp, _first)


def _js_numbers(data: Any) -> Any:
    """Write integral floats the way ``JSON.stringify`` does (``1e5`` -> ``100000``)."""
    if isinstance(data, float) and math.isfinite(data) and data.is_integer() and abs(data) < 1e21:
        return int(data)
    if isinstance(data, dict):
        return {key: _js_numbers(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_js_numbers(item) for item in data]
    return data


def _load(source: str, lang: Representation) -> Any:
    if lang in (Representation.YAML, Representation.YML):
        return yaml.load(source, Loader=_CoreLoader)
    if lang is Representation.JSON5:
        return json5.loads(source)
    return json.loads(source)


def _dump(data: Any, lang: Representation, indent: int | None = None) -> str:
    if lang in (Representation.YAML, Representation.YML):
        return yaml.dump(
            data,
            Dumper=_CoreDumper,
            indent=indent or INDENT_WIDTH,
            width=float("inf"),
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    if lang is Representation.JSON5:
        return json5.dumps(_js_numbers(data), indent=indent, ensure_ascii=False, trailing_commas=False)
    return json.dumps(_js_numbers(data), indent=indent, ensure_ascii=False)


def parse_content(content: str, lang: Representation) -> Any:
    """Decode the raw text of an ``<i18n>`` block into a messages tree."""
    if not content.strip():
        return {}
    try:
        messages = _load(content, lang)
    except _DECODE_ERRORS as exc:
        raise FormatError(lang.value, str(exc)) from exc
    return {} if messages is None else messages


def stringify_content(messages: Any, lang: Representation) -> str:
    try:
        return _dump(messages, lang)
    except _DECODE_ERRORS as exc:
        raise FormatError(lang.value, str(exc)) from exc


def _pretty(lang: Representation) -> Callable[[str], str]:
    def printer(source: str) -> str:
        printed = _dump(_load(source, lang), lang, indent=INDENT_WIDTH)
        return printed if printed.endswith("\n") else f"{printed}\n"

    return printer


_PRINTERS: dict[Representation, Callable[[str], str]] = {
    Representation.JSON: _pretty(Representation.JSON),
    Representation.JSON5: _pretty(Representation.JSON5),
    Representation.YAML: _pretty(Representation.YAML),
    Representation.YML: _pretty(Representation.YML),
}


def format_source(source: str, lang: Representation | str | None) -> str:
    """Pretty-print ``source`` for ``lang``; ``vue`` passes the text through untouched."""
    if lang == Representation.VUE:
        return source
    resolved = Representation.from_attr(lang)
    logger.debug("format: lang=%s, source=%s", resolved, source)
    try:
        return _PRINTERS[resolved](source)
    except _DECODE_ERRORS as exc:
        raise FormatError(resolved.value, str(exc)) from exc
