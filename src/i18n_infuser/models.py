from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from i18n_infuser.core.representations import Representation


class BlockKind(StrEnum):
    TEMPLATE = "template"
    SCRIPT = "script"
    STYLE = "style"
    I18N = "i18n"
    CUSTOM = "custom"


class Block(BaseModel):
    """A top-level block of a component; ``start``/``end`` delimit its inner content."""

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    tag: str
    start: int
    end: int
    attrs: dict[str, str | bool] = {}
    content: str = ""

    @property
    def lang(self) -> Representation:
        return Representation.from_attr(self.attrs.get("lang"))

    @property
    def locale(self) -> str | None:
        locale = self.attrs.get("locale")
        return locale if isinstance(locale, str) and locale else None


class FileDescriptor(BaseModel):
    content_path: str
    component: str
    hierarchy: list[str]
    raw: str
    template: Block | None = None
    script: Block | None = None
    script_setup: Block | None = None
    styles: list[Block] = []
    custom_blocks: list[Block] = []

    @model_validator(mode="after")
    def _check_ranges(self) -> "FileDescriptor":
        previous_end = 0
        for block in self.blocks():
            if block.start < previous_end or block.end < block.start or block.end > len(self.raw):
                raise ValueError(f"<{block.tag}> block range [{block.start}, {block.end}) is out of bounds or overlaps")
            previous_end = block.end
        return self

    def blocks(self) -> list[Block]:
        """All blocks ordered by their position in ``raw``."""
        blocks = [*self.styles, *self.custom_blocks]
        for block in (self.template, self.script, self.script_setup):
            if block is not None:
                blocks.append(block)
        return sorted(blocks, key=lambda b: b.start)

    def i18n_blocks(self) -> list[Block]:
        return [b for b in self.blocks() if b.kind is BlockKind.I18N]


class _EntryBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    lang: Representation = Representation.JSON

    @field_validator("lang")
    @classmethod
    def _not_passthrough(cls, value: Representation) -> Representation:
        if value is Representation.VUE:
            raise ValueError("'vue' is not a message representation")
        return value


class UnlocalizedEntry(_EntryBase):
    locale: None = Field(default=None, exclude=True)
    messages: dict[str, Any]

    @property
    def payload(self) -> dict[str, Any]:
        return self.messages


class LocalizedEntry(_EntryBase):
    locale: str = Field(min_length=1)
    messages: dict[str, Any]

    @model_validator(mode="after")
    def _has_locale_messages(self) -> "LocalizedEntry":
        if self.locale not in self.messages:
            raise ValueError(f"messages has no entry for locale '{self.locale}'")
        return self

    @property
    def payload(self) -> Any:
        return self.messages[self.locale]


MessageEntry = Annotated[LocalizedEntry | UnlocalizedEntry, Field(union_mode="left_to_right")]


class MetaLocaleMessage(BaseModel):
    target: str
    components: dict[str, list[MessageEntry]] = {}


class SfcFile(BaseModel):
    path: str
    content: str


class RebuiltFile(SfcFile):
    # Indexes of <i18n> blocks whose meta entry did not match and were kept as-is.
    skipped_blocks: list[int] = []
