"""Page content and message payloads."""

import dataclasses
import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Union

from .controls import ActionRow

# Leaves room for the surrounding markup inside the description cap.
_MAX_PRETTY_LENGTH = 4000


@dataclass(frozen=True)
class RichField:
    """A name/value field of a rich page."""

    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class RichContent:
    """A structured page (title, body, footer, fields)."""

    title: str | None = None
    description: str | None = None
    footer: str | None = None
    fields: tuple[RichField, ...] = field(default_factory=tuple)
    color: int | None = None
    timestamp: datetime | None = None


PageContent = Union[RichContent, str]
PageRenderer = Callable[[Any, int, Sequence[Any]], PageContent]


def _to_jsonable(item: Any) -> Any:
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.asdict(item)
    return item


def default_page_renderer(item: Any, index: int, items: Sequence[Any]) -> PageContent:
    """
    Render an item when the caller supplies no renderer.

    Strings are shown as-is. Mappings, sequences and dataclasses are
    pretty-printed as JSON inside a rich page titled "Page n of total".
    Other values are shown as "Page n: value".
    """
    if isinstance(item, str):
        return item

    if isinstance(item, (Mapping, list, tuple)) or (
        dataclasses.is_dataclass(item) and not isinstance(item, type)
    ):
        pretty = json.dumps(_to_jsonable(item), indent=2, default=str, ensure_ascii=False)
        if len(pretty) > _MAX_PRETTY_LENGTH:
            pretty = pretty[: _MAX_PRETTY_LENGTH - 3] + "..."
        return RichContent(
            title=f"Page {index + 1} of {len(items)}",
            description=f"```json\n{pretty}\n```",
            timestamp=datetime.now(timezone.utc),
        )

    return f"Page {index + 1}: {item}"


@dataclass(frozen=True)
class MessagePayload:
    """Everything a transport needs to show one page."""

    content: str | None = None
    embed: RichContent | None = None
    rows: tuple[ActionRow, ...] = field(default_factory=tuple)
    ephemeral: bool = False

    @classmethod
    def from_page(cls, page: PageContent, rows: list[ActionRow], ephemeral: bool = False) -> "MessagePayload":
        if isinstance(page, RichContent):
            return cls(embed=page, rows=tuple(rows), ephemeral=ephemeral)
        return cls(content=page, rows=tuple(rows), ephemeral=ephemeral)


def with_timeout_notice(payload: MessagePayload, notice: str) -> MessagePayload:
    """
    Append a timeout notice to a payload.

    Text pages get the notice as a new paragraph; rich pages get it
    appended to the footer.
    """
    if payload.embed is not None:
        footer = f"{payload.embed.footer} | {notice}" if payload.embed.footer else notice
        return replace(payload, embed=replace(payload.embed, footer=footer))
    content = f"{payload.content}\n\n{notice}" if payload.content else notice
    return replace(payload, content=content)
