"""Transport-neutral replies produced by the command dispatcher.

The Discord layer turns these into messages and embeds; the CLI prints them
with rich.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from league_bot.domain.league import StatValue


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class Embed:
    """Titled, colored block of text and fields.

    Attributes:
        title: Heading line.
        color: Colour name understood by ``discord.Colour`` (e.g. "blue").
        description: Body text, may be empty.
        fields: Name/value pairs rendered after the description.
        timestamp: Optional time shown in the footer.
    """

    title: str
    color: str
    description: str = ""
    fields: tuple[EmbedField, ...] = ()
    timestamp: datetime | None = None


@dataclass(frozen=True)
class Reply:
    text: str | None = None
    embed: Embed | None = None

    @classmethod
    def plain(cls, text: str) -> Reply:
        return cls(text=text)

    @classmethod
    def rich(cls, embed: Embed) -> Reply:
        return cls(embed=embed)


@dataclass(frozen=True)
class AuditNotice:
    actor: str
    player: str
    fields: tuple[tuple[str, StatValue], ...]
    timestamp: datetime

    def to_embed(self) -> Embed:
        return Embed(
            title="Stats Updated",
            color="red",
            description=f"**{self.actor}** updated stats for **{self.player}**.",
            fields=tuple(EmbedField(name=key, value=str(value)) for key, value in self.fields),
            timestamp=self.timestamp,
        )


@dataclass(frozen=True)
class CommandResult:
    reply: Reply
    audit: AuditNotice | None = field(default=None)
