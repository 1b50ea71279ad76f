"""Discord message transport built on discord.py components."""

import logging

import discord

from ..constants import ButtonStyle
from ..core.content import MessagePayload, RichContent
from ..core.controls import Button, ComponentType, SelectMenu
from ..interfaces import ControlCallback, ControlEvent, MessageHandle, MessageTransport, Subscription
from ..validation import is_emoji

logger = logging.getLogger(__name__)

_STYLES = {
    ButtonStyle.PRIMARY: discord.ButtonStyle.primary,
    ButtonStyle.SECONDARY: discord.ButtonStyle.secondary,
    ButtonStyle.SUCCESS: discord.ButtonStyle.success,
    ButtonStyle.DANGER: discord.ButtonStyle.danger,
}


def build_embed(content: RichContent) -> discord.Embed:
    """Convert a rich page into a Discord embed."""
    embed = discord.Embed(
        title=content.title,
        description=content.description,
        color=content.color,
        timestamp=content.timestamp,
    )
    for rich_field in content.fields:
        embed.add_field(name=rich_field.name, value=rich_field.value, inline=rich_field.inline)
    if content.footer:
        embed.set_footer(text=content.footer)
    return embed


class ControlButton(discord.ui.Button):
    """A navigation button forwarding clicks to the transport."""

    def __init__(self, button: Button, transport: "DiscordTransport", row: int):
        label = button.label
        emoji = button.emoji
        # Discord always draws the emoji first; trailing Unicode icons go in the label.
        if button.emoji_after and emoji and is_emoji(emoji):
            label = button.display_text()
            emoji = None

        super().__init__(
            label=label,
            emoji=emoji,
            style=_STYLES[ButtonStyle(button.style)],
            custom_id=button.custom_id,
            disabled=button.disabled,
            row=row,
        )
        self.transport = transport

    async def callback(self, interaction: discord.Interaction) -> None:
        await self.transport.dispatch(interaction, ComponentType.BUTTON, self.custom_id, ())


class ControlSelect(discord.ui.Select):
    """A page selector forwarding choices to the transport."""

    def __init__(self, menu: SelectMenu, transport: "DiscordTransport", row: int):
        super().__init__(
            custom_id=menu.custom_id,
            placeholder=menu.placeholder,
            min_values=menu.min_values,
            max_values=menu.max_values,
            disabled=menu.disabled,
            row=row,
            options=[
                discord.SelectOption(
                    label=option.label,
                    value=option.value,
                    description=option.description,
                    default=option.default,
                )
                for option in menu.options
            ],
        )
        self.transport = transport

    async def callback(self, interaction: discord.Interaction) -> None:
        await self.transport.dispatch(interaction, ComponentType.SELECT, self.custom_id, tuple(self.values))


def build_view(payload: MessagePayload, transport: "DiscordTransport") -> discord.ui.View:
    """
    Convert the payload's control rows into a Discord view.

    The view never times out on its own; the session's timer decides when
    the controls expire. Must be called with a running event loop.
    """
    view = discord.ui.View(timeout=None)
    for row_index, row in enumerate(payload.rows):
        for control in row.components:
            if isinstance(control, Button):
                view.add_item(ControlButton(control, transport, row_index))
            elif isinstance(control, SelectMenu):
                view.add_item(ControlSelect(control, transport, row_index))
    return view


class DiscordTransport(MessageTransport):
    """Delivers a paginated message in reply to one Discord interaction."""

    def __init__(self, interaction: discord.Interaction):
        """
        Initialize the transport.

        Args:
            interaction: The slash-command (or component) interaction that
                asked for the pagination.
        """
        self.interaction = interaction
        self._listeners: dict[MessageHandle, ControlCallback] = {}

    @property
    def invoker_id(self) -> str:
        """Id of the user who invoked the interaction."""
        return str(self.interaction.user.id)

    def _message_kwargs(self, payload: MessagePayload) -> dict:
        return {
            "content": payload.content,
            "embed": build_embed(payload.embed) if payload.embed is not None else None,
            "view": build_view(payload, self),
        }

    async def send(self, payload: MessagePayload) -> MessageHandle:
        kwargs = self._message_kwargs(payload)
        if kwargs["embed"] is None:
            del kwargs["embed"]

        if self.interaction.response.is_done():
            message = await self.interaction.followup.send(wait=True, ephemeral=payload.ephemeral, **kwargs)
        else:
            await self.interaction.response.send_message(ephemeral=payload.ephemeral, **kwargs)
            message = await self.interaction.original_response()

        return MessageHandle(channel_id=str(message.channel.id), message_id=str(message.id), raw=message)

    async def edit(self, handle: MessageHandle, payload: MessagePayload) -> None:
        await handle.raw.edit(**self._message_kwargs(payload))

    async def delete(self, handle: MessageHandle) -> None:
        await handle.raw.delete()

    def subscribe(self, handle: MessageHandle, callback: ControlCallback, timeout: float | None = None) -> Subscription:
        self._listeners[handle] = callback
        return Subscription(on_cancel=lambda: self._listeners.pop(handle, None))

    async def dispatch(
        self,
        interaction: discord.Interaction,
        component_type: ComponentType,
        custom_id: str,
        values: tuple[str, ...],
    ) -> None:
        """Turn a component interaction into a ControlEvent for the listener."""
        message = interaction.message
        handle = (
            MessageHandle(channel_id=str(message.channel.id), message_id=str(message.id), raw=message)
            if message is not None
            else None
        )
        callback = self._listeners.get(handle) if handle is not None else None

        if callback is None:
            logger.debug(f"No listener for {custom_id}; deferring")
            if not interaction.response.is_done():
                await interaction.response.defer()
            return

        event = ControlEvent(
            actor_id=str(interaction.user.id),
            control_id=custom_id,
            component_type=component_type,
            values=values,
            handle=handle,
            raw=interaction,
        )
        await callback(event)

    async def acknowledge(self, event: ControlEvent) -> None:
        interaction: discord.Interaction = event.raw
        if not interaction.response.is_done():
            await interaction.response.defer()

    async def notify(self, event: ControlEvent, text: str) -> None:
        interaction: discord.Interaction = event.raw
        if interaction.response.is_done():
            await interaction.followup.send(text, ephemeral=True)
        else:
            await interaction.response.send_message(text, ephemeral=True)
