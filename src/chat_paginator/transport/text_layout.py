"""Renders message payloads as plain text for text-only transports."""

from ..core.command_parser import CommandParser
from ..core.content import MessagePayload
from ..core.controls import ActionRow, Button, ControlKind, SelectMenu, iter_controls


class TextLayout:
    """Renders a payload as text with one line of control hints."""

    def render(self, payload: MessagePayload, include_hints: bool = True) -> str:
        """
        Render a payload as a text message.

        Args:
            payload: Content and controls to render.
            include_hints: Whether to append the control hint line.

        Returns:
            Formatted message string.
        """
        lines = self.render_body(payload)

        if include_hints:
            hints = self.render_hints(list(payload.rows))
            if hints:
                lines.append("")
                lines.append(hints)

        return "\n".join(lines)

    def render_body(self, payload: MessagePayload) -> list[str]:
        """Render the page content as lines."""
        lines = []
        embed = payload.embed

        if embed is not None:
            if embed.title:
                lines.append(f"[{embed.title}]")
            if embed.description:
                lines.append(embed.description)
            for rich_field in embed.fields:
                lines.append(f"{rich_field.name}: {rich_field.value}")
            if embed.footer:
                lines.append(f"-- {embed.footer}")
        elif payload.content:
            lines.append(payload.content)

        if not lines:
            lines.append("(empty)")
        return lines

    def render_hints(self, rows: list[ActionRow]) -> str:
        """
        Render the controls as a compact hint line, e.g. "p=Previous [2 / 5] n=Next".

        Disabled controls are left out; the page counter is always shown.
        """
        parts = []
        enabled = False

        for control in iter_controls(rows):
            if isinstance(control, Button):
                if control.kind is ControlKind.COUNTER:
                    parts.append(f"[{control.label}]")
                elif not control.disabled:
                    key = CommandParser.KEYS[control.kind]
                    parts.append(f"{key}={control.label or control.kind.value}")
                    enabled = True
            elif isinstance(control, SelectMenu) and not control.disabled and control.options:
                parts.append(f"1-{len(control.options)}=page")
                enabled = True

        if enabled:
            parts.append("?=help")
        return " ".join(parts)

    def render_options(self, menu: SelectMenu) -> str:
        """Render a selector as a numbered menu, marking the current page."""
        lines = []
        for i, option in enumerate(menu.options, 1):
            marker = "*" if option.default else ""
            lines.append(f"{i}. {option.label}{marker}")
        return "\n".join(lines)
