"""Configuration handling for the chat paginator."""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any
import yaml

from .constants import AfterTimeout, ButtonStyle, PlatformLimits
from .errors import ValidationError
from .validation import (
    validate_after_timeout,
    validate_bool,
    validate_button_style,
    validate_emoji,
    validate_max_options,
    validate_start_page,
    validate_timeout,
)


@dataclass(frozen=True)
class EmojiSet:
    """Default icons for the navigation controls."""

    previous: str = "⬅️"
    next: str = "➡️"
    first: str = "⏪"
    last: str = "⏩"
    stop: str = "❌"


@dataclass(frozen=True)
class Messages:
    """User-facing notices."""

    timeout: str = "This pagination has timed out."
    permission_denied: str = "You cannot use this pagination."
    interaction_failed: str = "Failed to handle interaction."
    no_data: str = "No data available to paginate."
    help: str = "f=first p=prev n=next l=last x=stop [num]=page ?=help"


@dataclass(frozen=True)
class PaginatorConfig:
    """Settings shared by every paginated session.

    Attributes:
        timeout: Seconds until the session expires (0 disables expiry).
        ephemeral: Whether messages are visible to the invoker only.
        start_page: Zero-based page shown first (clamped to the data).
        after_timeout: Delete the message or disable its controls on expiry.
        button_style: Style of the navigation buttons.
        show_page_counter: Whether the button surface shows "n / total".
        max_options_per_menu: Options listed by the selector surface.
        emojis: Default control icons.
        messages: User-facing notices.
        limits: Platform limits the renderers respect.
    """

    timeout: float = 300.0
    ephemeral: bool = False
    start_page: int = 0
    after_timeout: AfterTimeout = AfterTimeout.DISABLE
    button_style: ButtonStyle = ButtonStyle.PRIMARY
    show_page_counter: bool = True
    max_options_per_menu: int = 25
    emojis: EmojiSet = field(default_factory=EmojiSet)
    messages: Messages = field(default_factory=Messages)
    limits: PlatformLimits = field(default_factory=PlatformLimits)

    def validate(self) -> "PaginatorConfig":
        """
        Check every setting.

        Returns:
            self, so calls can be chained.

        Raises:
            ValidationError: On the first invalid setting.
        """
        validate_timeout(self.timeout, self.limits)
        validate_bool("ephemeral", self.ephemeral)
        validate_start_page(self.start_page)
        validate_after_timeout(self.after_timeout)
        validate_button_style(self.button_style)
        validate_bool("show_page_counter", self.show_page_counter)
        validate_max_options(self.max_options_per_menu, self.limits)
        for emoji_field in fields(EmojiSet):
            validate_emoji(getattr(self.emojis, emoji_field.name), field=f"emojis.{emoji_field.name}")
        for message_field in fields(Messages):
            value = getattr(self.messages, message_field.name)
            if not isinstance(value, str):
                raise ValidationError(f"messages.{message_field.name}", value, "string")
        return self


def configure(base: PaginatorConfig | None = None, **overrides: Any) -> PaginatorConfig:
    """
    Build a new validated config from a base plus overrides.

    The base is never modified. Nested sections accept a mapping of the
    fields to change, e.g. ``configure(emojis={"next": "▶️"})``.

    Args:
        base: Config to start from (defaults if None).
        **overrides: Field values to replace.

    Returns:
        A new PaginatorConfig.

    Raises:
        ValidationError: If an override is unknown or invalid.
    """
    base = base or PaginatorConfig()
    known = {f.name for f in fields(PaginatorConfig)}

    changes: dict[str, Any] = {}
    for name, value in overrides.items():
        if name not in known:
            raise ValidationError(name, value, f"one of: {', '.join(sorted(known))}")
        current = getattr(base, name)
        if isinstance(value, dict) and name in ("emojis", "messages", "limits"):
            try:
                value = replace(current, **value)
            except TypeError as e:
                raise ValidationError(name, value, f"fields of {type(current).__name__}") from e
        changes[name] = value

    if "after_timeout" in changes:
        changes["after_timeout"] = validate_after_timeout(changes["after_timeout"])
    if "button_style" in changes:
        changes["button_style"] = validate_button_style(changes["button_style"])

    return replace(base, **changes).validate()


@dataclass
class ServerConfig:
    """Configuration for the mesh pager server.

    Attributes:
        paginator: Settings for each paginated session.
        pages_file: Text file whose contents are paged.
        max_message_size: Maximum characters per mesh message.
        connection_type: Meshtastic connection type (serial, ble, tcp).
        device: Device path, BLE address, or hostname.
        ack_timeout_seconds: Seconds to wait for a delivery ACK.
    """

    paginator: PaginatorConfig = field(default_factory=PaginatorConfig)
    pages_file: str | None = None
    max_message_size: int = 230
    connection_type: str = "serial"
    device: str | None = None
    ack_timeout_seconds: float = 30.0

    def get_pages_path(self) -> Path | None:
        """Get the pages file as an expanded Path object."""
        if self.pages_file is None:
            return None
        return Path(self.pages_file).expanduser()


def load_config(path: str | Path) -> ServerConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        ServerConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If a paginator setting is invalid.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Extract sections
    pagination = data.get("pagination", {})
    emojis = data.get("emojis", {})
    messages = data.get("messages", {})
    meshtastic = data.get("meshtastic", {})
    server = data.get("server", {})

    overrides: dict[str, Any] = dict(pagination)
    if emojis:
        overrides["emojis"] = emojis
    if messages:
        overrides["messages"] = messages

    return ServerConfig(
        paginator=configure(**overrides),
        pages_file=server.get("pages_file", ServerConfig.pages_file),
        max_message_size=server.get("max_message_size", ServerConfig.max_message_size),
        connection_type=meshtastic.get("connection_type", ServerConfig.connection_type),
        device=meshtastic.get("device", ServerConfig.device),
        ack_timeout_seconds=meshtastic.get("ack_timeout_seconds", ServerConfig.ack_timeout_seconds),
    )
