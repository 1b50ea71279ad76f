"""Message transport implementations."""

from .discord_transport import DiscordTransport
from .meshtastic_transport import MeshtasticTransport, NodeTransport
from .text_layout import TextLayout

__all__ = ["DiscordTransport", "MeshtasticTransport", "NodeTransport", "TextLayout"]
