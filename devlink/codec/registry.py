"""
Command registry mapping command identifiers to message types.

A frame header names its payload only by a one-byte command identifier.
The registry resolves that byte to a WireMessage subclass so a receiver can
decode any payload through the shared ``decode`` capability, without
branching on concrete types.

The built-in catalog is exposed read-only as ``COMMAND_TYPES``. Mutable
registries are created per caller with ``create_default_registry()``; no
registry is shared at module level.

Example:
    >>> registry = create_default_registry()
    >>> registry.decode(0x01, bytes.fromhex("0100000000000000"))
    PingCommand(timestamp=1)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from devlink.codec.message import WireMessage
from devlink.exceptions import UnknownCommandError
from devlink.models.messages import ALL_MESSAGE_TYPES
from devlink.protocol.constants import RESPONSE_FOR_COMMAND

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Registry of message types keyed by command identifier.

    Uniqueness of identifiers is a property of the message catalog; the
    registry does not check it. Registering a type whose identifier is
    already present replaces the earlier registration.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._types: dict[int, type[WireMessage]] = {}

    def register(self, message_cls: type[WireMessage]) -> None:
        """
        Register a message type under its COMMAND_ID.

        Args:
            message_cls: WireMessage subclass to register.

        Note:
            Replaces any existing type for the same command identifier.
        """
        self._types[message_cls.COMMAND_ID] = message_cls

    def get(self, command_id: int) -> type[WireMessage] | None:
        """
        Get the message type for a command identifier.

        Args:
            command_id: Header command identifier.

        Returns:
            Message type if registered, None otherwise.
        """
        return self._types.get(command_id)

    def has(self, command_id: int) -> bool:
        """Check if a message type is registered for command_id."""
        return command_id in self._types

    def command_id_for(self, message: WireMessage | type[WireMessage]) -> int:
        """
        Get the command identifier of a message or message type.

        Raises:
            UnknownCommandError: If the type is not registered here.
        """
        message_cls = message if isinstance(message, type) else type(message)
        command_id = message_cls.COMMAND_ID
        if self._types.get(command_id) is not message_cls:
            raise UnknownCommandError(command_id)
        return command_id

    def response_type_for(self, message: WireMessage | type[WireMessage]) -> type[WireMessage] | None:
        """
        Get the response type paired with a command.

        Returns:
            The registered response type, or None if the command has no
            paired response or the response is not registered.
        """
        message_cls = message if isinstance(message, type) else type(message)
        response_id = RESPONSE_FOR_COMMAND.get(message_cls.COMMAND_ID)
        if response_id is None:
            return None
        return self._types.get(response_id)

    def decode(
        self,
        command_id: int,
        payload: bytes | bytearray | memoryview,
        *,
        exact: bool = False,
    ) -> WireMessage:
        """
        Decode a payload as the message type registered for command_id.

        Args:
            command_id: Header command identifier.
            payload: Payload bytes of the frame.
            exact: Reject bytes remaining after the last field.

        Returns:
            Decoded message.

        Raises:
            UnknownCommandError: If no type is registered for command_id.
            ProtocolError: If the payload does not decode.
        """
        message_cls = self._types.get(command_id)
        if message_cls is None:
            raise UnknownCommandError(command_id)
        logger.debug(
            "Decoding %d-byte payload as %s (0x%02X)",
            len(payload),
            message_cls.__name__,
            command_id,
        )
        return message_cls.decode(payload, exact=exact)

    @property
    def registered_ids(self) -> frozenset[int]:
        """Get all command identifiers with registered types."""
        return frozenset(self._types.keys())

    def unregister(self, command_id: int) -> bool:
        """
        Remove a registration.

        Args:
            command_id: Command identifier to unregister.

        Returns:
            True if a type was removed, False if none was registered.
        """
        if command_id in self._types:
            del self._types[command_id]
            return True
        return False

    def clear(self) -> None:
        """Remove all registered types."""
        self._types.clear()

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._types

    def __repr__(self) -> str:
        ids = ", ".join(f"0x{command_id:02X}" for command_id in sorted(self._types))
        return f"CommandRegistry([{ids}])"


COMMAND_TYPES: Final[Mapping[int, type[WireMessage]]] = MappingProxyType(
    {message_cls.COMMAND_ID: message_cls for message_cls in ALL_MESSAGE_TYPES}
)
"""Read-only catalog of the built-in message types by command identifier."""


def create_default_registry() -> CommandRegistry:
    """
    Create a new registry with all built-in message types registered.

    Returns:
        CommandRegistry holding the 11 catalog messages.
    """
    registry = CommandRegistry()
    for message_cls in COMMAND_TYPES.values():
        registry.register(message_cls)
    return registry
