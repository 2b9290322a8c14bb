"""Tests for CommandRegistry."""

from typing import ClassVar

import pytest

from devlink.codec.message import U8, WireMessage
from devlink.codec.registry import COMMAND_TYPES, CommandRegistry, create_default_registry
from devlink.exceptions import InvalidDataError, ShortReadError, UnknownCommandError
from devlink.models.messages import (
    ALL_MESSAGE_TYPES,
    BatchCommand,
    BatchResponse,
    PingCommand,
    PingResponse,
    SensorDataResponse,
    SetConfigResponse,
)


class EchoCommand(WireMessage):
    """Test message outside the built-in catalog."""

    COMMAND_ID: ClassVar[int] = 0x20

    value: U8

    def write_to(self, writer):
        writer.write_u8(self.value)

    @classmethod
    def read_from(cls, reader):
        return cls(value=reader.read_u8())


class TestCommandRegistry:
    """Tests for CommandRegistry class."""

    @pytest.fixture
    def registry(self):
        """Create a registry with the built-in messages."""
        return create_default_registry()

    def test_default_registry_has_catalog(self, registry):
        """Test that all 11 messages are registered."""
        assert len(registry) == 11
        assert registry.registered_ids == frozenset(cls.COMMAND_ID for cls in ALL_MESSAGE_TYPES)

    def test_get(self, registry):
        """Test looking up types by identifier."""
        assert registry.get(0x01) is PingCommand
        assert registry.get(0x90) is BatchResponse
        assert registry.get(0x7E) is None

    def test_has(self, registry):
        """Test membership checks."""
        assert registry.has(0x10)
        assert 0x85 in registry
        assert not registry.has(0x05)

    def test_decode(self, registry):
        """Test dispatching a payload by identifier."""
        message = registry.decode(0x01, bytes.fromhex("0100000000000000"))
        assert message == PingCommand(timestamp=1)

    def test_decode_unknown(self, registry):
        """Test that an unregistered identifier raises UnknownCommandError."""
        with pytest.raises(UnknownCommandError) as exc_info:
            registry.decode(0x7E, b"")
        assert exc_info.value.command_id == 0x7E
        assert "0x7E" in str(exc_info.value)

    def test_decode_errors_propagate(self, registry):
        """Test that payload errors reach the caller unchanged."""
        with pytest.raises(ShortReadError):
            registry.decode(0x84, b"\x01")

    def test_decode_exact(self, registry):
        """Test that exact decoding is forwarded to the message type."""
        padded = bytes.fromhex("0103" "0000")
        assert registry.decode(0x84, padded) == SetConfigResponse(success=True, error_code=3)
        with pytest.raises(InvalidDataError):
            registry.decode(0x84, padded, exact=True)

    def test_command_id_for(self, registry):
        """Test identifier lookup by instance or type."""
        assert registry.command_id_for(PingCommand(timestamp=1)) == 0x01
        assert registry.command_id_for(BatchCommand) == 0x10

    def test_command_id_for_unregistered(self, registry):
        """Test identifier lookup for a type not in the registry."""
        with pytest.raises(UnknownCommandError):
            registry.command_id_for(EchoCommand)

    def test_response_type_for(self, registry):
        """Test command/response pairing."""
        assert registry.response_type_for(PingCommand) is PingResponse
        assert registry.response_type_for(BatchCommand(commands=())) is BatchResponse

    def test_response_type_for_unpaired(self, registry):
        """Test that responses and SensorDataResponse have no pair."""
        assert registry.response_type_for(SensorDataResponse) is None
        assert registry.response_type_for(SetConfigResponse) is None

    def test_register_custom(self, registry):
        """Test registering an additional message type."""
        registry.register(EchoCommand)
        assert registry.decode(0x20, b"\x05") == EchoCommand(value=5)

    def test_register_replaces(self):
        """Test that registering the same identifier replaces the type."""

        class OtherPing(EchoCommand):
            COMMAND_ID: ClassVar[int] = 0x01

        registry = create_default_registry()
        registry.register(OtherPing)
        assert registry.get(0x01) is OtherPing
        assert len(registry) == 11

    def test_unregister(self, registry):
        """Test removing a registration."""
        assert registry.unregister(0x01)
        assert not registry.has(0x01)
        assert not registry.unregister(0x01)

    def test_clear(self, registry):
        """Test removing all registrations."""
        registry.clear()
        assert len(registry) == 0

    def test_empty_registry(self):
        """Test a new registry is empty."""
        registry = CommandRegistry()
        assert registry.registered_ids == frozenset()

    def test_repr(self):
        """Test string representation."""
        registry = CommandRegistry()
        registry.register(PingCommand)
        registry.register(PingResponse)
        assert repr(registry) == "CommandRegistry([0x01, 0x81])"


class TestDefaultCatalog:
    """Tests for the static catalog."""

    def test_fresh_registries(self):
        """Test that each call returns an independent registry."""
        first = create_default_registry()
        second = create_default_registry()
        first.clear()
        assert len(second) == 11

    def test_catalog_read_only(self):
        """Test that the static catalog cannot be modified."""
        with pytest.raises(TypeError):
            COMMAND_TYPES[0x20] = EchoCommand

    def test_catalog_contents(self):
        """Test the catalog maps identifiers to their types."""
        for command_id, message_cls in COMMAND_TYPES.items():
            assert message_cls.COMMAND_ID == command_id
