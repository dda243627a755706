"""Tests for contracts enums."""

import pytest

from foldkit.contracts import Characteristic, OpenOption, SinkState


class TestCharacteristic:
    """Tests for Characteristic enum."""

    def test_has_exactly_two_flags(self) -> None:
        assert {c.name for c in Characteristic} == {"IDENTITY_FINISH", "UNORDERED"}

    def test_is_str_enum(self) -> None:
        assert Characteristic.UNORDERED == "unordered"
        assert Characteristic("identity_finish") is Characteristic.IDENTITY_FINISH

    def test_invalid_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            Characteristic("concurrent")


class TestSinkState:
    """Tests for SinkState enum."""

    @pytest.mark.parametrize("state", [SinkState.FINISHED, SinkState.FAILED, SinkState.ABORTED])
    def test_terminal_states(self, state: SinkState) -> None:
        assert state.is_terminal

    @pytest.mark.parametrize("state", [SinkState.OPEN, SinkState.WRITING])
    def test_live_states(self, state: SinkState) -> None:
        assert not state.is_terminal


class TestOpenOption:
    """Tests for OpenOption enum."""

    def test_values_are_lowercase_names(self) -> None:
        for option in OpenOption:
            assert option.value == option.name.lower()
