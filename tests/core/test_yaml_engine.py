# tests/core/test_yaml_engine.py
"""Tests for the YAML payload codec."""

import pytest
from pydantic import BaseModel

from ruletree.contracts import ValueFormatError
from ruletree.core.yaml_engine import marshal, unmarshal


class _Column(BaseModel):
    name: str
    encryptor_name: str | None = None


class _Table(BaseModel):
    columns: dict[str, _Column] = {}


class _Group(BaseModel):
    members: frozenset[str] = frozenset()


class TestMarshal:
    def test_model_keeps_field_order_and_drops_none(self) -> None:
        assert marshal(_Column(name="pwd")) == "name: pwd\n"
        assert marshal(_Column(name="pwd", encryptor_name="aes")) == "name: pwd\nencryptor_name: aes\n"

    def test_list(self) -> None:
        assert marshal(["t_order", "t_user"]) == "- t_order\n- t_user\n"

    def test_nested_models(self) -> None:
        text = marshal(_Table(columns={"pwd": _Column(name="pwd")}))

        assert text == "columns:\n  pwd:\n    name: pwd\n"

    def test_set_members_sorted(self) -> None:
        """Set iteration order varies with the hash seed; output must not."""
        assert marshal({"t_user", "t_order", "t_address"}) == "- t_address\n- t_order\n- t_user\n"
        assert marshal(frozenset({3, 1, 2})) == "- 1\n- 2\n- 3\n"

    def test_set_inside_model_sorted(self) -> None:
        assert marshal(_Group(members=frozenset({"ds_1", "ds_0", "ds_2"}))) == "members:\n- ds_0\n- ds_1\n- ds_2\n"

    def test_sequences_keep_order(self) -> None:
        text = marshal({"b": [_Column(name="b")], "a": (_Column(name="a"),)})

        assert text == "b:\n- name: b\na:\n- name: a\n"

    def test_unserializable_value_rejected(self) -> None:
        with pytest.raises(ValueFormatError, match="Cannot serialize"):
            marshal(object())


class TestUnmarshal:
    def test_model(self) -> None:
        assert unmarshal("name: pwd\nencryptor_name: aes\n", _Column) == _Column(name="pwd", encryptor_name="aes")

    def test_generic_types(self) -> None:
        assert unmarshal("- a\n- b\n", list[str]) == ["a", "b"]
        assert unmarshal("pwd:\n  name: pwd\n", dict[str, _Column]) == {"pwd": _Column(name="pwd")}

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ValueFormatError, match="Invalid YAML"):
            unmarshal("key: [unclosed", list[str])

    def test_shape_mismatch(self) -> None:
        with pytest.raises(ValueFormatError, match="does not match _Column") as exc_info:
            unmarshal("- not\n- a mapping\n", _Column)

        assert exc_info.value.value == "- not\n- a mapping\n"

    def test_marshal_unmarshal_agree_on_nested_models(self) -> None:
        table = _Table(columns={"pwd": _Column(name="pwd", encryptor_name="aes")})

        assert unmarshal(marshal(table), _Table) == table
