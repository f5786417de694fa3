"""Tests for status response decoding"""

import json

import pytest

from slpstatus.core.errors import (
    DecodeError,
    ErrorKind,
    InvalidIconError,
    MalformedJsonError,
    MalformedModEntryError,
    MissingFieldError,
    TypeMismatchError,
)
from slpstatus.core.status import (
    DecodedStatus,
    SampledPlayer,
    StatusRecord,
    decode_status,
    encode_status,
    try_decode_status,
)
from slpstatus.mods.modinfo import ModEntry, ModListExtension

from .conftest import favicon, png_bytes

SCENARIO = (
    '{"version":{"name":"1.8","protocol":47},"players":{"max":20,"online":5},'
    '"description":{"text":"Hi"}}'
)


class TestDecodeBasics:
    def test_minimal_scenario(self):
        decoded = decode_status(SCENARIO)
        status = decoded.status
        assert status.version.name == "1.8"
        assert status.version.protocol == 47
        assert status.players.max == 20
        assert status.players.online == 5
        assert status.players.sample == ()
        assert status.icon is None
        assert status.description.text == "Hi"
        assert decoded.mod_info is None
        assert not decoded.is_modded

    def test_online_may_exceed_max(self, make_raw):
        decoded = decode_status(make_raw(players={"max": 1, "online": 50}))
        assert decoded.status.players.online == 50

    def test_sample_order_preserved(self, make_raw):
        sample = [{"id": "a", "name": "Alice"}, {"id": "b", "name": "Bob"}]
        decoded = decode_status(make_raw(players={"max": 20, "online": 2, "sample": sample}))
        assert [p.name for p in decoded.status.players.sample] == ["Alice", "Bob"]
        assert decoded.status.players.sample[0] == SampledPlayer(id="a", name="Alice")

    def test_empty_sample(self, make_raw):
        decoded = decode_status(make_raw(players={"max": 20, "online": 0, "sample": []}))
        assert decoded.status.players.sample == ()

    def test_string_description(self, make_raw):
        decoded = decode_status(make_raw(description="§aA Minecraft Server"))
        assert decoded.status.description.to_plain_text() == "A Minecraft Server"

    def test_unknown_keys_ignored(self, make_raw):
        raw = make_raw(enforcesSecureChat=True, forgeData={"channels": []})
        assert decode_status(raw).status.version.protocol == 47

    def test_idempotent(self, make_raw, forge_modinfo):
        raw = make_raw(favicon=favicon(), modinfo=forge_modinfo)
        assert decode_status(raw) == decode_status(raw)

    def test_records_are_immutable(self):
        decoded = decode_status(SCENARIO)
        with pytest.raises(ValueError):
            decoded.status.version.protocol = 5  # type: ignore[misc]


class TestDecodeRequiredFields:
    def test_malformed_json(self):
        with pytest.raises(MalformedJsonError) as exc:
            decode_status('{"version": ')
        assert exc.value.kind is ErrorKind.MALFORMED_JSON

    def test_root_must_be_object(self):
        with pytest.raises(TypeMismatchError) as exc:
            decode_status("[1, 2]")
        assert exc.value.field == "(root)"

    @pytest.mark.parametrize("key", ["version", "players", "description"])
    def test_missing_top_level(self, make_raw, key):
        with pytest.raises(MissingFieldError) as exc:
            decode_status(make_raw(**{key: None}))
        assert exc.value.field == key

    def test_missing_nested(self, make_raw):
        with pytest.raises(MissingFieldError) as exc:
            decode_status(make_raw(version={"name": "1.8"}))
        assert exc.value.field == "version.protocol"

    @pytest.mark.parametrize(
        "version",
        [
            {"name": "1.8", "protocol": "47"},
            {"name": "1.8", "protocol": 47.5},
            {"name": "1.8", "protocol": True},
            {"name": 1.8, "protocol": 47},
        ],
    )
    def test_mistyped_version(self, make_raw, version):
        with pytest.raises(TypeMismatchError) as exc:
            decode_status(make_raw(version=version))
        assert exc.value.field.startswith("version.")

    def test_version_not_object(self, make_raw):
        with pytest.raises(TypeMismatchError) as exc:
            decode_status(make_raw(version="1.8"))
        assert exc.value.field == "version"

    def test_protocol_outside_int32(self, make_raw):
        with pytest.raises(TypeMismatchError):
            decode_status(make_raw(version={"name": "x", "protocol": 2**31}))

    def test_negative_player_count(self, make_raw):
        with pytest.raises(TypeMismatchError) as exc:
            decode_status(make_raw(players={"max": 20, "online": -1}))
        assert exc.value.field == "players.online"

    def test_sample_not_array(self, make_raw):
        with pytest.raises(TypeMismatchError) as exc:
            decode_status(make_raw(players={"max": 1, "online": 1, "sample": "Alice"}))
        assert exc.value.field == "players.sample"

    def test_sample_entry_missing_name(self, make_raw):
        players = {"max": 1, "online": 1, "sample": [{"id": "a"}]}
        with pytest.raises(MissingFieldError) as exc:
            decode_status(make_raw(players=players))
        assert exc.value.field == "players.sample.0.name"

    def test_null_description(self):
        raw = SCENARIO.replace('{"text":"Hi"}', "null")
        with pytest.raises(TypeMismatchError) as exc:
            decode_status(raw)
        assert exc.value.field == "description"

    def test_first_failure_reported(self, make_raw):
        with pytest.raises(MissingFieldError) as exc:
            decode_status(make_raw(version=None, favicon="not base64!"))
        assert exc.value.field == "version"


class TestDecodeFavicon:
    def test_icon_with_prefix(self, make_raw):
        decoded = decode_status(make_raw(favicon=favicon()))
        icon = decoded.status.icon
        assert icon is not None
        assert (icon.width, icon.height) == (64, 64)
        assert icon.data == png_bytes()

    def test_prefix_is_optional(self, make_raw):
        with_prefix = decode_status(make_raw(favicon=favicon(prefix=True)))
        without_prefix = decode_status(make_raw(favicon=favicon(prefix=False)))
        assert with_prefix == without_prefix

    @pytest.mark.parametrize("size", [(32, 32), (64, 32), (128, 64)])
    def test_wrong_size_fails(self, make_raw, size):
        with pytest.raises(InvalidIconError) as exc:
            decode_status(make_raw(favicon=favicon(*size)))
        assert exc.value.kind is ErrorKind.INVALID_ICON

    def test_bad_base64_fails(self, make_raw):
        with pytest.raises(InvalidIconError):
            decode_status(make_raw(favicon="data:image/png;base64,@@@@"))

    def test_not_a_string_fails(self, make_raw):
        with pytest.raises(TypeMismatchError) as exc:
            decode_status(make_raw(favicon=12))
        assert exc.value.field == "favicon"

    def test_explicit_null_fails(self):
        raw = SCENARIO[:-1] + ',"favicon":null}'
        with pytest.raises(TypeMismatchError):
            decode_status(raw)


class TestDecodeModInfo:
    def test_forge_scenario(self, make_raw):
        raw = make_raw(modinfo={"type": "FML", "modList": [{"modid": "forge", "version": "14.23"}]})
        decoded = decode_status(raw)
        assert decoded.is_modded
        assert decoded.mod_info.type == "FML"
        assert [(m.mod_id, m.version) for m in decoded.mod_info.mod_list] == [("forge", "14.23")]

    def test_mod_order_preserved(self, make_raw, forge_modinfo):
        decoded = decode_status(make_raw(modinfo=forge_modinfo))
        assert [m.mod_id for m in decoded.mod_info.mod_list] == ["minecraft", "forge", "jei"]

    @pytest.mark.parametrize(
        "entry",
        [{"version": "1.0"}, {"modid": "jei"}, {"modid": "", "version": "1.0"}, "jei"],
    )
    def test_malformed_entry_aborts_decode(self, make_raw, forge_modinfo, entry):
        forge_modinfo["modList"].append(entry)
        with pytest.raises(MalformedModEntryError) as exc:
            decode_status(make_raw(modinfo=forge_modinfo))
        assert exc.value.index == 3

    def test_modinfo_missing_type(self, make_raw):
        with pytest.raises(MissingFieldError) as exc:
            decode_status(make_raw(modinfo={"modList": []}))
        assert exc.value.field == "modinfo.type"

    def test_modinfo_not_object(self, make_raw):
        with pytest.raises(TypeMismatchError):
            decode_status(make_raw(modinfo=["forge"]))


class TestTryDecode:
    def test_success(self):
        ok, decoded, error = try_decode_status(SCENARIO)
        assert ok
        assert isinstance(decoded, DecodedStatus)
        assert error is None

    def test_failure_does_not_raise(self):
        ok, decoded, error = try_decode_status("not json")
        assert not ok
        assert decoded is None
        assert error.startswith("Malformed JSON")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            decode_status("")
        assert issubclass(DecodeError, ValueError)


class TestEncode:
    def test_encode_minimal(self):
        data = json.loads(encode_status(decode_status(SCENARIO)))
        assert data == {
            "version": {"name": "1.8", "protocol": 47},
            "players": {"max": 20, "online": 5},
            "description": "Hi",
        }

    def test_encode_then_decode(self, make_raw, forge_modinfo):
        players = {"max": 20, "online": 1, "sample": [{"id": "a", "name": "Alice"}]}
        decoded = decode_status(
            make_raw(players=players, favicon=favicon(), modinfo=forge_modinfo)
        )
        assert decode_status(encode_status(decoded)) == decoded


def _nested_extra(levels: int) -> dict:
    component: dict = {"text": "x"}
    for _ in range(levels):
        component = {"text": "x", "extra": [component]}
    return component


class TestHostileInput:
    def test_deeply_nested_json(self):
        with pytest.raises(MalformedJsonError):
            decode_status("[" * 5000)

    def test_deeply_nested_json_object(self):
        with pytest.raises(MalformedJsonError):
            decode_status('{"a":' * 100000)

    def test_deeply_nested_description(self, make_raw):
        with pytest.raises(TypeMismatchError) as exc:
            decode_status(make_raw(description=_nested_extra(300)))
        assert exc.value.field == "description"

    def test_moderately_nested_description(self, make_raw):
        decoded = decode_status(make_raw(description=_nested_extra(20)))
        assert decoded.status.description.to_plain_text() == "x" * 21

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_literals(self, literal):
        raw = SCENARIO.replace('{"text":"Hi"}', literal)
        with pytest.raises(MalformedJsonError):
            decode_status(raw)


class TestFieldNames:
    def test_rebuild_record_by_field_name(self, make_raw):
        status = decode_status(make_raw(favicon=favicon())).status
        rebuilt = StatusRecord(
            version=status.version,
            players=status.players,
            description=status.description,
            icon=status.icon,
        )
        assert rebuilt.icon == status.icon
        assert rebuilt == status

    def test_field_name_is_not_a_wire_key(self, make_raw):
        decoded = decode_status(make_raw(icon=favicon()))
        assert decoded.status.icon is None

    def test_rebuild_mod_list_by_field_name(self, make_raw, forge_modinfo):
        mod_info = decode_status(make_raw(modinfo=forge_modinfo)).mod_info
        rebuilt = ModListExtension(
            type=mod_info.type,
            mod_list=[ModEntry(mod_id=m.mod_id, version=m.version) for m in mod_info.mod_list],
        )
        assert rebuilt == mod_info

    def test_mod_field_names_are_not_wire_keys(self, make_raw):
        modinfo = {"type": "FML", "modList": [{"mod_id": "forge", "version": "14.23"}]}
        with pytest.raises(MalformedModEntryError):
            decode_status(make_raw(modinfo=modinfo))
