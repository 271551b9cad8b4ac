import copy
import logging

import pytest

from buildgen.dimensions import BuildLimits
from buildgen.errors import StructureValidationError
from buildgen.fallback import get_fallback_structure
from buildgen.sanitize import SanitizeMode, sanitize

LIMITS = BuildLimits(width=32, depth=32, height=128)


def _valid_structure():
    return {
        "size": [3, 2, 2],
        "palette": {"_": "minecraft:air", "A": "minecraft:cobblestone", "B": "minecraft:oak_planks"},
        "layers": {
            "0": [["A", "A", "A"], ["A", "A", "A"]],
            "1": [["B", "_", "B"], ["B", "B", "B"]],
        },
    }


def _oversized():
    doc = _valid_structure()
    doc["size"] = [40, 10, 5]
    return doc


def _bad_block():
    doc = _valid_structure()
    doc["palette"]["X"] = "minecraft:unobtainium"
    return doc


def test_fallback_passes_strict_and_keeps_air():
    out = sanitize(get_fallback_structure(), LIMITS, SanitizeMode.STRICT)
    assert out["palette"]["_"] == "minecraft:air"
    assert out == get_fallback_structure()


def test_fallback_passes_lenient():
    out = sanitize(get_fallback_structure(), LIMITS, "lenient")
    assert out["palette"]["_"] == "minecraft:air"


def test_strict_rejects_oversized_width():
    with pytest.raises(StructureValidationError) as exc:
        sanitize(_oversized(), LIMITS, "strict")
    assert "size x=40" in str(exc.value)
    assert "32" in str(exc.value)


def test_strict_rejects_height_over_limit():
    doc = _valid_structure()
    doc["size"] = [3, 200, 2]
    with pytest.raises(StructureValidationError) as exc:
        sanitize(doc, LIMITS, "strict")
    assert "y=200" in str(exc.value)


def test_strict_rejects_unknown_block_and_names_it():
    with pytest.raises(StructureValidationError) as exc:
        sanitize(_bad_block(), LIMITS, "strict")
    assert "minecraft:unobtainium" in str(exc.value)
    assert any("unobtainium" in e["message"] for e in exc.value.errors)


def test_strict_accepts_block_state_suffix():
    doc = _valid_structure()
    doc["palette"]["D"] = "minecraft:oak_door[facing=south,half=lower]"
    out = sanitize(doc, LIMITS, "strict")
    assert out["palette"]["D"] == "minecraft:oak_door[facing=south,half=lower]"


@pytest.mark.parametrize("make", [_oversized, _bad_block])
def test_lenient_only_injects_air(make):
    doc = make()
    del doc["palette"]["_"]
    expected = copy.deepcopy(doc)
    expected["palette"]["_"] = "minecraft:air"

    out = sanitize(doc, LIMITS, "lenient")
    assert out == expected


def test_lenient_logs_content_problems(caplog):
    with caplog.at_level(logging.WARNING, logger="buildgen.sanitize"):
        sanitize(_bad_block(), LIMITS, "lenient")
    assert "unobtainium" in caplog.text


def test_valid_structure_round_trips_unchanged_in_strict_mode():
    doc = _valid_structure()
    before = copy.deepcopy(doc)
    out = sanitize(doc, LIMITS, "strict")
    assert out is doc
    assert out == before


def test_air_key_injected_when_missing():
    doc = _valid_structure()
    del doc["palette"]["_"]
    out = sanitize(doc, LIMITS, "strict")
    assert out["palette"]["_"] == "minecraft:air"


@pytest.mark.parametrize("mode", ["strict", "lenient"])
@pytest.mark.parametrize("blank", ["", "   ", None])
def test_blank_air_entry_is_repaired_not_rejected(mode, blank):
    doc = {"size": [1, 1, 1], "palette": {"_": blank, "A": "minecraft:stone"}, "layers": {"0": [["A"]]}}
    out = sanitize(doc, LIMITS, mode)
    assert out["palette"] == {"_": "minecraft:air", "A": "minecraft:stone"}


def test_strict_rejects_depth_over_limit():
    doc = _valid_structure()
    doc["size"] = [3, 2, 40]
    with pytest.raises(StructureValidationError) as exc:
        sanitize(doc, LIMITS, "strict")
    assert "z=40" in str(exc.value)


def test_air_allowed_even_with_custom_block_list():
    doc = _valid_structure()
    del doc["palette"]["_"]
    out = sanitize(doc, LIMITS, "strict", allowed_blocks={"minecraft:cobblestone", "minecraft:oak_planks"})
    assert out["palette"]["_"] == "minecraft:air"


@pytest.mark.parametrize("mode", ["strict", "lenient"])
@pytest.mark.parametrize("field", ["size", "palette", "layers"])
def test_missing_required_field_is_fatal_in_both_modes(mode, field):
    doc = _valid_structure()
    del doc[field]
    with pytest.raises(StructureValidationError) as exc:
        sanitize(doc, LIMITS, mode)
    assert "size/palette/layers" in str(exc.value)
    assert any(field in e["path"] for e in exc.value.errors)


def test_wrongly_typed_size_is_fatal_even_when_lenient():
    doc = _valid_structure()
    doc["size"] = [3, "tall", 2]
    with pytest.raises(StructureValidationError):
        sanitize(doc, LIMITS, "lenient")


def test_non_object_payload_is_rejected():
    with pytest.raises(StructureValidationError):
        sanitize(["not", "a", "structure"], LIMITS, "lenient")


def test_layer_count_mismatch_is_only_a_warning(caplog):
    doc = _valid_structure()
    doc["size"] = [3, 5, 2]
    with caplog.at_level(logging.WARNING, logger="buildgen.sanitize"):
        out = sanitize(doc, LIMITS, "strict")
    assert out["size"] == [3, 5, 2]
    assert "layer count 2 does not match height 5" in caplog.text


def test_integer_layer_keys_are_accepted():
    doc = _valid_structure()
    doc["layers"] = {0: doc["layers"]["0"], 1: doc["layers"]["1"]}
    out = sanitize(doc, LIMITS, "strict")
    assert set(out["layers"]) == {0, 1}


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        sanitize(_valid_structure(), LIMITS, "sloppy")


def test_strict_rejects_malformed_block_state():
    doc = _valid_structure()
    doc["palette"]["D"] = "minecraft:oak_door[facing]"
    with pytest.raises(StructureValidationError) as exc:
        sanitize(doc, LIMITS, "strict")
    assert "minecraft:oak_door[facing]" in str(exc.value)
    assert "malformed block property" in str(exc.value)


def test_lenient_logs_malformed_block_state(caplog):
    doc = _valid_structure()
    doc["palette"]["D"] = "minecraft:oak_door[facing]"
    with caplog.at_level(logging.WARNING, logger="buildgen.sanitize"):
        out = sanitize(doc, LIMITS, "lenient")
    assert out["palette"]["D"] == "minecraft:oak_door[facing]"
    assert "malformed block property" in caplog.text
