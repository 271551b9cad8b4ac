import pytest

from buildgen.dimensions import BuildLimits
from buildgen.errors import ConfigurationError
from buildgen.llm_prompts import TEMPLATES, build_prompt

LIMITS = BuildLimits(width=20, depth=14, height=9)


def test_simple_template_uses_square_limit_and_block_list():
    text = build_prompt("small stone hut", BuildLimits(width=24, depth=24, height=128))
    assert "x and z <= 24, y <= 128" in text
    assert "minecraft:cobblestone" in text
    assert "minecraft:oak_planks" in text
    assert 'Layer "0" is the bottom layer' in text
    assert "outer array represents Z rows" in text
    assert text.rstrip().endswith("User prompt: small stone hut")


def test_rich_template_has_separate_dimensions_and_directional_guidance():
    text = build_prompt("wizard tower", LIMITS, template="rich_directional")
    assert "width (x): about 20 blocks" in text
    assert "depth (z): about 14 blocks" in text
    assert "height (y): at most 9 layers" in text
    assert "hollow and enterable" in text
    assert "[facing=" in text
    assert '"_": "minecraft:air"' in text
    assert "User prompt: wizard tower" in text


@pytest.mark.parametrize("template", TEMPLATES)
def test_prompt_is_a_pure_function(template):
    a = build_prompt("barn", LIMITS, template)
    b = build_prompt("barn", LIMITS, template)
    assert a == b


def test_custom_block_list_is_rendered_sorted():
    text = build_prompt("hut", LIMITS, allowed_blocks=["minecraft:glass", "minecraft:air"])
    assert text.index("minecraft:air") < text.index("minecraft:glass")
    assert "minecraft:cobblestone" not in text


def test_unknown_template_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_prompt("hut", LIMITS, template="baroque")
