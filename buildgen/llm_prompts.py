from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from buildgen.blocks import ALLOWED_BLOCKS
from buildgen.dimensions import BuildLimits
from buildgen.errors import ConfigurationError

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates" / "prompts"
TEMPLATES: Tuple[str, ...] = ("simple", "rich_directional")

# Prompts are plain text, so no autoescape
_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    undefined=StrictUndefined,
    autoescape=False,
    trim_blocks=False,
    enable_async=False,
)


def build_prompt(
    prompt: str,
    limits: BuildLimits,
    template: str = "simple",
    allowed_blocks: Optional[Iterable[str]] = None,
) -> str:
    """
    Render the instruction sent to the model. Pure function of its arguments:
    the same (prompt, limits, template, blocks) always renders the same text.
    """
    if template not in TEMPLATES:
        raise ConfigurationError(f"unknown prompt template '{template}'", context={"known": list(TEMPLATES)})
    try:
        tpl = _env.get_template(f"{template}.txt.j2")
    except TemplateNotFound as exc:
        raise ConfigurationError(f"prompt template file missing for '{template}'") from exc
    blocks = sorted(ALLOWED_BLOCKS if allowed_blocks is None else allowed_blocks)
    return tpl.render(
        prompt=(prompt or "").strip(),
        max_dim=limits.max_dim,
        width=limits.width,
        depth=limits.depth,
        height=limits.height,
        allowed_blocks=blocks,
    ).strip() + "\n"
