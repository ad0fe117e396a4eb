"""Prompt templating: ``{{ variable }}`` substitution for agent prompts."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Tuple

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"{{\s*(\w+)\s*}}")


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    system_prompt: str
    user_prompt_template: str
    variables: List[str] = field(default_factory=list)


def build_prompt(template: str, variables: Mapping[str, Any]) -> str:
    """Substitute ``{{ name }}`` placeholders in *template*.

    ``None`` values render as an empty string.  Placeholders with no
    matching variable are left in place and logged.
    """

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        value = variables[key]
        return "" if value is None else str(value)

    prompt = _PLACEHOLDER.sub(_replace, template)

    unreplaced = _PLACEHOLDER.findall(prompt)
    if unreplaced:
        logger.warning("Unreplaced template variables found: %s", unreplaced)
    return prompt


def build_from_template(
    template: PromptTemplate, variables: Mapping[str, Any]
) -> Tuple[str, str]:
    """Render *template* into ``(system_prompt, user_prompt)``.

    Raises:
        ValueError: If a variable listed in ``template.variables`` is missing.
    """
    missing = [name for name in template.variables if name not in variables]
    if missing:
        raise ValueError(f"Missing required variables: {', '.join(missing)}")
    return (
        build_prompt(template.system_prompt, variables),
        build_prompt(template.user_prompt_template, variables),
    )


def estimate_tokens(text: str) -> int:
    """Rough token count (~4 characters per token)."""
    return math.ceil(len(text) / 4)
