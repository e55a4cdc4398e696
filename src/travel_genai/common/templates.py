"""Prompt templating helpers."""
from __future__ import annotations
from pathlib import Path
from typing import Mapping

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

def load_template(name: str, directory: Path = PROMPTS_DIR) -> str:
    """
    Load a prompt template shipped with the package.

    Args:
        name: Template name without extension, e.g. "weather".
        directory: Folder holding the `.txt` templates.
    """
    return (directory / f"{name}.txt").read_text(encoding="utf-8")

def render_prompt(template: str, values: Mapping[str, object]) -> str:
    """
    Render values into the template.

    Args:
        template: Template content containing {{name}} placeholders.
        values: Placeholder name to value.

    Returns:
        Rendered prompt.
    """
    out = template
    for key, value in values.items():
        out = out.replace("{{" + key + "}}", str(value))
    return out
