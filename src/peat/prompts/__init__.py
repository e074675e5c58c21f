"""Prompt management module.

Externalizes the two tutor instruction templates to text files for easy
customization. Prompts can be overridden by placing files in the working
directory.

Each template contains exactly one ``{{ARTICLE}}`` placeholder. Rendering
substitutes the first occurrence only, so an article that itself contains the
placeholder text is inserted verbatim and never rescanned.
"""

from functools import lru_cache
from pathlib import Path

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent

ARTICLE_PLACEHOLDER = "{{ARTICLE}}"

ANALYSIS_PROMPT = "analysis"
CONVERSATION_PROMPT = "conversation"


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: peat/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    # Check working directory first (allows user overrides)
    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8")

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8")

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def render_prompt(template: str, article: str) -> str:
    """Substitute the article into a template.

    Args:
        template: Template text containing the article placeholder
        article: Article text to insert

    Returns:
        Rendered prompt

    Raises:
        ValueError: If the template has no placeholder
    """
    if ARTICLE_PLACEHOLDER not in template:
        raise ValueError(f"Template has no {ARTICLE_PLACEHOLDER} placeholder")
    return template.replace(ARTICLE_PLACEHOLDER, article, 1)


def analysis_prompt(article: str) -> str:
    """Get the analysis instructions for an article."""
    return render_prompt(load_prompt(ANALYSIS_PROMPT), article)


def conversation_prompt(article: str) -> str:
    """Get the conversation instructions for an article."""
    return render_prompt(load_prompt(CONVERSATION_PROMPT), article)


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "ARTICLE_PLACEHOLDER",
    "ANALYSIS_PROMPT",
    "CONVERSATION_PROMPT",
    "analysis_prompt",
    "clear_cache",
    "conversation_prompt",
    "load_prompt",
    "render_prompt",
]
