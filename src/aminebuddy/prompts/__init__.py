"""Prompt files.

``system.txt`` ships with the package. A ``prompts/system.txt`` in the
working directory replaces it, so the persona can be edited without a
release.
"""

from functools import lru_cache
from pathlib import Path

PACKAGE_DIR = Path(__file__).parent


def prompt_locations(name: str) -> tuple[Path, ...]:
    """Candidate files for a prompt, highest priority first."""
    filename = f"{name}.txt"
    return Path.cwd() / "prompts" / filename, PACKAGE_DIR / filename


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Read a prompt by name (without the .txt extension).

    Raises:
        FileNotFoundError: If no candidate file exists
    """
    candidates = prompt_locations(name)
    for path in candidates:
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()

    searched = ", ".join(str(p) for p in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found (searched {searched})")


def get_system_prompt() -> str:
    """Persona and answering rules of the portfolio agent."""
    return load_prompt("system")


__all__ = [
    "get_system_prompt",
    "load_prompt",
    "prompt_locations",
]
