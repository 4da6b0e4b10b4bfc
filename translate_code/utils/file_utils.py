"""
File helpers for the command-line interface
"""
import re
from pathlib import Path
from typing import Optional


def get_unique_output_path(output_path):
    """
    Generate a unique output path by adding a number suffix if the file already exists.

    Args:
        output_path (str): Desired output path

    Returns:
        str: Unique output path (original or with numeric suffix)

    Examples:
        page.html -> page.html (if doesn't exist)
        page.html -> page (1).html (if page.html exists)
        page.html -> page (2).html (if page.html and page (1).html exist)
    """
    path = Path(output_path)

    if not path.exists():
        return output_path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix

    counter = 1
    while True:
        new_path = parent / f"{stem} ({counter}){suffix}"
        if not new_path.exists():
            return str(new_path)
        counter += 1


def language_slug(language: str) -> str:
    """'Brazilian Portuguese' -> 'brazilian_portuguese'; non-Latin names are kept"""
    return re.sub(r"[\s/\\]+", "_", language.strip().lower())


def build_output_path(input_path: str, target_language: str,
                      output_path: Optional[str] = None, multiple: bool = False) -> str:
    """
    Output file for one target language.

    Without an explicit output path: `<base>_translated_<lang><ext>`.
    With one, it is used as-is for a single language, or suffixed with
    `_<lang>` when several languages are written.
    """
    slug = language_slug(target_language)
    if output_path is None:
        base, ext = _split_ext(input_path)
        return f"{base}_translated_{slug}{ext}"
    if not multiple:
        return output_path
    base, ext = _split_ext(output_path)
    return f"{base}_{slug}{ext}"


def _split_ext(path: str):
    p = Path(path)
    return str(p.with_suffix("")), p.suffix or ".html"
