# services/snippets/label_parser.py
"""
Parse a code block label such as ``"utils.ts Helper functions"`` into a
``SnippetLabel`` and decide whether the snippet is in the target language.
"""

from typing import Iterable, Optional

from models.snippet import SnippetLabel

from .exceptions import MissingLabelError

DEFAULT_TARGET_EXTENSIONS = frozenset({"ts", "tsx"})


def file_extension(filename: str) -> Optional[str]:
    """Return the text after the last ``.``, or ``None`` when there is none."""
    parts = filename.split(".")
    if len(parts) < 2:
        return None
    return parts[-1]


def identify(
    label: Optional[str],
    target_extensions: Iterable[str] = DEFAULT_TARGET_EXTENSIONS,
    attribute: str = "aria-label",
) -> SnippetLabel:
    """
    Split ``label`` on whitespace: the first token is the filename, the rest
    is free-text description.

    Raises
    ------
    MissingLabelError
        If ``label`` is ``None`` or blank.  Callers are expected to check for
        the label before calling this function.
    """
    tokens = label.split() if label else []
    if not tokens:
        raise MissingLabelError(attribute)

    filename, description = tokens[0], " ".join(tokens[1:])
    extension = file_extension(filename)
    targets = set(target_extensions)

    return SnippetLabel(
        filename=filename,
        extension=extension,
        description=description,
        is_target_language=extension in targets,
    )
