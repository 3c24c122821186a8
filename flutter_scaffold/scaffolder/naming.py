"""Name conversion helpers used for folder names and Dart identifiers.

The snake_case rule is deliberately literal: every uppercase character is
prefixed with an underscore, so acronyms are split letter by letter::

    to_snake_case("OrderDetails") -> "order_details"
    to_snake_case("ABCd")         -> "a_b_cd"
"""

from __future__ import annotations

import re

from .errors import InvalidFeatureName

_WORD_SEPARATORS = re.compile(r"[\s\-]+")
_PATH_SEPARATORS = re.compile(r"[/\\]")


def to_snake_case(text: str) -> str:
    """Convert ``SomeThing`` to ``some_thing``, one character at a time."""
    out: list[str] = []
    for char in text:
        if char.isupper():
            if out:
                out.append("_")
            out.append(char.lower())
        else:
            out.append(char)
    return "".join(out)


def to_pascal_case(text: str) -> str:
    """Convert ``some_thing`` to ``SomeThing``.

    Empty segments produced by leading, trailing or doubled underscores
    contribute nothing.  Only the first character of each segment is
    changed.
    """
    return "".join(segment[0].upper() + segment[1:] for segment in text.split("_") if segment)


def to_camel_case(text: str) -> str:
    """Convert ``some_thing`` to ``someThing``."""
    pascal = to_pascal_case(text)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def normalize_feature_name(raw: str) -> str:
    """Normalise a user-entered feature name to snake_case.

    Whitespace and hyphens separate words; each word goes through
    :func:`to_snake_case` and the words are joined with ``_``.

    Examples::

        normalize_feature_name("Order Details") -> "order_details"
        normalize_feature_name("OrderDetails")  -> "order_details"

    Raises:
        InvalidFeatureName: If nothing is left after normalisation, or the
            result is not a single directory name (``/``, ``\\``, ``.``, ``..``).
    """
    words = [word for word in _WORD_SEPARATORS.split(raw.strip()) if word]
    name = "_".join(to_snake_case(word) for word in words)
    if not name.strip("_") or _PATH_SEPARATORS.search(name) or name in (".", ".."):
        raise InvalidFeatureName(raw)
    return name
