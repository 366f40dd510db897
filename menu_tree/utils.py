import re
from typing import Iterable, List, Optional, Union


def amp_replace(text: Optional[str]) -> str:
    """
    Escape bare ampersands in a link.

    Existing entities (``&amp;``, ``&#38;``, ``&nbsp;``) and ``&&`` are kept
    as they are, every other ``&`` becomes ``&amp;``.

    Args:
        text (Optional[str]): The raw link value

    Returns:
        str: The escaped link ("" for None)
    """
    if not text:
        return ""

    text = text.replace("&&", "*--*")
    text = text.replace("&#", "*-*")
    text = text.replace("&amp;", "&")
    text = re.sub(r"&(?!\w+;)", "&amp;", text)
    text = text.replace("*-*", "&#")
    text = text.replace("*--*", "&&")

    return text


def split_classes(value: Union[str, Iterable[str], None]) -> List[str]:
    """Split a space separated class string (or list of strings) into tokens."""
    if not value:
        return []
    if isinstance(value, str):
        return value.split()

    tokens = []
    for part in value:
        tokens.extend(split_classes(part))
    return tokens


def merge_classes(*values: Union[str, Iterable[str], None]) -> str:
    """Join class tokens with single spaces, dropping duplicates in order."""
    seen = []
    for value in values:
        for token in split_classes(value):
            if token not in seen:
                seen.append(token)
    return " ".join(seen)
