"""
Self-describing scramble prefix tags.

Each scrambled cookie value starts with a tag such as ``[rot13]`` naming the algorithm
used to scramble it, so readers only need to know that *some* scrambling was applied.
"""

import re

# The name is the run of non-"]" characters up to the first "]". An empty
# "[]" is not a tag.
_TAG_RE = re.compile(r"^\[([^\]]+)\]")


def add_tag(name: str, payload: str) -> str:
    """Prefix ``payload`` with the ``[name]`` tag."""
    return f"[{name}]{payload}"


def read_tag(value: str) -> str:
    """
    Return the algorithm name from a leading tag.

    Returns:
        str: The tagged name, or an empty string if ``value`` has no tag.

    """
    match = _TAG_RE.match(value)
    return match.group(1) if match else ""


def strip_tag(value: str) -> str:
    """Remove a leading tag from ``value``, if there is one."""
    return _TAG_RE.sub("", value, count=1)
