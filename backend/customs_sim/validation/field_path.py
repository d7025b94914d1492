"""
Finding field paths.

A finding addresses either a top-level declaration field (``exportPort``) or
one field of a goods line (``goods[2].unitPrice``).
"""
import re
from dataclasses import dataclass
from typing import Union

_TOP_LEVEL_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
_GOODS_LINE_RE = re.compile(r'^goods\[(\d+)\]\.([A-Za-z_][A-Za-z0-9_]*)$')


class FieldPathError(ValueError):
    """Raised for a field path that does not address a single declaration field"""


@dataclass(frozen=True)
class TopLevelField:
    name: str

    @property
    def path(self) -> str:
        return self.name


@dataclass(frozen=True)
class GoodsLineField:
    index: int
    subfield: str

    @property
    def path(self) -> str:
        return f"goods[{self.index}].{self.subfield}"


FieldRef = Union[TopLevelField, GoodsLineField]


def goods_path(index: int, subfield: str) -> str:
    return GoodsLineField(index, subfield).path


def parse_field_path(path: str) -> FieldRef:
    """
    Parse a finding's field path.

    Args:
        path: ``name`` or ``goods[<index>].<subfield>``

    Returns:
        TopLevelField or GoodsLineField

    Raises:
        FieldPathError: For any other shape (nested paths, bad indexes, empty)
    """
    path = (path or '').strip()

    match = _GOODS_LINE_RE.match(path)
    if match:
        return GoodsLineField(int(match.group(1)), match.group(2))

    if _TOP_LEVEL_RE.match(path):
        return TopLevelField(path)

    raise FieldPathError(f"Unsupported field path: {path!r}")
