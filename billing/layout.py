"""Layout tree for rendered bills.

A rendered bill is a tree of small immutable nodes. Nodes carry content
and named style tokens only; turning tokens into actual styling is left
to whoever displays the tree. Equal documents produce equal trees.
"""

from dataclasses import dataclass, fields
from typing import Iterator, Optional


class Node:
    """Base class for layout nodes."""

    node_type = 'node'

    def to_dict(self) -> dict:
        data = {'type': self.node_type}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data

    def walk(self) -> Iterator['Node']:
        """Yield this node and every node below it, depth first."""
        yield self
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Node):
                yield from value.walk()
            elif isinstance(value, tuple):
                for child in value:
                    if isinstance(child, Node):
                        yield from child.walk()


def _plain(value):
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class Text(Node):
    value: str
    role: str = 'body'
    node_type = 'text'


@dataclass(frozen=True)
class Image(Node):
    src: str
    alt: str = ''
    node_type = 'image'


@dataclass(frozen=True)
class Field(Node):
    """A labelled value, e.g. a date line or a totals row."""
    label: str
    value: str
    key: str = ''
    style: tuple = ()
    node_type = 'field'


@dataclass(frozen=True)
class Rule(Node):
    weight: str = 'thin'
    node_type = 'rule'


@dataclass(frozen=True)
class Column(Node):
    key: str
    label: str
    align: str = 'left'
    span: int = 1
    node_type = 'column'


@dataclass(frozen=True)
class Row(Node):
    item_id: str
    cells: tuple
    style: tuple = ()
    node_type = 'row'


@dataclass(frozen=True)
class Table(Node):
    columns: tuple
    rows: tuple
    style: tuple = ()
    node_type = 'table'


@dataclass(frozen=True)
class Block(Node):
    """A named group of child nodes."""
    name: str
    children: tuple = ()
    style: tuple = ()
    node_type = 'block'

    def find(self, name: str) -> Optional['Block']:
        """Return the first block below this one with the given name."""
        for node in self.walk():
            if isinstance(node, Block) and node.name == name and node is not self:
                return node
        return None


@dataclass(frozen=True)
class RenderedBill(Node):
    """Root of a rendered bill.

    Attributes:
        variant: Id of the template variant that produced the tree
        sections: Top-level blocks in display order
        style: Page-level style tokens
    """
    variant: str
    sections: tuple
    style: tuple = ()
    node_type = 'bill'

    def section(self, name: str) -> Optional[Block]:
        for block in self.sections:
            if block.name == name:
                return block
        return None

    def section_names(self) -> list[str]:
        return [block.name for block in self.sections]
