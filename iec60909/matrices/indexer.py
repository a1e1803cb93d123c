"""
Node numbering.

Maps node labels to contiguous matrix indices. Every label of a busbar shares
the busbar's index, so elements connected to different labels of one busbar
are electrically connected.
"""

import logging
from collections.abc import Iterator

from ..core.busbar import NodeLabel
from ..core.errors import InconsistentInputError, ShortCircuitError, UnresolvedNodeError

logger = logging.getLogger(__name__)


class NodeIndex:
    """
    Label to index mapping for one network.

    Attributes:
        labels: Mapping of node label to matrix index
        star_nodes: Internal star node index of each three-winding transformer,
            in network order
    """

    def __init__(self):
        self.labels: dict[NodeLabel, int] = {}
        self.star_nodes: list[int] = []
        self._size = 0

    @classmethod
    def from_network(cls, network) -> "NodeIndex":
        """
        Number the nodes of a network.

        Busbars come first (one index per busbar). Labels of the elements
        follow in the order feeders, power station units, generators,
        transformers, three-winding transformers, motors, lines, cables,
        reactors. Each three-winding transformer finally gets one internal
        star node.

        Args:
            network: The Network to index

        Returns:
            The populated NodeIndex
        """
        index = cls()

        for position, busbar in enumerate(network.busbars, start=1):
            if not busbar.nodes:
                continue
            i = index._next()
            for label in busbar.nodes:
                if label in index.labels:
                    raise InconsistentInputError(
                        f"node {label!r} belongs to more than one busbar"
                    ).attribute("busbar", position)
                index.labels[label] = i

        for collection in network.element_collections():
            for position, element in enumerate(collection, start=1):
                try:
                    for label in element.node_labels:
                        index.add(label)
                except ShortCircuitError as err:
                    raise err.attribute(element.kind, position)

        for _ in network.three_winding_transformers:
            index.star_nodes.append(index._next())

        logger.debug(
            f"Indexed {len(index.labels)} labels onto {len(index)} nodes "
            f"({len(index.star_nodes)} star nodes)"
        )
        return index

    def _next(self) -> int:
        i = self._size
        self._size += 1
        return i

    def add(self, label: NodeLabel) -> int:
        """Return the index of a label, assigning a fresh one if unseen."""
        if label is None:
            raise UnresolvedNodeError("node label must be set")
        if label not in self.labels:
            self.labels[label] = self._next()
        return self.labels[label]

    def __getitem__(self, label: NodeLabel) -> int:
        try:
            return self.labels[label]
        except KeyError:
            raise UnresolvedNodeError(f"node {label!r} has no index") from None

    def __contains__(self, label: NodeLabel) -> bool:
        return label in self.labels

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[NodeLabel]:
        return iter(self.labels)

    def node_labels(self) -> dict[int, list[NodeLabel]]:
        """Inverse mapping: matrix index to the labels sharing it."""
        inverse: dict[int, list[NodeLabel]] = {}
        for label, i in self.labels.items():
            inverse.setdefault(i, []).append(label)
        return inverse
