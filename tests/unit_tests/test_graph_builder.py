"""Unit tests for peptide graph construction."""

import logging
import pickle

import pytest

from pepserum.bonds import BondType
from pepserum.exceptions import (
    DuplicateConnectionError,
    IndexOutOfRangeError,
    InvalidConnectionCountError,
    InvalidCustomWeightError,
    MalformedSequenceError,
)
from pepserum.graph import (
    CUSTOM_HUB_NODE,
    DFBP_HUB_NODE,
    SULFUR_NODE,
    build_graph,
    format_graph,
)


class TestLinearGraph:
    """Test the backbone path."""

    def test_two_residues(self):
        """Two residues joined by one backbone edge."""
        graph = build_graph("AG", [], BondType.LINEAR)

        assert dict(graph.adjacency) == {0: (1,), 1: (0,)}
        assert graph.edges() == [(0, 1)]
        assert graph.synthetic_nodes == ()
        assert graph.bridges == ()
        assert graph.n_residues == 2

    def test_single_residue(self):
        """A single residue has no neighbours."""
        graph = build_graph("A", [], BondType.LINEAR)
        assert dict(graph.adjacency) == {0: ()}
        assert graph.is_connected()

    def test_backbone_edges(self):
        """Consecutive residues are joined."""
        graph = build_graph("PEPTIDE", [], BondType.LINEAR)
        assert graph.edges() == [(i, i + 1) for i in range(6)]
        assert graph.is_connected()


class TestDisulfideGraph:
    """Test sulfur nodes of a disulfide bridge."""

    def test_sulfur_nodes(self):
        """Two sulfur nodes bridge the cysteines."""
        graph = build_graph("YEQDPWGVKK", [2, 8], BondType.DISULFIDE)

        assert graph.synthetic_nodes == (10, 11)
        assert graph.has_edge(10, 11)
        assert graph.has_edge(10, 2)
        assert graph.has_edge(11, 8)
        assert graph.neighbors(10) == (11, 2)
        assert graph.neighbors(11) == (10, 8)
        assert dict(graph.node_kinds) == {10: SULFUR_NODE, 11: SULFUR_NODE}

    def test_edges_stored_both_ways(self):
        """Every edge appears in both adjacency lists."""
        graph = build_graph("YEQDPWGVKK", [2, 8], BondType.DISULFIDE)
        for a, nbrs in graph.adjacency.items():
            for b in nbrs:
                assert graph.has_edge(b, a)

    def test_backbone_kept(self):
        """Backbone edges survive the bridge."""
        graph = build_graph("YEQDPWGVKK", [2, 8], BondType.DISULFIDE)
        assert all(graph.has_edge(i, i + 1) for i in range(9))
        assert graph.is_connected()

    def test_bridge_record(self):
        """The bridge record lists sorted attachments and its sulfur nodes."""
        graph = build_graph("YEQDPWGVKK", [8, 2], BondType.DISULFIDE)

        (bridge,) = graph.bridges
        assert bridge.bond_type is BondType.DISULFIDE
        assert bridge.attachments == (2, 8)
        assert bridge.nodes == (10, 11)
        # First sulfur follows the first connection as given
        assert graph.has_edge(10, 8)
        assert graph.has_edge(11, 2)


class TestAmideGraph:
    """Test direct backbone-to-backbone bonds."""

    def test_head_to_tail(self):
        """An amide bond is a direct edge without synthetic nodes."""
        graph = build_graph("AGCA", [0, 3], BondType.AMIDE)

        assert graph.has_edge(0, 3)
        assert graph.synthetic_nodes == ()
        assert len(graph.bridges) == 1
        assert graph.bridges[0].attachments == (0, 3)

    def test_two_amide_bonds(self):
        """Connections pair up in sorted order."""
        graph = build_graph("KAGDEKAD", [0, 3, 7, 4], BondType.AMIDE)

        assert graph.has_edge(0, 3)
        assert graph.has_edge(4, 7)
        assert [b.attachments for b in graph.bridges] == [(0, 3), (4, 7)]

    def test_adjacent_pair_no_duplicate_neighbour(self, caplog):
        """Bonding backbone neighbours warns and adds no edge twice."""
        with caplog.at_level(logging.WARNING):
            graph = build_graph("AGCA", [1, 2], BondType.AMIDE)

        assert graph.neighbors(1) == (0, 2)
        assert graph.neighbors(2) == (1, 3)
        assert "neighbouring residues" in caplog.text


class TestHubGraph:
    """Test DFBP and CUSTOM hub nodes."""

    def test_dfbp_hub(self):
        """One DFBP hub node joins both attachments."""
        graph = build_graph("ACDKCG", [1, 4], BondType.DFBP)

        assert graph.synthetic_nodes == (6,)
        assert graph.neighbors(6) == (1, 4)
        assert dict(graph.node_kinds) == {6: DFBP_HUB_NODE}

    def test_four_armed_hub(self):
        """One hub joins all four attachments."""
        graph = build_graph("CAKCGCAC", [0, 3, 5, 7], BondType.DFBP)

        (bridge,) = graph.bridges
        assert bridge.attachments == (0, 3, 5, 7)
        assert bridge.nodes == (8,)
        assert len(list(bridge.attachment_pairs())) == 6
        assert graph.neighbors(8) == (0, 3, 5, 7)

    def test_custom_hub(self):
        """Custom bonds use a custom hub node."""
        graph = build_graph("ACDKCG", [1, 4], BondType.CUSTOM, custom_weight=254.3)

        assert graph.neighbors(6) == (1, 4)
        assert dict(graph.node_kinds) == {6: CUSTOM_HUB_NODE}
        assert graph.bridges[0].bond_type is BondType.CUSTOM


class TestValidation:
    """Test input is rejected before building."""

    def test_empty_sequence(self):
        """Empty sequences are rejected."""
        with pytest.raises(MalformedSequenceError, match="empty"):
            build_graph("", [], BondType.LINEAR)

    def test_unknown_residue(self):
        """Unknown residues are named in the error."""
        with pytest.raises(MalformedSequenceError, match="X"):
            build_graph("AXG", [], BondType.LINEAR)

    def test_custom_alphabet(self):
        """A given alphabet replaces the default one."""
        graph = build_graph("AZ", [], BondType.LINEAR, alphabet="AZ")
        assert graph.n_residues == 2

    def test_linear_with_connections(self):
        """Linear peptides take no connections."""
        with pytest.raises(InvalidConnectionCountError):
            build_graph("AGCA", [0, 3], BondType.LINEAR)

    def test_amide_odd_connections(self):
        """Amide connections come in pairs."""
        with pytest.raises(InvalidConnectionCountError, match="even"):
            build_graph("AGCAG", [0, 2, 4], BondType.AMIDE)

    @pytest.mark.parametrize("bond_type", [BondType.DISULFIDE, BondType.AMIDE, BondType.DFBP])
    def test_cyclic_without_connections(self, bond_type):
        """Cyclic bond types need connections."""
        with pytest.raises(InvalidConnectionCountError):
            build_graph("AGCA", [], bond_type)

    def test_disulfide_needs_exactly_two(self):
        """A disulfide joins exactly two residues."""
        with pytest.raises(InvalidConnectionCountError, match="exactly 2"):
            build_graph("CACACA", [0, 2, 4, 5], BondType.DISULFIDE)

    def test_duplicate_connection(self):
        """Repeated connections are rejected."""
        with pytest.raises(DuplicateConnectionError):
            build_graph("YEQDPWGVKK", [2, 2], BondType.DISULFIDE)

    @pytest.mark.parametrize("connections", [[2, 10], [-1, 5]])
    def test_index_out_of_range(self, connections):
        """Connections must index the sequence."""
        with pytest.raises(IndexOutOfRangeError):
            build_graph("YEQDPWGVKK", connections, BondType.DISULFIDE)

    def test_custom_without_weight(self):
        """Custom bonds need a moiety weight."""
        with pytest.raises(InvalidCustomWeightError):
            build_graph("ACDKCG", [1, 4], BondType.CUSTOM)

    @pytest.mark.parametrize("weight", [0.0, -5.0, float("nan"), float("inf")])
    def test_custom_invalid_weight(self, weight):
        """Custom weights must be positive and finite."""
        with pytest.raises(InvalidCustomWeightError):
            build_graph("ACDKCG", [1, 4], BondType.CUSTOM, custom_weight=weight)

    def test_sequence_checked_before_connections(self):
        """Sequence errors are reported first."""
        with pytest.raises(MalformedSequenceError):
            build_graph("AXG", [0], BondType.LINEAR)

    def test_count_checked_before_duplicates(self):
        """Count errors come before duplicate errors."""
        with pytest.raises(InvalidConnectionCountError):
            build_graph("AGCAG", [1, 1, 2], BondType.AMIDE)

    def test_duplicates_checked_before_range(self):
        """Duplicate errors come before range errors."""
        with pytest.raises(DuplicateConnectionError):
            build_graph("AGCA", [12, 12], BondType.AMIDE)


class TestGraphObject:
    """Test immutability, pickling and formatting."""

    def test_adjacency_read_only(self):
        """Adjacency cannot be assigned to."""
        graph = build_graph("AG", [], BondType.LINEAR)
        with pytest.raises(TypeError):
            graph.adjacency[0] = ()

    def test_pickle_round_trip(self):
        """Pickled graphs keep adjacency, node kinds and bridges."""
        graph = build_graph("YEQDPWGVKK", [2, 8], BondType.DISULFIDE)
        restored = pickle.loads(pickle.dumps(graph))

        assert dict(restored.adjacency) == dict(graph.adjacency)
        assert dict(restored.node_kinds) == dict(graph.node_kinds)
        assert restored.bridges == graph.bridges

    def test_format_linear(self):
        """Each residue line lists its neighbours."""
        graph = build_graph("AG", [], BondType.LINEAR)
        assert format_graph("AG", graph) == "A -> G\nG -> A"

    def test_format_disulfide(self):
        """Synthetic nodes are printed by id after the residues."""
        graph = build_graph("YEQDPWGVKK", [2, 8], BondType.DISULFIDE)
        lines = format_graph("YEQDPWGVKK", graph).splitlines()

        assert len(lines) == 12
        assert lines[2] == "Q -> E, D, 10"
        assert lines[10] == "10 -> 11, Q"
        assert lines[11] == "11 -> 10, K"

    @pytest.mark.parametrize("sequence,connections,bond_type", [
        ("YEQDPWGVKK", [2, 8], BondType.DISULFIDE),
        ("CAKCGCAC", [0, 3, 5, 7], BondType.DFBP),
        ("AGCA", [0, 3], BondType.AMIDE),
    ])
    def test_node_kinds_describe_bridge_nodes(self, sequence, connections, bond_type):
        """node_kinds labels exactly the synthetic nodes the bridges use."""
        graph = build_graph(sequence, connections, bond_type)

        assert set(graph.node_kinds) == set(graph.synthetic_nodes)
        bridge_nodes = {node for bridge in graph.bridges for node in bridge.nodes}
        assert bridge_nodes == set(graph.node_kinds)
