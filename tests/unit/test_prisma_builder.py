"""Unit tests for the PRISMA flow diagram builder."""

import pytest

from prismaflow.core.models import DiagramOptions, FlowDiagramInput
from prismaflow.prisma import labels
from prismaflow.prisma.builder import FlowDiagramBuilder, build, build_flow_graph

CORE_NODES = ["identification", "screening", "included"] + [str(i) for i in range(3, 13)] + ["C"]


def _data(**overrides) -> FlowDiagramInput:
    values = dict(
        previous_studies=10,
        previous_reports=12,
        database_results=1200,
        register_results=80,
        website_results=30,
        organisation_results=15,
        citations_results=25,
        duplicates=300,
        excluded_automatic=50,
        excluded_other=20,
        records_screened=910,
        records_excluded=700,
        dbr_sought_reports=210,
        dbr_notretrieved_reports=10,
        other_sought_reports=70,
        other_notretrieved_reports=5,
        dbr_assessed=200,
        dbr_excluded="Wrong population,80; Wrong intervention,40; Wrong outcome,30",
        other_assessed=65,
        other_excluded="Wrong population,30; Wrong study design,20",
        new_studies=40,
        new_reports=45,
        total_studies=50,
        total_reports=57,
        tooltips=[f"tip {i}" for i in range(1, 20)],
    )
    values.update(overrides)
    return FlowDiagramInput(**values)


class TestTopology:
    """Tests for the four wing variants."""

    def test_both_wings(self) -> None:
        """Test the node set and order with both columns."""
        graph = build_flow_graph(_data())
        assert graph.node_names() == (
            ["identification", "screening", "included", "1", "2"]
            + [str(i) for i in range(3, 19)]
            + ["19", "A", "B", "C"]
        )

    def test_previous_only(self) -> None:
        """Test the node set with only the previous studies column."""
        graph = build_flow_graph(_data(), DiagramOptions(other=False))
        names = graph.node_names()
        assert set(names) == set(CORE_NODES) | {"1", "2", "19", "A"}
        assert not any(n in names for n in ("13", "14", "15", "16", "17", "18", "B"))

    def test_other_only(self) -> None:
        """Test the node set with only the other methods column."""
        graph = build_flow_graph(_data(), DiagramOptions(previous=False))
        names = graph.node_names()
        assert set(names) == set(CORE_NODES) | {"13", "14", "15", "16", "17", "18", "B"}

    def test_neither_wing(self) -> None:
        """Test the node set with neither column."""
        graph = build_flow_graph(_data(), DiagramOptions(previous=False, other=False))
        assert graph.node_names() == CORE_NODES

    def test_wing_dropped_without_counts(self) -> None:
        """Test requested columns are dropped when their counts are absent."""
        data = _data(
            previous_studies=None,
            previous_reports=None,
            website_results=None,
            organisation_results=None,
            citations_results=None,
        )
        builder = FlowDiagramBuilder(data, DiagramOptions(previous=True, other=True))
        graph = builder.build()
        assert not builder.wings.previous
        assert not builder.wings.other
        assert graph.node_names() == CORE_NODES

    def test_clusters(self) -> None:
        """Test edge clusters and the free 12 -> 19 edge."""
        graph = build_flow_graph(_data())
        assert [c.name for c in graph.clusters] == ["cluster0", "cluster1", "cluster2"]
        assert [(e.tail, e.head) for e in graph.edges] == [("12", "19")]
        core = {(e.tail, e.head) for e in graph.clusters[1].edges}
        assert ("16", "18") in core
        assert ("10", "C") in core

    def test_clusters_without_wings(self) -> None:
        """Test only the core cluster remains without columns."""
        graph = build_flow_graph(_data(), DiagramOptions(previous=False, other=False))
        assert [c.name for c in graph.clusters] == ["cluster1"]
        assert graph.edges == []
        assert ("16", "18") not in {(e.tail, e.head) for e in graph.all_edges()}

    def test_ranks(self) -> None:
        """Test rank groups with both columns."""
        graph = build_flow_graph(_data())
        ranks = [group.members for group in graph.ranks]
        assert ("A", "19") in ranks
        assert ("1", "3", "13") in ranks
        assert ("2", "4", "5", "14") in ranks
        assert ("8", "9", "15", "16") in ranks
        assert ("12", "B") in ranks

    def test_ranks_without_wings(self) -> None:
        """Test rank groups shrink without columns."""
        graph = build_flow_graph(_data(), DiagramOptions(previous=False, other=False))
        ranks = [group.members for group in graph.ranks]
        assert ("3",) in ranks
        assert ("10", "11") in ranks
        assert ("12",) in ranks


class TestLayout:
    """Tests for pinned node positions."""

    def test_positions_with_previous(self) -> None:
        """Test pinned positions with the previous column."""
        graph = build_flow_graph(_data())
        assert graph.node("1").pos == (1, 8.25)
        assert graph.node("4").pos == (5, 7)
        assert graph.node("19").pos == (5, 0)
        assert graph.node("11").pos == (9, 3.5)

    def test_positions_shift_left_without_previous(self) -> None:
        """Test boxes shift left without the previous column."""
        graph = build_flow_graph(_data(), DiagramOptions(previous=False))
        assert graph.node("4").pos == (1.5, 7)
        assert graph.node("14").pos == (9.5, 7)
        assert graph.node("identification").pos[0] == -1.4

    def test_long_exclusion_list_moves_box_down(self) -> None:
        """Test a long reason list moves box 11 down."""
        reasons = "; ".join(f"Reason {i},{i}" for i in range(1, 7))
        graph = build_flow_graph(_data(dbr_excluded=reasons))
        assert graph.node("11").pos[1] == pytest.approx(3.5 - 1 / 9)
        assert graph.node("18").pos[1] == 3.5

    def test_long_other_exclusion_list_moves_box_down(self) -> None:
        """Test a long other-methods reason list moves box 18 down."""
        reasons = "; ".join(f"Reason {i},{i}" for i in range(1, 8))
        graph = build_flow_graph(_data(other_excluded=reasons))
        assert graph.node("18").pos == (17, pytest.approx(3.5 - 2 / 9))
        assert graph.node("11").pos[1] == 3.5

    def test_other_exclusion_shift_follows_xstart(self) -> None:
        """Test box 18 keeps its shifted height when the diagram moves left."""
        reasons = "; ".join(f"Reason {i},{i}" for i in range(1, 7))
        graph = build_flow_graph(_data(other_excluded=reasons), DiagramOptions(previous=False))
        x, y = graph.node("18").pos
        assert x == 13.5
        assert y == pytest.approx(3.5 - 1 / 9)

    def test_included_bar_shrinks_without_previous(self) -> None:
        """Test the Included bar shrinks without the previous column."""
        with_prev = build_flow_graph(_data()).node("included")
        without = build_flow_graph(_data(), DiagramOptions(previous=False)).node("included")
        assert with_prev.height == 2.5
        assert without.height == pytest.approx(1.1)
        assert without.pos[1] == pytest.approx(1.5)


class TestLabels:
    """Tests for box text."""

    def test_identified(self) -> None:
        """Test the records identified box."""
        graph = build_flow_graph(_data())
        assert graph.node("4").label == "Records identified from:\nDatabases (n = 1,200)\nRegisters (n = 80)"

    def test_absent_count_line_dropped(self) -> None:
        """Test an absent count drops its line."""
        graph = build_flow_graph(_data(register_results=None))
        assert graph.node("4").label == "Records identified from:\nDatabases (n = 1,200)"

    def test_removed_zero_literal(self) -> None:
        """Test the removed box shows a zero count when nothing was removed."""
        data = _data(duplicates=None, excluded_automatic=None, excluded_other=None)
        label = build_flow_graph(data).node("5").label
        assert label == "Records removed before screening:\n(n = 0)"

    def test_missing_required_count_renders_na(self) -> None:
        """Test a missing screening count renders as NA."""
        graph = build_flow_graph(_data(records_screened=None))
        assert graph.node("6").label == "Records screened\n(n = NA)"

    def test_exclusion_reasons(self) -> None:
        """Test a reason table renders one line per reason."""
        graph = build_flow_graph(_data())
        assert graph.node("11").label == (
            "Reports excluded:\n"
            "Wrong population (n = 80)\n"
            "Wrong intervention (n = 40)\n"
            "Wrong outcome (n = 30)"
        )

    def test_bare_exclusion_count(self) -> None:
        """Test a bare count renders a single count line."""
        graph = build_flow_graph(_data(dbr_excluded="20"))
        assert graph.node("11").label == "Reports excluded\n(n = 20)"

    def test_numeric_reasons_render_as_table(self) -> None:
        """Test digit-only reasons render one line each rather than a single count."""
        graph = build_flow_graph(_data(dbr_excluded="2019,5; 2020,3"))
        assert graph.node("11").label == "Reports excluded:\n2019 (n = 5)\n2020 (n = 3)"

    def test_thousands_separator_exclusion(self) -> None:
        """Test an exclusion count with thousands separators renders under its reason."""
        graph = build_flow_graph(_data(dbr_excluded="Wrong population,1,200; Wrong outcome,30"))
        assert graph.node("11").label == (
            "Reports excluded:\nWrong population (n = 1,200)\nWrong outcome (n = 30)"
        )

    def test_long_reason_wrapped(self) -> None:
        """Test long reasons are wrapped."""
        reason = "Studies that reported outcomes only for a subgroup of participants"
        label = build_flow_graph(_data(dbr_excluded=f"{reason},3")).node("11").label
        lines = label.split("\n")[1:]
        assert len(lines) > 1
        assert lines[-1].endswith("(n = 3)")

    def test_exclusion_breaks(self) -> None:
        """Test line break counting and bare count detection."""
        rows = _data(dbr_excluded="Wrong design,1; Wrong population,2").dbr_excluded
        assert labels.exclusion_breaks(rows) == 1
        assert not labels.is_bare_count(rows)
        assert labels.is_bare_count(_data(dbr_excluded="5").dbr_excluded)
        assert not labels.is_bare_count([])

    def test_previous_label(self) -> None:
        """Test previous studies and reports are separated by a blank line."""
        label = build_flow_graph(_data()).node("2").label
        studies, reports = label.split("\n\n")
        assert studies.endswith("(n = 10)")
        assert reports.endswith("\n(n = 12)")

    def test_totals(self) -> None:
        """Test the total included box."""
        label = build_flow_graph(_data()).node("19").label
        assert "(n = 50)" in label
        assert label.endswith("(n = 57)")

    def test_new_included(self) -> None:
        """Test the new studies included box."""
        label = build_flow_graph(_data()).node("12").label
        assert label == (
            "New studies included in review\n(n = 40)\n"
            "Reports of new included studies\n(n = 45)"
        )

    def test_custom_box_text(self) -> None:
        """Test custom box text replaces the default."""
        graph = build_flow_graph(_data(records_screened_text="Titles and abstracts screened"))
        assert graph.node("6").label.startswith("Titles and abstracts screened")


class TestStyling:
    """Tests for colours, fonts and tooltips."""

    def test_option_colours(self) -> None:
        """Test box colours come from the options."""
        options = DiagramOptions(title_colour="Khaki", greybox_colour="Grey90", main_colour="Navy")
        graph = build_flow_graph(_data(), options)
        assert graph.node("3").color == "Khaki"
        assert graph.node("1").color == "Grey90"
        assert graph.node("14").color == "Grey90"
        assert graph.node("6").color == "Navy"

    def test_font(self) -> None:
        """Test font family and size come from the options."""
        graph = build_flow_graph(_data(), DiagramOptions(font="Arial", fontsize=10))
        assert graph.node("6").fontname == "Arial"
        assert graph.node("6").fontsize == 10

    def test_tooltips_by_position(self) -> None:
        """Test tooltips are taken by fixed position."""
        graph = build_flow_graph(_data())
        assert graph.node("1").tooltip == "tip 1"
        assert graph.node("13").tooltip == "tip 5"
        assert graph.node("5").tooltip == "tip 7"
        assert graph.node("19").tooltip == "tip 19"

    def test_missing_tooltips_blank(self) -> None:
        """Test boxes past the end of the tooltips get a blank tooltip."""
        graph = build_flow_graph(_data(tooltips=["only one"]))
        assert graph.node("1").tooltip == "only one"
        assert graph.node("6").tooltip == ""

    def test_arrow_options(self) -> None:
        """Test arrow colour and head come from the options."""
        options = DiagramOptions(arrow_colour="Red", arrow_head="vee")
        graph = build_flow_graph(_data(), options)
        edge = next(e for e in graph.all_edges() if (e.tail, e.head) == ("4", "6"))
        assert edge.style.color == "Red"
        assert edge.style.arrowhead == "vee"


class TestDot:
    """Tests for the DOT output."""

    def test_deterministic(self) -> None:
        """Test repeated builds give identical DOT."""
        data = _data()
        assert build(data) == build(data)

    def test_graph_attributes(self) -> None:
        """Test graph-level DOT attributes."""
        dot = build(_data())
        assert dot.startswith("digraph TD {")
        assert "splines=ortho" in dot
        assert "layout=neato" in dot
        assert "outputorder=edgesfirst" in dot

    def test_counts_in_output(self) -> None:
        """Test counts and edges appear in the DOT."""
        dot = build(_data())
        assert "Records screened\\n(n = 910)" in dot
        assert "12 -> 19" in dot

    def test_no_previous_edges_without_wing(self) -> None:
        """Test previous column edges are omitted with the column."""
        dot = build(_data(), DiagramOptions(previous=False))
        assert "12 -> 19" not in dot
        assert "A -> 19" not in dot
