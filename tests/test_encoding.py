"""Tests for report feature encoding."""

import numpy as np
import pytest

from civic_intake.classifier.encoding import (
    FEATURE_SIZE,
    INCIDENT_TYPES,
    bag_of_words,
    encode_report,
    history_feature,
    keyword_hits,
    one_hot,
    zone_tier,
)
from civic_intake.classifier.tables import ScoringTables, ZoneHistoryTable, default_tables
from civic_intake.schema import IncidentReport, IncidentType, ZoneTier


@pytest.fixture
def tables():
    return default_tables()


class TestOneHot:
    """Tests for one-hot encoding."""

    def test_each_type_has_single_one(self):
        """Test that every valid type encodes to exactly one 1."""
        for incident_type in IncidentType:
            vector = one_hot(incident_type, INCIDENT_TYPES)
            assert vector.sum() == 1.0
            assert vector[INCIDENT_TYPES.index(incident_type)] == 1.0

    def test_unknown_value_all_zero(self):
        assert one_hot(None, INCIDENT_TYPES).sum() == 0.0
        assert one_hot("graffiti", INCIDENT_TYPES).sum() == 0.0


class TestBagOfWords:
    """Tests for keyword bag encoding."""

    def test_keyword_order(self):
        vector = bag_of_words("broken pipe, danger")
        assert vector.tolist() == [0.0, 1.0, 0.0, 0.0, 1.0]

    def test_case_insensitive(self):
        assert bag_of_words("EMERGENCY on main street").tolist()[0] == 1.0

    def test_substring_match(self):
        """Test that keywords match inside longer words."""
        assert "danger" in keyword_hits("dangerous wires")

    def test_spanish_spellings(self):
        hits = keyword_hits("Árbol caído, peligro urgente")
        assert hits == {"fallen", "danger", "urgent"}

    def test_empty_description(self):
        assert bag_of_words("").sum() == 0.0
        assert keyword_hits("") == frozenset()


class TestZoneTier:
    """Tests for location bucketing."""

    @pytest.mark.parametrize(
        "location,expected",
        [
            ("center", ZoneTier.CRITICAL),
            ("centro", ZoneTier.CRITICAL),
            ("near the hospital", ZoneTier.CRITICAL),
            ("commercial", ZoneTier.CRITICAL),
            ("industrial", ZoneTier.MEDIUM),
            ("universitaria", ZoneTier.MEDIUM),
            ("residential-north", ZoneTier.LOW),
            ("park", ZoneTier.LOW),
            ("", ZoneTier.LOW),
        ],
    )
    def test_tiers(self, location, expected):
        assert zone_tier(location) == expected

    def test_critical_checked_first(self):
        """Test that a location matching both tiers is critical."""
        assert zone_tier("industrial area by the hospital") == ZoneTier.CRITICAL

    def test_case_insensitive(self):
        assert zone_tier("City CENTER") == ZoneTier.CRITICAL


class TestHistoryFeature:
    """Tests for the normalised zone history feature."""

    def test_default_table_falls_back(self, tables):
        """Test that tiers missing from the default table use a count of 1."""
        for tier in ZoneTier:
            assert history_feature(tier, tables.history) == pytest.approx(1 / 12)

    def test_tier_keyed_table(self):
        history = ZoneHistoryTable({"critical": 20, "medium": 10, "low": 5})
        assert history_feature(ZoneTier.MEDIUM, history) == pytest.approx(0.5)


class TestEncodeReport:
    """Tests for the full feature vector."""

    def test_vector_layout(self, tables):
        """Test the exact vector for a fire emergency in the city center."""
        report = IncidentReport(
            type="fire", description="emergencia total", location="centro", has_evidence=True
        )

        encoded = encode_report(report, tables)

        expected = [0.0] * 8 + [1.0] + [1.0, 0.0, 0.0, 0.0, 0.0] + [1.0, 0.0, 0.0] + [1.0, 1 / 12]
        assert len(encoded.features) == FEATURE_SIZE == 19
        assert encoded.features.tolist() == pytest.approx(expected)
        assert encoded.incident_type == IncidentType.FIRE
        assert encoded.zone_tier == ZoneTier.CRITICAL
        assert encoded.keyword_hits == {"emergency"}
        assert encoded.has_evidence is True

    def test_unknown_type_zero_block(self, tables):
        encoded = encode_report(IncidentReport(type="graffiti"), tables)
        assert encoded.incident_type is None
        assert encoded.features[:9].sum() == 0.0

    def test_alias_matches_canonical(self, tables):
        spanish = encode_report(IncidentReport(type="incendio"), tables)
        english = encode_report(IncidentReport(type="fire"), tables)
        assert np.array_equal(spanish.features, english.features)

    def test_reencoding_is_identical(self, tables):
        """Test that encoding the same report twice gives the same vector."""
        report = IncidentReport(
            type="tree", description="fallen branch", location="park", has_evidence=False
        )
        assert np.array_equal(
            encode_report(report, tables).features, encode_report(report, tables).features
        )

    def test_custom_history_table(self):
        tables = ScoringTables(history=ZoneHistoryTable({"critical": 4, "medium": 2, "low": 1}))
        encoded = encode_report(IncidentReport(type="water", location="park"), tables)
        assert encoded.features[-1] == pytest.approx(0.25)
