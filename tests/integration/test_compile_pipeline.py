"""
End-to-end compilation tests.

These build small survey sets and check the properties the viewer relies on:
identity merging, de-duplication, ordering and determinism.
"""

import json
from datetime import datetime, timezone

import pytest

from competitor_graph.domain.models import EntityType, Ownership
from competitor_graph.exceptions import SurveyValidationError
from competitor_graph.graph.compiler import compile_from_paths, compile_graph

GENERATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _by_slug(graph):
    return {e.slug: e for e in graph.entities}


class TestTwoCompanyScenario:
    """Acme and Beta each name the other."""

    @pytest.fixture
    def graph(self, record_factory):
        records = [
            record_factory("Acme Inc", "ACME", 2023, [("Beta Corp", "rival")]),
            record_factory("Beta Corp", "BETA", 2023, [("Acme Inc", "rival")]),
        ]
        return compile_graph(records, generated=GENERATED)

    def test_two_public_entities(self, graph):
        entities = _by_slug(graph)
        assert set(entities) == {"acme", "beta"}
        assert all(e.is_public for e in entities.values())

    def test_relationships(self, graph):
        assert [(r.source, r.target, r.year, r.notes) for r in graph.relationships] == [
            ("acme", "beta", 2023, "rival"),
            ("beta", "acme", 2023, "rival"),
        ]

    def test_mentions_point_at_each_other(self, graph):
        entities = _by_slug(graph)
        assert [(m.slug, m.ticker, m.year) for m in entities["acme"].mentioned_by] == [
            ("beta", "BETA", 2023)
        ]
        assert [(m.slug, m.ticker, m.year) for m in entities["beta"].mentioned_by] == [
            ("acme", "ACME", 2023)
        ]

    def test_subjects_have_years_not_notes(self, graph):
        for entity in graph.entities:
            data = entity.to_dict()
            assert "years" in data
            assert "notes" not in data
            assert entity.notes == {}

    def test_meta(self, graph):
        assert graph.meta["publicCompanies"] == 2
        assert graph.meta["privateEntities"] == 0
        assert graph.meta["totalRelationships"] == 2


class TestUnknownCompetitor:
    """A competitor that is neither a subject nor in the financial table."""

    def test_creates_unknown_entity_with_notes(self, record_factory):
        records = [
            record_factory("Acme Inc", "ACME", 2024, [("Totally Unknown LLC", "emerging")]),
        ]
        graph = compile_graph(records, generated=GENERATED)
        entities = _by_slug(graph)

        unknown = [e for e in graph.entities if not e.is_public]
        assert len(unknown) == 1
        entity = entities["totally-unknown"]
        assert entity.is_public is False
        assert entity.entity_type == EntityType.UNKNOWN
        assert entity.ownership == Ownership.PRIVATE
        assert entity.to_dict()["notes"] == {"2024": [{"from": "Acme Inc", "note": "emerging"}]}
        assert "years" not in entity.to_dict()


class TestMergeAcrossSpellings:
    """Different spellings from different companies resolve to one entity."""

    def test_one_entity_two_mentions(self, record_factory):
        records = [
            record_factory("Alpha", "AAA", 2023, [("Beta Corp", "first")]),
            record_factory("Bravo", "BBB", 2024, [("BETA CORP.", "second")]),
        ]
        graph = compile_graph(records, generated=GENERATED)

        betas = [e for e in graph.entities if e.slug == "beta"]
        assert len(betas) == 1
        beta = betas[0]
        assert [(m.ticker, m.year) for m in beta.mentioned_by] == [("AAA", 2023), ("BBB", 2024)]
        assert beta.name == "Beta Corp"
        assert sorted(beta.notes) == [2023, 2024]

    def test_suffix_and_case_variants_join_subject(self, record_factory):
        records = [
            record_factory("Gamma  Labs, Inc.", "GAM", 2023),
            record_factory("Delta", "DEL", 2023, [("GAMMA LABS Corporation", "x")]),
        ]
        graph = compile_graph(records, generated=GENERATED)
        assert len(graph.entities) == 2
        gamma = _by_slug(graph)["gamma-labs"]
        assert gamma.is_public
        assert [m.ticker for m in gamma.mentioned_by] == ["DEL"]
        assert graph.relationships[0].target == "gamma-labs"


class TestDeduplication:
    """Mentions, competitors and relationships across years."""

    @pytest.fixture
    def graph(self, record_factory):
        records = [
            record_factory("Acme", "ACME", 2024, [("Beta", "b24"), ("Gamma", "g24")]),
            record_factory("Acme", "ACME", 2023, [("Beta", "b23"), ("Beta Inc", "dup23")]),
        ]
        return compile_graph(records, generated=GENERATED)

    def test_relationships_not_deduplicated(self, graph):
        assert [(r.target, r.year, r.notes) for r in graph.relationships] == [
            ("beta", 2023, "b23"),
            ("beta", 2023, "dup23"),
            ("beta", 2024, "b24"),
            ("gamma", 2024, "g24"),
        ]

    def test_mentioned_by_unique_per_slug_and_year(self, graph):
        beta = _by_slug(graph)["beta"]
        assert [(m.slug, m.year, m.notes) for m in beta.mentioned_by] == [
            ("acme", 2023, "b23"),
            ("acme", 2024, "b24"),
        ]

    def test_notes_keep_every_mention(self, graph):
        beta = _by_slug(graph)["beta"]
        assert [n.note for n in beta.notes[2023]] == ["b23", "dup23"]

    def test_competitors_unique_by_slug(self, graph):
        acme = _by_slug(graph)["acme"]
        assert [c.slug for c in acme.competitors] == ["beta", "gamma"]

    def test_years_iterated_ascending(self, graph):
        assert [r.year for r in graph.relationships] == sorted(
            r.year for r in graph.relationships
        )


class TestSubjectIngestion:
    """Pass 1 behaviour."""

    def test_records_grouped_by_ticker(self, record_factory):
        records = [
            record_factory("Acme Inc", "ACME", 2023),
            record_factory("Acme Incorporated", "ACME", 2024),
        ]
        graph = compile_graph(records, generated=GENERATED)
        assert len(graph.entities) == 1
        acme = graph.entities[0]
        assert acme.name == "Acme Inc"
        assert sorted(acme.years) == [2023, 2024]

    def test_duplicate_ticker_year_last_wins(self, record_factory, caplog):
        records = [
            record_factory("Acme", "ACME", 2023, context="first"),
            record_factory("Acme", "ACME", 2023, context="second"),
        ]
        graph = compile_graph(records, generated=GENERATED)
        assert graph.entities[0].years[2023].context == "second"
        assert "Duplicate survey for ACME 2023" in caplog.text

    def test_slug_collision_between_tickers_merges(self, record_factory, caplog):
        records = [
            record_factory("Orbit Inc", "ORB", 2023),
            record_factory("Orbit Corp", "ORBC", 2024),
        ]
        graph = compile_graph(records, generated=GENERATED)
        assert len(graph.entities) == 1
        assert graph.entities[0].ticker == "ORB"
        assert sorted(graph.entities[0].years) == [2023, 2024]
        assert "shares slug 'orbit'" in caplog.text

    def test_suffix_only_subject_does_not_absorb_junk_names(self, record_factory):
        graph = compile_graph(
            [record_factory("Group Inc", "GRP", 2023, [("Inc.", "junk"), ("---", "junk")])],
            generated=GENERATED,
        )
        entities = _by_slug(graph)
        assert entities["grp"].mentioned_by == []
        assert [c.slug for c in entities["grp"].competitors] == [""]
        assert not entities[""].is_public
        assert [r.target for r in graph.relationships] == ["", ""]

    def test_self_mention_recorded(self, record_factory):
        graph = compile_graph(
            [record_factory("Acme", "ACME", 2023, [("Acme Inc", "itself")])],
            generated=GENERATED,
        )
        acme = graph.entities[0]
        assert [m.slug for m in acme.mentioned_by] == ["acme"]
        assert acme.notes == {}


class TestFinancialEnrichment:
    """Financial table integration."""

    @pytest.fixture
    def graph(self, record_factory, financial_table):
        records = [
            record_factory(
                "Acme, Inc.",
                "ACME",
                2023,
                [("Gadget Pro", "product"), ("MegaCorp", "giant"), ("Stealth", "startup")],
            ),
        ]
        return compile_graph(records, financials=financial_table, generated=GENERATED)

    def test_subject_financials(self, graph):
        acme = _by_slug(graph)["acme"]
        assert acme.financials.revenue == "$1.2B"

    def test_metadata_public_competitor(self, graph):
        mega = _by_slug(graph)["megacorp"]
        assert mega.is_public
        assert mega.ticker == "MEGA"
        # Not a survey subject, so the mention is kept as a note
        assert mega.notes[2023][0].note == "giant"

    def test_product_competitor(self, graph):
        gadget = _by_slug(graph)["gadget-pro"]
        assert gadget.entity_type == EntityType.PRODUCT
        assert gadget.parent_slug == "acme"

    def test_competitor_reference_carries_financials(self, graph):
        acme = _by_slug(graph)["acme"]
        refs = {c.slug: c for c in acme.competitors}
        assert refs["megacorp"].financials.market_cap == "$1.1T"
        assert refs["gadget-pro"].parent_slug == "acme"
        assert refs["stealth"].financials_by_year[2022].revenue == "$40M"

    def test_meta_counts(self, graph):
        assert graph.meta["publicCompanies"] == 2
        assert graph.meta["products"] == 1
        assert graph.meta["companies"] == 3
        assert graph.meta["withFinancials"] == 3

    def test_public_first_ordering(self, graph):
        assert [e.is_public for e in graph.entities] == [True, True, False, False]


class TestGraphProperties:
    """Invariants over a larger mixed input."""

    @pytest.fixture
    def records(self, record_factory):
        return [
            record_factory(
                "Acme Inc",
                "ACME",
                2022,
                [("Beta Corp", "a"), ("Zeta", "b"), ("Zeta Inc", "c")],
                context="Cloud security for enterprise",
            ),
            record_factory(
                "Acme Inc",
                "ACME",
                2023,
                [("Beta Corp", "a2"), ("Omega Systems", "d")],
                context="AI platform",
            ),
            record_factory(
                "Beta Corp", "BETA", 2023, [("ACME", "e"), ("Omega", "f"), ("Zeta", "g")]
            ),
            record_factory("Kappa", "KAP", 2024, [("Zeta", "h"), ("Beta", "i")]),
        ]

    def test_idempotent(self, records):
        first = compile_graph(records, generated=GENERATED).to_dict()
        second = compile_graph(records, generated=datetime.now(timezone.utc)).to_dict()
        first["meta"].pop("generated")
        second["meta"].pop("generated")
        assert first == second

    def test_no_duplicate_mentions(self, records):
        for entity in compile_graph(records).entities:
            keys = [(m.slug, m.year) for m in entity.mentioned_by]
            assert len(keys) == len(set(keys))

    def test_no_duplicate_competitors(self, records):
        for entity in compile_graph(records).entities:
            slugs = [c.slug for c in entity.competitors]
            assert len(slugs) == len(set(slugs))

    def test_public_private_consistency(self, records):
        for entity in compile_graph(records).entities:
            data = entity.to_dict()
            expected = data["ticker"] is not None and data["ownership"] == "public"
            assert data["isPublic"] is expected

    def test_unique_slugs(self, records):
        slugs = [e.slug for e in compile_graph(records).entities]
        assert len(slugs) == len(set(slugs))

    def test_relationship_endpoints_exist(self, records):
        graph = compile_graph(records)
        slugs = {e.slug for e in graph.entities}
        for rel in graph.relationships:
            assert rel.source in slugs
            assert rel.target in slugs

    def test_years_xor_notes(self, records):
        for entity in compile_graph(records).entities:
            data = entity.to_dict()
            assert ("years" in data) != ("notes" in data)

    def test_industries_only_for_subjects(self, records):
        graph = compile_graph(records)
        assert graph.industries == {
            "acme": [
                "Cloud & Infrastructure",
                "Cybersecurity",
                "Enterprise Software",
                "AI & Machine Learning",
            ],
        }

    def test_zeta_mentions(self, records):
        zeta = _by_slug(compile_graph(records))["zeta"]
        assert [(m.slug, m.year) for m in zeta.mentioned_by] == [
            ("acme", 2022),
            ("beta", 2023),
            ("kappa", 2024),
        ]


class TestCompileFromPaths:
    """Reading inputs from disk."""

    def test_end_to_end(self, write_survey, survey_dir, tmp_path, sample_financials_data):
        write_survey(
            "acme_2023.json",
            {
                "company": "Acme Inc",
                "ticker": "ACME",
                "year": 2023,
                "competitors": [{"name": "Beta Corp", "notes": "rival"}],
            },
        )
        write_survey(
            "beta_2023.json",
            {
                "company": "Beta Corp",
                "ticker": "BETA",
                "year": "2023",
                "competitors": [{"name": "Acme Inc", "notes": "rival"}],
            },
        )
        financials = tmp_path / "financials.json"
        financials.write_text(json.dumps(sample_financials_data))

        graph = compile_from_paths(survey_dir, financials, show_progress=False)
        assert len(graph.relationships) == 2
        assert _by_slug(graph)["acme"].financials.revenue == "$1.2B"

    def test_invalid_survey_aborts(self, write_survey, survey_dir):
        write_survey("good.json", {"company": "Acme", "ticker": "ACME", "year": 2023})
        write_survey("zbad.json", {"company": "Broken", "year": 2023})
        with pytest.raises(SurveyValidationError):
            compile_from_paths(survey_dir, None, show_progress=False)

    def test_without_financial_file(self, write_survey, survey_dir, tmp_path):
        write_survey("a.json", {"company": "Acme", "ticker": "ACME", "year": 2023})
        graph = compile_from_paths(survey_dir, tmp_path / "missing.json", show_progress=False)
        assert graph.entities[0].financials is None
