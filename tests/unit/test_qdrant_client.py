"""Tests for the Qdrant search client."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from form_filler.exceptions import ConfigError, SearchError
from form_filler.vectorstore import qdrant_client as qdrant_module
from form_filler.vectorstore.qdrant_client import (
    UNBOUNDED_TIMEOUT_SECONDS,
    QdrantSearchClient,
    parse_qdrant_url,
    qdrant_timeout,
)


def make_point(score: float, payload=None):
    return SimpleNamespace(id=1, score=score, payload=payload)


def make_searcher(points, **kwargs) -> QdrantSearchClient:
    client = MagicMock()
    client.query_points.return_value = SimpleNamespace(points=points)
    return QdrantSearchClient(
        host="localhost",
        port=6333,
        collection_name="compliance_corpus",
        client=client,
        **kwargs,
    )


class TestParseQdrantUrl:
    """Test cases for parse_qdrant_url."""

    def test_host_and_port(self):
        assert parse_qdrant_url("localhost:6333") == ("localhost", 6333)

    def test_with_scheme(self):
        assert parse_qdrant_url("http://qdrant.internal:7000") == ("qdrant.internal", 7000)

    def test_default_port(self):
        assert parse_qdrant_url("http://qdrant.internal") == ("qdrant.internal", 6333)

    def test_invalid_port(self):
        with pytest.raises(ConfigError):
            parse_qdrant_url("localhost:port")

    def test_missing_host(self):
        with pytest.raises(ConfigError):
            parse_qdrant_url("http://:6333")


class TestQdrantSearchClient:
    """Test cases for QdrantSearchClient."""

    def test_query_parameters(self):
        """Test that the query includes payloads, limit and threshold."""
        searcher = make_searcher([], score_threshold=0.4, top_k=5)

        searcher.search([0.1, 0.2])

        searcher.client.query_points.assert_called_once_with(
            collection_name="compliance_corpus",
            query=[0.1, 0.2],
            limit=5,
            score_threshold=0.4,
            with_payload=True,
        )

    def test_maps_points_in_order(self):
        """Test payload mapping and that result order is kept."""
        searcher = make_searcher([
            make_point(0.92, {"text": "Nightly backups.", "source": "policy.pdf", "page": 3}),
            make_point(0.61, {"text": "Quarterly restore tests."}),
        ])

        results = searcher.search([0.1])

        assert [r.text for r in results] == ["Nightly backups.", "Quarterly restore tests."]
        assert results[0].score == 0.92
        assert results[0].source == "policy.pdf"
        assert results[0].payload["page"] == 3
        assert results[1].source is None

    def test_custom_payload_fields(self):
        """Test configurable text and source payload keys."""
        searcher = make_searcher(
            [make_point(0.8, {"content": "Snippet", "document": "iso27001.docx"})],
            text_field="content",
            source_field="document",
        )

        result = searcher.search([0.1])[0]

        assert result.text == "Snippet"
        assert result.source == "iso27001.docx"

    def test_filters_below_threshold(self):
        """Test that low-scoring points are dropped client-side."""
        searcher = make_searcher([
            make_point(0.39, {"text": "Barely related."}),
            make_point(0.12, {"text": "Unrelated."}),
        ], score_threshold=0.4)

        assert searcher.search([0.1]) == []

    def test_no_threshold_keeps_everything(self):
        """Test that a None threshold disables filtering."""
        searcher = make_searcher([make_point(0.05, {"text": "Anything."})], score_threshold=None)

        assert len(searcher.search([0.1])) == 1

    def test_empty_result_is_not_an_error(self):
        """Test that no points gives an empty list."""
        assert make_searcher([]).search([0.1]) == []

    def test_missing_payload(self):
        """Test that points without payload still map."""
        result = make_searcher([make_point(0.9, None)]).search([0.1])[0]

        assert result.text == ""
        assert result.payload == {}

    def test_query_failure(self):
        """Test that client errors raise SearchError."""
        searcher = make_searcher([])
        searcher.client.query_points.side_effect = RuntimeError("connection reset")

        with pytest.raises(SearchError):
            searcher.search([0.1])


class TestQdrantTimeout:
    """Test cases for the Qdrant client timeout."""

    def test_no_timeout_is_unbounded(self):
        assert qdrant_timeout(None) == UNBOUNDED_TIMEOUT_SECONDS

    def test_fractional_timeout_rounds_up(self):
        assert qdrant_timeout(0.5) == 1
        assert qdrant_timeout(2.1) == 3

    def test_whole_timeout_kept(self):
        assert qdrant_timeout(30) == 30

    @pytest.mark.parametrize("timeout, expected", [(None, UNBOUNDED_TIMEOUT_SECONDS), (0.5, 1)])
    def test_client_built_with_timeout(self, monkeypatch, timeout, expected):
        """Test that the Qdrant client never gets a None timeout."""
        client_cls = MagicMock()
        monkeypatch.setattr(qdrant_module, "QdrantClient", client_cls)

        QdrantSearchClient(host="qdrant", port=6333, collection_name="c", timeout=timeout)

        client_cls.assert_called_once_with(host="qdrant", port=6333, timeout=expected)
