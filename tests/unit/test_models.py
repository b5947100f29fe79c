"""
Unit tests for Pydantic data models.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from influencer_insights.core.models import (
    FailedBatch,
    ImportResult,
    InfluencerStats,
    NounAnalysisResult,
    NounCount,
    PostRecord,
    ReplayResult,
    TopInfluencer,
)


class TestPostRecord:
    """Tests for PostRecord model"""

    def test_minimal_record(self):
        record = PostRecord(influencer_id=1, external_post_id="abc")

        assert record.like_count == 0
        assert record.comment_count == 0
        assert record.posted_at is None

    @pytest.mark.parametrize("influencer_id", [0, -1])
    def test_non_positive_influencer_id_rejected(self, influencer_id):
        with pytest.raises(ValidationError):
            PostRecord(influencer_id=influencer_id, external_post_id="abc")

    def test_empty_post_id_rejected(self):
        with pytest.raises(ValidationError):
            PostRecord(influencer_id=1, external_post_id="")

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            PostRecord(influencer_id=1, external_post_id="abc", like_count=-1)

    @pytest.mark.parametrize("fields", [
        {"influencer_id": 2**31},
        {"influencer_id": 1, "like_count": 2**63},
        {"influencer_id": 1, "comment_count": 2**63},
    ])
    def test_values_beyond_column_range_rejected(self, fields):
        with pytest.raises(ValidationError):
            PostRecord(external_post_id="abc", **fields)

    def test_json_round_trip_preserves_datetime(self):
        record = PostRecord(
            influencer_id=1,
            external_post_id="abc",
            posted_at=datetime(2024, 1, 12, 13, 34, tzinfo=timezone.utc),
        )

        restored = PostRecord.model_validate_json(record.model_dump_json())

        assert restored == record


class TestImportResult:
    """Tests for ImportResult model"""

    def test_defaults(self):
        result = ImportResult(file_name="posts.csv")

        assert result.total_processed == 0
        assert result.total_imported == 0
        assert result.total_errors == 0
        assert result.total_skipped == 0
        assert result.file_size == 0

    def test_camel_case_aliases(self):
        result = ImportResult(file_name="posts.csv", total_imported=3, file_size=10)

        assert result.model_dump(by_alias=True) == {
            "totalProcessed": 0,
            "totalImported": 3,
            "totalErrors": 0,
            "totalSkipped": 0,
            "batchesFlushed": 0,
            "failedBatches": 0,
            "fileName": "posts.csv",
            "fileSize": 10,
        }

    def test_accepts_aliases_on_input(self):
        result = ImportResult.model_validate({"fileName": "posts.csv", "totalErrors": 2})
        assert result.total_errors == 2

    def test_replay_result_aliases(self):
        assert "batchesReplayed" in ReplayResult().model_dump(by_alias=True)


class TestFailedBatch:
    """Tests for FailedBatch model"""

    def test_requires_records(self):
        with pytest.raises(ValidationError):
            FailedBatch(
                file_name="posts.csv",
                batch_number=1,
                error_type="OperationalError",
                error_message="boom",
                records=[],
            )

    def test_failed_at_defaults_to_utc_now(self):
        batch = FailedBatch(
            file_name="posts.csv",
            batch_number=1,
            error_type="OperationalError",
            error_message="boom",
            records=[PostRecord(influencer_id=1, external_post_id="a")],
        )
        assert batch.failed_at.tzinfo == timezone.utc


class TestStatsModels:
    """Tests for read-side models"""

    def test_top_influencer_excludes_unranked_average(self):
        entry = TopInfluencer(influencer_id=1, avg_likes=12.5, post_count=2)

        assert entry.model_dump(exclude_none=True) == {
            "influencer_id": 1,
            "avg_likes": 12.5,
            "post_count": 2,
        }

    def test_noun_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            NounCount(noun="東京", count=0)

    def test_noun_analysis_defaults(self):
        result = NounAnalysisResult(influencer_id=1, total_posts=0)
        assert result.nouns == []

    def test_stats_coerce_numeric_types(self):
        stats = InfluencerStats(influencer_id=1, avg_likes=10, avg_comments=2, post_count=3)
        assert isinstance(stats.avg_likes, float)
