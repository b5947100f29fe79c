"""
Unit tests for the failed-batch log and replay.
"""

import io

import pytest

from influencer_insights.batch import BatchCommitter, DedupResolver, FailedBatchLog, FailedBatchReplayer
from influencer_insights.core.models import FailedBatch, PostRecord


def failed_batch(file_name: str, batch_number: int, post_ids: list[str]) -> FailedBatch:
    return FailedBatch(
        file_name=file_name,
        batch_number=batch_number,
        error_type="OperationalError",
        error_message="server closed the connection unexpectedly",
        records=[PostRecord(influencer_id=1, external_post_id=p, text="テスト") for p in post_ids],
    )


@pytest.fixture
def replayer(memory_repository):
    return FailedBatchReplayer(DedupResolver(memory_repository), BatchCommitter(memory_repository))


class TestFailedBatchLog:
    """Tests for FailedBatchLog"""

    def test_missing_file_reads_empty(self, tmp_path):
        assert list(FailedBatchLog(tmp_path / "absent.jsonl").read()) == []

    def test_append_creates_parent_directories(self, tmp_path):
        log = FailedBatchLog(tmp_path / "a" / "b" / "failed.jsonl")

        log.append(failed_batch("posts.csv", 1, ["x"]))

        assert log.path.exists()

    def test_entries_round_trip_in_order(self, failed_batch_log):
        failed_batch_log.append(failed_batch("posts.csv", 1, ["a", "b"]))
        failed_batch_log.append(failed_batch("posts.csv", 3, ["c"]))

        entries = list(failed_batch_log.read())

        assert [e.batch_number for e in entries] == [1, 3]
        assert entries[0].records[0].text == "テスト"
        assert entries[0].failed_at.tzinfo is not None

    def test_one_json_document_per_line(self, failed_batch_log):
        failed_batch_log.append(failed_batch("posts.csv", 1, ["a"]))
        failed_batch_log.append(failed_batch("posts.csv", 2, ["b"]))

        lines = failed_batch_log.path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert all(line.startswith("{") for line in lines)

    def test_blank_lines_ignored(self, failed_batch_log):
        failed_batch_log.append(failed_batch("posts.csv", 1, ["a"]))
        with open(failed_batch_log.path, "a", encoding="utf-8") as f:
            f.write("\n   \n")

        assert len(list(failed_batch_log.read())) == 1

    def test_corrupt_line_reports_location(self, failed_batch_log):
        failed_batch_log.append(failed_batch("posts.csv", 1, ["a"]))
        with open(failed_batch_log.path, "a", encoding="utf-8") as f:
            f.write("{not json}\n")

        with pytest.raises(ValueError, match=r"failed_batches\.jsonl:2"):
            list(failed_batch_log.read())


class TestFailedBatchReplayer:
    """Tests for FailedBatchReplayer"""

    def test_replay_imports_records(self, replayer, failed_batch_log, memory_repository):
        failed_batch_log.append(failed_batch("posts.csv", 1, ["a", "b"]))
        failed_batch_log.append(failed_batch("posts.csv", 2, ["c"]))

        result = replayer.replay(failed_batch_log)

        assert result.batches_replayed == 2
        assert result.total_records == 3
        assert result.total_imported == 3
        assert set(memory_repository.posts) == {"a", "b", "c"}

    def test_replay_is_idempotent(self, replayer, failed_batch_log):
        failed_batch_log.append(failed_batch("posts.csv", 1, ["a", "b"]))
        replayer.replay(failed_batch_log)

        result = replayer.replay(failed_batch_log)

        assert result.total_imported == 0
        assert result.total_skipped == 2

    def test_replay_filters_by_file_name(self, replayer, failed_batch_log, memory_repository):
        failed_batch_log.append(failed_batch("january.csv", 1, ["a"]))
        failed_batch_log.append(failed_batch("february.csv", 1, ["b"]))

        result = replayer.replay(failed_batch_log, file_name="february.csv")

        assert result.batches_replayed == 1
        assert set(memory_repository.posts) == {"b"}

    def test_failing_batch_does_not_stop_replay(self, replayer, failed_batch_log, memory_repository):
        failed_batch_log.append(failed_batch("posts.csv", 1, ["a", "b"]))
        failed_batch_log.append(failed_batch("posts.csv", 2, ["c"]))
        memory_repository.fail_bulk_calls = {1}

        result = replayer.replay(failed_batch_log)

        assert result.total_errors == 2
        assert result.total_imported == 1
        assert set(memory_repository.posts) == {"c"}

    def test_empty_log(self, replayer, failed_batch_log):
        result = replayer.replay(failed_batch_log)
        assert result.batches_replayed == 0
        assert result.total_records == 0

    def test_pipeline_failure_then_replay(
        self, make_pipeline, make_csv, valid_rows, memory_repository, failed_batch_log, replayer
    ):
        memory_repository.fail_bulk_calls = {1}
        data = make_csv(valid_rows(6))
        first = make_pipeline(batch_size=3).run(io.BytesIO(data), file_name="posts.csv")
        assert first.total_errors == 3

        result = replayer.replay(failed_batch_log, file_name="posts.csv")

        assert result.total_imported == 3
        assert len(memory_repository.posts) == 6
