"""
Pytest configuration and fixtures for influencer-insights tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os
from collections import defaultdict
from typing import Generator

import pytest

from influencer_insights.batch import BatchCommitter, DedupResolver, FailedBatchLog, IngestionPipeline
from influencer_insights.core.models import InfluencerStats, PostRecord, TopInfluencer

CSV_HEADER = "influencer_id,post_id,shortcode,likes,comments,thumbnail,text,post_date"


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that test the full pipeline"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# IN-MEMORY STORE
# =======================

class SimulatedStoreError(RuntimeError):
    pass


class InMemoryPostRepository:
    """
    Dictionary-backed stand-in for PostRepository.

    Records every lookup and bulk insert so tests can assert on flush
    boundaries, and can be told to fail specific calls.
    """

    def __init__(self):
        self.posts: dict[str, PostRecord] = {}
        self.lookup_calls: list[list[str]] = []
        self.bulk_calls: list[list[PostRecord]] = []
        self.fail_bulk_calls: set[int] = set()  # 1-based bulk_create call numbers
        self.fail_lookups = False
        self.online = True

    def find_existing_post_ids(self, post_ids: list[str]) -> set[str]:
        self.lookup_calls.append(list(post_ids))
        if self.fail_lookups:
            raise SimulatedStoreError("lookup timed out")
        return {post_id for post_id in post_ids if post_id in self.posts}

    def bulk_create(self, records: list[PostRecord], skip_duplicates: bool = True) -> int:
        self.bulk_calls.append(list(records))
        if len(self.bulk_calls) in self.fail_bulk_calls:
            raise SimulatedStoreError("connection reset during bulk insert")

        staged = dict(self.posts)
        inserted = 0
        for record in records:
            if record.external_post_id in staged:
                if not skip_duplicates:
                    raise SimulatedStoreError(f"duplicate post_id {record.external_post_id}")
                continue
            staged[record.external_post_id] = record
            inserted += 1
        self.posts = staged
        return inserted

    def find_by_influencer_id(self, influencer_id: int) -> list[dict]:
        return [
            {"influencer_id": p.influencer_id, "post_id": p.external_post_id, "text": p.text}
            for p in self.posts.values()
            if p.influencer_id == influencer_id
        ]

    def get_influencer_stats(self, influencer_id: int) -> InfluencerStats | None:
        posts = [p for p in self.posts.values() if p.influencer_id == influencer_id]
        if not posts:
            return None
        return InfluencerStats(
            influencer_id=influencer_id,
            avg_likes=sum(p.like_count for p in posts) / len(posts),
            avg_comments=sum(p.comment_count for p in posts) / len(posts),
            post_count=len(posts),
        )

    def _grouped(self, attribute: str) -> list[tuple[int, float, int]]:
        groups: dict[int, list[int]] = defaultdict(list)
        for post in self.posts.values():
            groups[post.influencer_id].append(getattr(post, attribute))
        rows = [(iid, sum(values) / len(values), len(values)) for iid, values in groups.items()]
        return sorted(rows, key=lambda row: (-row[1], row[0]))

    def get_top_influencers_by_likes(self, limit: int) -> list[TopInfluencer]:
        return [
            TopInfluencer(influencer_id=iid, avg_likes=avg, post_count=count)
            for iid, avg, count in self._grouped("like_count")[:limit]
        ]

    def get_top_influencers_by_comments(self, limit: int) -> list[TopInfluencer]:
        return [
            TopInfluencer(influencer_id=iid, avg_comments=avg, post_count=count)
            for iid, avg, count in self._grouped("comment_count")[:limit]
        ]

    def ping(self) -> bool:
        return self.online


@pytest.fixture
def memory_repository() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture
def failed_batch_log(tmp_path) -> FailedBatchLog:
    return FailedBatchLog(tmp_path / "logs" / "failed_batches.jsonl")


@pytest.fixture
def make_pipeline(memory_repository, failed_batch_log):
    """
    Factory for pipelines wired to the in-memory repository.

    Usage:
        pipeline = make_pipeline(batch_size=3)
    """
    def factory(batch_size: int = 1000, lookup_chunk_size: int = 500) -> IngestionPipeline:
        return IngestionPipeline(
            resolver=DedupResolver(memory_repository, lookup_chunk_size=lookup_chunk_size),
            committer=BatchCommitter(memory_repository),
            failure_log=failed_batch_log,
            batch_size=batch_size,
        )
    return factory


# =======================
# CSV FIXTURES
# =======================

def build_csv(rows: list[str], header: str = CSV_HEADER) -> bytes:
    return ("\n".join([header, *rows]) + "\n").encode("utf-8")


@pytest.fixture
def make_csv():
    """Build CSV bytes from pre-formatted data lines (header prepended)."""
    return build_csv


@pytest.fixture
def valid_rows():
    """Return a function producing n valid CSV lines with post ids starting at start."""
    def factory(n: int, start: int = 1, influencer_id: int = 1) -> list[str]:
        return [
            f"{influencer_id},{post_id},sc{post_id},{post_id * 10},{post_id},,post {post_id},2024-01-12"
            for post_id in range(start, start + n)
        ]
    return factory


@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container():
    """
    Start PostgreSQL container for integration tests

    Skips the requesting tests when Docker is not available.

    Yields:
        PostgresContainer instance with initialized schema
    """
    from testcontainers.postgres import PostgresContainer

    container = PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_pipeline",
        password="test_password",
        dbname="test_influencer_insights",
    )
    try:
        container.start()
    except Exception as e:  # docker daemon missing or unreachable
        pytest.skip(f"Docker is not available: {e}")

    try:
        init_sql_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "docker",
            "init-db.sql"
        )
        with open(init_sql_path) as f:
            init_sql = f.read()

        pool = _pool_for(container)
        pool.open()
        try:
            pool.execute_command(init_sql)
        finally:
            pool.close()

        yield container
    finally:
        container.stop()


def _pool_for(container):
    from influencer_insights.warehouse import DatabaseConnectionPool

    return DatabaseConnectionPool(
        host=container.get_container_host_ip(),
        port=int(container.get_exposed_port(5432)),
        database="test_influencer_insights",
        user="test_pipeline",
        password="test_password",
    )


@pytest.fixture
def db_pool(postgres_container) -> Generator:
    """
    Open connection pool against the test container

    Yields:
        DatabaseConnectionPool
    """
    pool = _pool_for(postgres_container)
    pool.open()
    try:
        yield pool
    finally:
        pool.close()


@pytest.fixture
def clean_db(db_pool):
    """
    Provide an empty influencer_posts table

    Yields:
        DatabaseConnectionPool with a truncated table
    """
    db_pool.execute_command("TRUNCATE TABLE influencer_posts RESTART IDENTITY")
    yield db_pool


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture(scope="session")
def project_root() -> str:
    return os.path.dirname(os.path.dirname(__file__))


@pytest.fixture(scope="session")
def test_env_vars(project_root):
    """
    Set test environment variables

    This fixture loads config/test.env and sets environment variables
    """
    from dotenv import load_dotenv

    env_path = os.path.join(project_root, "config", "test.env")

    if os.path.exists(env_path):
        load_dotenv(env_path, override=True)
