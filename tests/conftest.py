"""
Shared fixtures: an in-memory LevelIndex and record builders.
"""
import base64
import gzip
from typing import Optional

import pytest

from gd_level_finder.core.domain import CandidateRef, DetailRecord
from gd_level_finder.core.errors import DetailFetchFailed, RemoteUnavailable
from gd_level_finder.core.extract import normalize_detail
from gd_level_finder.core.ports import LevelIndex


def level_string(object_ids, compress: bool = True) -> str:
    """Build a level string containing one object per id"""
    objects = ";".join(f"1,{oid},2,{i * 30},3,15" for i, oid in enumerate(object_ids))
    text = f"kS38,1_40_2_125_3_255,kA2,0;{objects};"
    if not compress:
        return text
    return base64.urlsafe_b64encode(gzip.compress(text.encode())).decode()


def make_record(
    level_id: str = "1",
    object_count: Optional[int] = None,
    object_ids=None,
    length_seconds: Optional[float] = None,
    difficulty_code: Optional[int] = None,
    difficulty_text: Optional[str] = None,
    name: str = "Level",
    author: str = "Creator",
) -> DetailRecord:
    return DetailRecord(
        level_id=level_id,
        name=name,
        author=author,
        object_count=object_count,
        length_seconds=length_seconds,
        difficulty_code=difficulty_code,
        difficulty_text=difficulty_text,
        object_ids=tuple(object_ids) if object_ids is not None else None,
    )


class FakeIndex(LevelIndex):
    """LevelIndex serving canned payloads"""

    def __init__(self, payloads: dict, failing=(), search_error: bool = False):
        self.payloads = payloads  # level_id -> detail payload (insertion order = search order)
        self.failing = set(failing)
        self.search_error = search_error
        self.search_calls = []
        self.detail_calls = []

    async def search(self, query, limit, sort=None, filters=None):
        self.search_calls.append({"query": query, "limit": limit, "sort": sort, "filters": filters})
        if self.search_error:
            raise RemoteUnavailable("Level search returned HTTP 503")
        return [CandidateRef(level_id=level_id) for level_id in list(self.payloads)[:limit]]

    async def get_detail(self, level_id):
        self.detail_calls.append(level_id)
        if level_id in self.failing:
            raise DetailFetchFailed(level_id, "HTTP 500")
        return normalize_detail(level_id, self.payloads[level_id])


@pytest.fixture
def fake_index_factory():
    return FakeIndex
