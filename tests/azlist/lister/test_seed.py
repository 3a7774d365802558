"""
tests/azlist/lister/test_seed.py - ARG seed 쿼리 테스트
"""

import pytest
from conftest import SQL_ID, SUB_ID, VNET_ID, make_doc

from azlist.client.base import SeedPage
from azlist.exceptions import APICallError, ConfigurationError, SeedQueryError
from azlist.lister import build_query, list_tracked_resources, validate_authorization_scope_filter


def _page(ids, total, skip_token=None):
    return SeedPage(items=[make_doc(i) for i in ids], total_records=total, count=len(ids), skip_token=skip_token)


class TestBuildQuery:
    """쿼리 문자열"""

    def test_default_table(self):
        assert build_query("type =~ 'x'") == "Resources | where type =~ 'x' | order by id desc"

    def test_custom_table(self):
        assert build_query("1 == 1", "ResourceContainers").startswith("ResourceContainers | where ")


class TestAuthorizationScopeFilter:
    """권한 범위 필터 검증"""

    def test_valid(self):
        assert validate_authorization_scope_filter("AtScopeExact") == "AtScopeExact"

    def test_empty(self):
        assert validate_authorization_scope_filter("") is None
        assert validate_authorization_scope_filter(None) is None

    def test_invalid(self):
        with pytest.raises(ConfigurationError):
            validate_authorization_scope_filter("Everywhere")


class TestListTrackedResources:
    """seed 쿼리 페이지 처리"""

    def test_single_page_sorted(self, fake_client):
        fake_client.add_seed(make_doc(VNET_ID), make_doc(SQL_ID))

        resources = list_tracked_resources(fake_client, SUB_ID, "1 == 1")

        assert [str(r.id) for r in resources] == sorted([VNET_ID, SQL_ID])
        query = fake_client.queries[0]
        assert query["subscriptions"] == [SUB_ID]
        assert query["top"] == 1000
        assert query["skip"] is None

    def test_pagination(self, fake_client):
        """누적 count가 total에 도달할 때까지 skip/skip_token으로 반복"""
        ids = [f"{VNET_ID}{i}" for i in range(5)]
        fake_client.seed_pages = [
            _page(ids[:2], total=5, skip_token="t1"),
            _page(ids[2:4], total=5, skip_token="t2"),
            _page(ids[4:], total=5),
        ]

        resources = list_tracked_resources(fake_client, SUB_ID, "1 == 1", page_size=2)

        assert len(resources) == 5
        assert [(q["skip"], q["skip_token"]) for q in fake_client.queries] == [(None, None), (2, "t1"), (4, "t2")]

    def test_missing_skip_token(self, fake_client):
        """count < total인데 skip_token이 없으면 무한 반복 대신 에러"""
        fake_client.seed_pages = [_page([VNET_ID], total=3)]

        with pytest.raises(SeedQueryError, match="skip_token"):
            list_tracked_resources(fake_client, SUB_ID, "1 == 1")

    def test_empty_page_before_total(self, fake_client):
        fake_client.seed_pages = [_page([VNET_ID], total=3, skip_token="t1"), _page([], total=3, skip_token="t2")]

        with pytest.raises(SeedQueryError, match="빈 페이지"):
            list_tracked_resources(fake_client, SUB_ID, "1 == 1")

    def test_bad_item_is_fatal(self, fake_client):
        fake_client.seed_pages = [SeedPage(items=[{"name": "x"}], total_records=1, count=1)]

        with pytest.raises(SeedQueryError, match="파싱 실패"):
            list_tracked_resources(fake_client, SUB_ID, "1 == 1")

    def test_api_error_wrapped(self, fake_client):
        def fail(*args, **kwargs):
            raise APICallError("ResourceGraph.resources", status_code=400, error_message="bad query")

        fake_client.query = fail

        with pytest.raises(SeedQueryError) as exc_info:
            list_tracked_resources(fake_client, SUB_ID, "bad")
        assert exc_info.value.status_code == 400

    def test_table_and_scope_filter_forwarded(self, fake_client):
        list_tracked_resources(
            fake_client,
            SUB_ID,
            "1 == 1",
            table="ResourceContainers",
            authorization_scope_filter="AtScopeAndBelow",
        )

        query = fake_client.queries[0]
        assert query["query"].startswith("ResourceContainers | where 1 == 1")
        assert query["authorization_scope_filter"] == "AtScopeAndBelow"
