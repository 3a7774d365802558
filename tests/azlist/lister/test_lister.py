"""
tests/azlist/lister/test_lister.py - Lister 오케스트레이터 테스트
"""

import logging
from unittest.mock import patch

import pytest
from conftest import DB_ID, RG_ID, SQL_ID, SUB_ID, SUBNET_ID, VNET_ID, make_doc

from azlist.client import AzureClient, get_cloud
from azlist.exceptions import APICallError, ConfigurationError, SeedQueryError
from azlist.lister import ExtensionResource, Lister, ListOptions, extension_from_type, new_lister

ROLE_TYPE = "Microsoft.Authorization/roleAssignments"
RG2_ID = f"/subscriptions/{SUB_ID}/resourceGroups/rg2"


def _lister(client, schema_tree, **kwargs):
    kwargs.setdefault("subscription_id", SUB_ID)
    kwargs.setdefault("parallelism", 4)
    return Lister(ListOptions(**kwargs), client, schema_tree)


def _ids(result):
    return [str(r.id) for r in result.resources]


class TestListOptions:
    """ListOptions"""

    def test_zero_parallelism_uses_cpu_count(self):
        with patch("azlist.lister.lister.default_parallelism", return_value=6):
            assert ListOptions(subscription_id=SUB_ID).resolved_parallelism() == 6

    def test_negative_parallelism(self):
        with pytest.raises(ConfigurationError):
            ListOptions(subscription_id=SUB_ID, parallelism=-1).resolved_parallelism()


class TestListerInit:
    """생성 시 검증"""

    def test_missing_subscription(self, fake_client, schema_tree):
        with pytest.raises(ConfigurationError, match="subscription_id"):
            _lister(fake_client, schema_tree, subscription_id="")

    def test_bad_scope_filter(self, fake_client, schema_tree):
        with pytest.raises(ConfigurationError):
            _lister(fake_client, schema_tree, arg_authorization_scope_filter="Nowhere")

    def test_unknown_extension_type(self, fake_client, schema_tree):
        with pytest.raises(ConfigurationError):
            _lister(fake_client, schema_tree, extension_resource_types=[ExtensionResource(type="Microsoft.Foo/bars")])


class TestList:
    """list"""

    def test_seed_only(self, fake_client, schema_tree):
        """recursive가 아니면 하위 리소스를 조회하지 않음"""
        fake_client.add_seed(make_doc(VNET_ID), make_doc(SQL_ID))
        fake_client.add_children(VNET_ID, "subnets", [make_doc(SUBNET_ID)])

        result = _lister(fake_client, schema_tree).list("1 == 1")

        assert _ids(result) == sorted([VNET_ID, SQL_ID])
        assert result.errors == []
        assert fake_client.list_calls == []

    def test_recursive(self, fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID), make_doc(SQL_ID))
        fake_client.add_children(VNET_ID, "subnets", [make_doc(SUBNET_ID)])
        fake_client.add_children(SQL_ID, "databases", [make_doc(DB_ID)])
        fake_client.fail(VNET_ID, "virtualNetworkPeerings", 500)

        result = _lister(fake_client, schema_tree, recursive=True).list("1 == 1")

        assert _ids(result) == sorted([VNET_ID, SUBNET_ID, SQL_ID, DB_ID])
        assert [e.endpoint for e in result.errors] == [f"{VNET_ID}/virtualNetworkPeerings".upper()]

    def test_managed_excluded_by_default(self, fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID, managedBy="X"), make_doc(SQL_ID, managedBy=""))

        result = _lister(fake_client, schema_tree).list("1 == 1")

        assert _ids(result) == [SQL_ID]

    def test_include_managed(self, fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID, managedBy="X"), make_doc(SQL_ID))

        result = _lister(fake_client, schema_tree, include_managed=True).list("1 == 1")

        assert _ids(result) == sorted([VNET_ID, SQL_ID])

    def test_resource_groups_fetched_once(self, fake_client, schema_tree):
        """같은 그룹의 리소스가 여러 개여도 그룹 조회는 한 번"""
        fake_client.add_seed(make_doc(VNET_ID), make_doc(SQL_ID))
        fake_client.add_resource_group("rg1")

        result = _lister(fake_client, schema_tree, include_resource_group=True).list("1 == 1")

        assert _ids(result) == sorted([RG_ID, VNET_ID, SQL_ID])
        assert fake_client.rg_calls == ["rg1"]
        group = next(r for r in result.resources if r.id.is_resource_group)
        assert group.properties["location"] == "koreacentral"

    def test_resource_group_already_present(self, fake_client, schema_tree):
        """seed에 이미 있는 그룹은 다시 조회하거나 중복 추가하지 않음"""
        fake_client.add_seed(make_doc(RG_ID), make_doc(VNET_ID))

        result = _lister(fake_client, schema_tree, include_resource_group=True).list("1 == 1")

        assert _ids(result) == sorted([RG_ID, VNET_ID])
        assert fake_client.rg_calls == []

    def test_multiple_resource_groups(self, fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID), make_doc(f"{RG2_ID}/providers/Microsoft.Sql/servers/sql2"))
        fake_client.add_resource_group("rg1")
        fake_client.add_resource_group("rg2")

        result = _lister(fake_client, schema_tree, include_resource_group=True).list("1 == 1")

        assert sorted(fake_client.rg_calls) == ["rg1", "rg2"]
        assert len(result.resources) == 4

    def test_resource_group_failure_is_fatal(self, fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID))

        with pytest.raises(APICallError):
            _lister(fake_client, schema_tree, include_resource_group=True).list("1 == 1")

    def test_managed_removed_before_group_lookup(self, fake_client, schema_tree):
        """제외된 관리 리소스의 그룹은 조회하지 않음"""
        fake_client.add_seed(make_doc(f"{RG2_ID}/providers/Microsoft.Sql/servers/sql2", managedBy="X"))

        result = _lister(fake_client, schema_tree, include_resource_group=True).list("1 == 1")

        assert result.resources == []
        assert fake_client.rg_calls == []

    def test_extensions_and_errors_merged(self, fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID), make_doc(SQL_ID))
        fake_client.add_children(
            VNET_ID,
            f"providers/{ROLE_TYPE}",
            [
                make_doc(f"{VNET_ID}/providers/{ROLE_TYPE}/ra1", properties={"scope": VNET_ID}),
                make_doc(f"{VNET_ID}/providers/{ROLE_TYPE}/ra2", properties={"scope": RG_ID}),
            ],
        )
        fake_client.fail(SQL_ID, f"providers/{ROLE_TYPE}", 403)

        result = _lister(fake_client, schema_tree, extension_resource_types=[extension_from_type(ROLE_TYPE)]).list(
            "1 == 1"
        )

        assert _ids(result) == sorted([VNET_ID, SQL_ID, f"{VNET_ID}/providers/{ROLE_TYPE}/ra1"])
        assert [e.endpoint for e in result.errors] == [f"{SQL_ID}/providers/{ROLE_TYPE}".upper()]

    def test_errors_sorted_by_endpoint(self, fake_client, schema_tree):
        fake_client.add_seed(make_doc(VNET_ID), make_doc(SQL_ID))
        fake_client.fail(VNET_ID, "subnets", 500)
        fake_client.fail(SQL_ID, "databases", 500)

        result = _lister(fake_client, schema_tree, recursive=True).list("1 == 1")

        endpoints = [e.endpoint for e in result.errors]
        assert endpoints == sorted(endpoints)
        assert len(endpoints) == 2

    def test_seed_failure_propagates(self, fake_client, schema_tree):
        fake_client.seed_pages = []

        def fail(*args, **kwargs):
            raise SeedQueryError("Resources", "syntax error", status_code=400)

        fake_client.query = fail

        with pytest.raises(SeedQueryError):
            _lister(fake_client, schema_tree).list("bad")

    def test_idempotent(self, fake_client, schema_tree):
        """같은 데이터에 대해 두 번 조회하면 같은 결과"""
        fake_client.add_seed(make_doc(VNET_ID), make_doc(SQL_ID))
        fake_client.add_children(VNET_ID, "subnets", [make_doc(SUBNET_ID)])
        fake_client.fail(SQL_ID, "databases", 500)
        fake_client.add_resource_group("rg1")

        def run():
            fake_client.queries.clear()
            lister = _lister(fake_client, schema_tree, recursive=True, include_resource_group=True)
            return lister.list("1 == 1")

        first, second = run(), run()

        assert _ids(first) == _ids(second)
        assert first.errors == second.errors

    def test_custom_logger(self, fake_client, schema_tree, caplog):
        fake_client.add_seed(make_doc(VNET_ID))
        logger = logging.getLogger("tests.custom")

        with caplog.at_level(logging.INFO, logger="tests.custom"):
            _lister(fake_client, schema_tree, logger=logger).list("1 == 1")

        assert any(record.name == "tests.custom" for record in caplog.records)


class TestNewLister:
    """new_lister"""

    def test_missing_credential(self):
        with pytest.raises(ConfigurationError, match="credential"):
            new_lister(ListOptions(subscription_id=SUB_ID), None)

    def test_missing_subscription(self):
        with pytest.raises(ConfigurationError, match="subscription_id"):
            new_lister(ListOptions(), object())

    def test_unknown_cloud(self):
        with pytest.raises(ConfigurationError):
            new_lister(ListOptions(subscription_id=SUB_ID), object(), cloud="mars")

    def test_builds_client(self, fake_client):
        credential = object()
        with patch.object(AzureClient, "create", return_value=fake_client) as create:
            lister = new_lister(ListOptions(subscription_id=SUB_ID, parallelism=3), credential, cloud="china")

        create.assert_called_once_with(SUB_ID, credential, get_cloud("china"), max_pool_connections=3)
        assert lister.client is fake_client
        assert lister.schema_tree is not None
