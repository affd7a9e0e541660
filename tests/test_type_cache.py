import pytest

from protoc_avro.errors import CacheConsistencyError
from protoc_avro.models import NestedRecordField, RecordNode, ScalarField
from protoc_avro.type_cache import TypeCache


class TestLookupInsert:
    def test_empty_lookup(self):
        cache = TypeCache()
        assert cache.lookup("Address") is None
        assert len(cache) == 0

    def test_insert_then_lookup_returns_same_object(self):
        cache = TypeCache()
        node = NestedRecordField(name="address", type_name="Address")
        cache.insert("Address", node)
        assert cache.lookup("Address") is node
        assert "Address" in cache
        assert list(cache) == ["Address"]

    def test_duplicate_insert_fails_fast(self):
        cache = TypeCache()
        cache.insert("Address", NestedRecordField(name="a", type_name="Address"))
        with pytest.raises(CacheConsistencyError):
            cache.insert("Address", NestedRecordField(name="b", type_name="Address"))


class TestRegisterRecord:
    def test_register_new_record(self):
        cache = TypeCache()
        record = RecordNode(name="Order", namespace="Shop")
        cache.register_record("Order", record)
        assert cache.lookup("Order") is record

    def test_promotes_nested_placeholder(self):
        cache = TypeCache()
        cache.insert("Address", NestedRecordField(name="address", type_name="Address"))
        record = RecordNode(name="Address", namespace="Shop", fields=[ScalarField("city", "string")])
        cache.register_record("Address", record)
        assert cache.lookup("Address") is record
        assert len(cache) == 1

    def test_second_record_is_an_error(self):
        cache = TypeCache()
        cache.register_record("Order", RecordNode(name="Order", namespace="Shop"))
        with pytest.raises(CacheConsistencyError) as exc:
            cache.register_record("Order", RecordNode(name="Order", namespace="Shop"))
        assert exc.value.name == "Order"
