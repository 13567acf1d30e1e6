# tests/core/config/test_types.py
"""
Testes dos tipos canônicos (SchemaIndex, ConfigDocument, MetaConfig).
"""

import dataclasses

import pytest

from metaconfig.core.config.types import ConfigDocument, MetaConfig, SchemaIndex, Slot


def test_schema_index_str_and_validity():
    index = SchemaIndex(kind="ClusterConfiguration", version="deckhouse.io/v1")

    assert str(index) == "ClusterConfiguration, deckhouse.io/v1"
    assert index.is_valid()
    assert not SchemaIndex(kind="", version="deckhouse.io/v1").is_valid()
    assert not SchemaIndex(kind="ClusterConfiguration", version="").is_valid()


def test_schema_index_is_hashable_value():
    a = SchemaIndex("A", "v1")
    b = SchemaIndex("A", "v1")

    assert a == b
    assert {a: 1}[b] == 1


def test_slot_values_are_strings():
    assert Slot.PROVIDER.value == "provider"
    assert Slot("static") is Slot.STATIC


def test_config_document_index():
    doc = ConfigDocument(slot=Slot.INIT, kind="InitConfiguration", api_version="deckhouse.io/v1")

    assert doc.index == SchemaIndex("InitConfiguration", "deckhouse.io/v1")
    assert doc.data == {}


def test_meta_config_is_frozen():
    meta = MetaConfig(cluster_type="Static")

    with pytest.raises(dataclasses.FrozenInstanceError):
        meta.cluster_type = "Cloud"


def test_meta_config_slot_accessor():
    meta = MetaConfig(init_cluster_config={"kind": "InitConfiguration"}, cluster_config={"kind": "ClusterConfiguration"})

    assert meta.slot(Slot.INIT) == {"kind": "InitConfiguration"}
    assert meta.slot(Slot.CLUSTER) == {"kind": "ClusterConfiguration"}
    assert meta.slot(Slot.STATIC) is None
    assert meta.slot(Slot.PROVIDER) is None
    with pytest.raises(KeyError):
        meta.slot(Slot.UNRECOGNIZED)


def test_to_dict_is_a_copy():
    """Alterar o dicionário exportado não altera o agregado."""
    meta = MetaConfig(cluster_config={"clusterType": "Static"}, cluster_type="Static")

    exported = meta.to_dict()
    exported["cluster"]["clusterType"] = "Cloud"

    assert meta.cluster_config == {"clusterType": "Static"}
    assert exported["derived"]["cluster_type"] == "Static"


def test_config_hash_tracks_content():
    a = MetaConfig(cluster_config={"clusterType": "Static"}, cluster_type="Static")
    b = MetaConfig(cluster_config={"clusterType": "Static"}, cluster_type="Static")
    c = MetaConfig(cluster_config={"clusterType": "Cloud"}, cluster_type="Cloud")

    assert a.config_hash() == b.config_hash()
    assert a.config_hash() != c.config_hash()


def test_meta_config_slots_are_read_only():
    """Nem o slot nem estruturas aninhadas aceitam escrita após a construção."""
    source = {"clusterType": "Static", "nested": {"cidrs": ["10.0.0.0/8"]}}
    meta = MetaConfig(cluster_config=source, cluster_type="Static")

    with pytest.raises(TypeError):
        meta.cluster_config["clusterType"] = "Cloud"
    with pytest.raises(TypeError):
        meta.slot(Slot.CLUSTER)["nested"]["extra"] = True
    with pytest.raises(AttributeError):
        meta.cluster_config["nested"]["cidrs"].append("172.16.0.0/12")

    source["clusterType"] = "Cloud"
    source["nested"]["cidrs"].append("172.16.0.0/12")

    assert meta.cluster_config["clusterType"] == "Static"
    assert meta.cluster_config["nested"]["cidrs"] == ("10.0.0.0/8",)


def test_meta_config_is_hashable():
    a = MetaConfig(cluster_config={"clusterType": "Static", "zones": ["a"]}, cluster_type="Static")
    b = MetaConfig(cluster_config={"clusterType": "Static", "zones": ["a"]}, cluster_type="Static")

    assert a == b
    assert hash(a) == hash(b)
    assert {a: "meta"}[b] == "meta"


def test_to_dict_returns_plain_containers():
    meta = MetaConfig(cluster_config={"clusterType": "Static", "cidrs": ["10.0.0.0/8"]}, cluster_type="Static")

    exported = meta.to_dict()

    assert type(exported["cluster"]) is dict
    assert type(exported["cluster"]["cidrs"]) is list
    assert exported["init"] is None
