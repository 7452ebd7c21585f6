"""Tests for volume parsing, the headword trie and the volume store."""

import pytest

from conftest import PED_VOLUME_0, write_volume
from palidict.cache import TTLCache
from palidict.errors import MissingVolumeError
from palidict.matching import MatchMode
from palidict.raw_types import DictSource
from palidict.trie import HeadwordTrie
from palidict.volumes import FileVolumeReader, VolumeStore, parse_volume


class TestParseVolume:
    """Tests for parse_volume."""

    def test_entries_in_document_order(self):
        payload = b"<top><d><b>Cakka</b> wheel</d>\n<d>plain</d><d>&lt;b&gt;Dhamma&lt;/b&gt;</d></top>"
        volume = parse_volume(DictSource.PED, 0, payload)
        assert volume.entries == ("<b>Cakka</b> wheel", "plain", "<b>Dhamma</b>")
        assert volume.headwords == ("Cakka", "", "Dhamma")
        assert len(volume) == 3

    def test_dppn_container(self):
        payload = '<xml><e>[b]Ānanda[/b] attendant</e></xml>'.encode("utf-8")
        volume = parse_volume(DictSource.DPPN, 1, payload)
        assert volume.headwords == ("Ānanda",)
        assert volume.entry_id(0) == "1/0"

    def test_malformed_xml(self):
        with pytest.raises(MissingVolumeError):
            parse_volume(DictSource.PED, 0, b"<top><d>broken")

    def test_wrong_root(self):
        with pytest.raises(MissingVolumeError, match="expected <top>"):
            parse_volume(DictSource.PED, 0, b"<xml><e>x</e></xml>")

    def test_indexes_per_mode(self):
        payload = "<top><d><b>Nibbāna</b></d><d><b>Dhamma</b></d></top>".encode("utf-8")
        volume = parse_volume(DictSource.PED, 0, payload)
        assert volume.index_for(MatchMode.VELTHUIS).exact("nibbaana") == [0]
        assert volume.index_for(MatchMode.UNICODE).exact("nibbāna") == [0]
        assert volume.index_for(MatchMode.FUZZY).exact("nibana") == [0]


class TestHeadwordTrie:
    """Tests for HeadwordTrie."""

    def test_exact_and_prefix(self):
        trie = HeadwordTrie(["dhamma", "cakka", "dhammacakka", "", "dhamma"])
        assert trie.exact("dhamma") == [0, 4]
        assert trie.with_prefix("dhamma") == [0, 2, 4]
        assert trie.with_prefix("x") == []
        assert trie.contains("cakka")
        assert not trie.contains("cak")
        assert not trie.contains("")

    def test_empty_forms_not_indexed(self):
        trie = HeadwordTrie(["", "dhamma"])
        assert len(trie) == 1
        assert list(trie.scan()) == [(1, "dhamma")]

    def test_empty_trie(self):
        trie = HeadwordTrie([])
        assert trie.exact("dhamma") == []
        assert trie.with_prefix("d") == []


class TestVolumeStore:
    """Tests for VolumeStore and FileVolumeReader."""

    def test_reader_paths(self, tmp_path):
        reader = FileVolumeReader(tmp_path)
        assert reader.path_for(DictSource.PED, 3) == tmp_path / "en" / "ped" / "3" / "ped.xml"
        assert reader.path_for(DictSource.DPPN, 7) == tmp_path / "en" / "dppn" / "7.xml"

    def test_missing_file(self, tmp_path):
        reader = FileVolumeReader(tmp_path)
        with pytest.raises(MissingVolumeError) as exc_info:
            reader.read(DictSource.PED, 0)
        assert isinstance(exc_info.value, FileNotFoundError)
        assert exc_info.value.index == 0

    def test_load_from_file(self, tmp_path):
        write_volume(tmp_path, DictSource.PED, 0, PED_VOLUME_0)
        store = VolumeStore(FileVolumeReader(tmp_path), TTLCache())
        volume = store.load_volume(DictSource.PED, 0)
        assert volume.headwords[0] == "Dhamma"
        assert volume.headwords[4] == "Akkha"
        assert len(volume) == len(PED_VOLUME_0)

    def test_cached_until_expiry(self):
        now = [0.0]
        reads = []

        def reader(source, index):
            reads.append((source, index))
            return b"<top><d><b>Dhamma</b></d></top>"

        store = VolumeStore(reader, TTLCache(ttl=3600, clock=lambda: now[0]))
        first = store.load_volume(DictSource.PED, 0)
        assert store.load_volume(DictSource.PED, 0) is first
        assert len(reads) == 1
        assert VolumeStore.cache_key(DictSource.PED, 0) in store.cache

        now[0] = 3600
        store.load_volume(DictSource.PED, 0)
        assert len(reads) == 2

    def test_load_all_skips_missing_and_malformed(self, tmp_path):
        write_volume(tmp_path, DictSource.PED, 0, PED_VOLUME_0)
        broken = tmp_path / "en" / "ped" / "2" / "ped.xml"
        broken.parent.mkdir(parents=True)
        broken.write_text("<top><d>broken", encoding="utf-8")

        store = VolumeStore(FileVolumeReader(tmp_path), TTLCache())
        volumes = list(store.load_all([DictSource.PED, DictSource.DPPN]))
        assert [(v.source, v.index) for v in volumes] == [(DictSource.PED, 0)]
