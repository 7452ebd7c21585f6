"""Tests for headword extraction and definition rendering."""

import pytest

from palidict.headwords import (
    extract_dppn_headword,
    extract_headword,
    extract_ped_headword,
    render_definition,
)
from palidict.raw_types import DictSource


class TestExtractPedHeadword:
    """Tests for PED headwords."""

    @pytest.mark.parametrize("entry,expected", [
        ('<b>dhamma</b> [Sk. dharma] nature, condition...', "dhamma"),
        ('<b>Akkha<sup>2</sup></b> [Vedic akṣa] a die...', "Akkha"),
        ('<b>A -- <sup>1</sup></b> the prep. <b>ā</b> shortened...', "A"),
        ('&lt;b&gt;dhamma&lt;/b&gt; definition here', "dhamma"),
        ('&lt;b&gt;Akkha&lt;sup&gt;2&lt;/sup&gt;&lt;/b&gt; [Vedic akṣa]', "Akkha"),
        ('<b>dhamma -- </b> compound prefix', "dhamma"),
        ('<b>dhamma -- cakka</b> the wheel of the law', "dhamma -- cakka"),
        ('  <b>dhamma</b> definition', "dhamma"),
        ('<b>kusala —</b> good', "kusala"),
    ])
    def test_cases(self, entry, expected):
        assert extract_ped_headword(entry) == expected

    def test_superscript_removed_rest_verbatim(self):
        assert extract_ped_headword('<b>Pāda<sup>3</sup>-mūla</b> sole') == "Pāda-mūla"

    def test_whitespace_collapsed(self):
        assert extract_ped_headword('<b>dhamma\n   cakka</b>') == "dhamma cakka"

    def test_malformed_entries(self):
        assert extract_ped_headword("no markup at all") == ""
        assert extract_ped_headword("text before <b>dhamma</b>") == ""
        assert extract_ped_headword("") == ""


class TestExtractDppnHeadword:
    """Tests for DPPN headwords."""

    def test_title_div(self):
        entry = '[div class="huge"]Abhaya[/div][p]Son of Bimbisāra.[/p]'
        assert extract_dppn_headword(entry) == "Abhaya"

    def test_bold_fallback(self):
        assert extract_dppn_headword("[b] Ānanda [/b] the Buddha's attendant.") == "Ānanda"

    def test_title_preferred_over_bold(self):
        entry = '[b]Other[/b][div class="huge"]Abhaya[/div]'
        assert extract_dppn_headword(entry) == "Abhaya"

    def test_malformed(self):
        assert extract_dppn_headword("plain text") == ""


class TestDispatch:
    """Tests for source dispatch and definition rendering."""

    def test_extract_headword_dispatches(self):
        assert extract_headword(DictSource.PED, "<b>Cakka</b> wheel") == "Cakka"
        assert extract_headword(DictSource.DPPN, "[b]Cakka[/b] a king") == "Cakka"

    def test_render_ped(self):
        rendered = render_definition(DictSource.PED, "  &lt;b&gt;Cakka&lt;/b&gt; wheel ")
        assert rendered == "<b>Cakka</b> wheel"

    def test_render_dppn(self):
        entry = '[div class="huge"]Abhaya[/div][p]Son of [a href="/dppn/bimbisara"]Bimbisāra[/a].[/p]'
        rendered = render_definition(DictSource.DPPN, entry)
        assert rendered == '<div class="huge">Abhaya</div><p>Son of Bimbisāra.</p>'
