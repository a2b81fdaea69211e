"""Tests for plain-text rendering of annotation output."""

from types import SimpleNamespace

from src.core.nlp.formatting import (
    entity_tags,
    format_annotation,
    format_coref,
    format_dependencies,
    format_entity_tags,
)


class TestEntityTags:
    """Tests for short-form entity tag rendering."""

    def test_bioes_prefixes_stripped(self, ner_document):
        assert entity_tags(ner_document) == ["PERSON", "PERSON", "O", "GPE"]

    def test_list_rendering(self, ner_document):
        assert format_entity_tags(ner_document) == "[PERSON, PERSON, O, GPE]"

    def test_missing_tag_is_outside(self):
        token = SimpleNamespace(text="x", ner=None)
        document = SimpleNamespace(sentences=[SimpleNamespace(tokens=[token])])

        assert format_entity_tags(document) == "[O]"

    def test_tags_span_sentences_in_order(self, two_sentence_document):
        tags = entity_tags(two_sentence_document)

        assert len(tags) == 11
        assert tags[0] == "PERSON"
        assert tags[4] == "GPE"


class TestFormatDependencies:
    """Tests for dependency graph rendering."""

    def test_typed_dependencies(self, two_sentence_document):
        sentence = two_sentence_document.sentences[0]

        assert format_dependencies(sentence) == (
            "nsubj:pass(born-3, Obama-1), aux:pass(born-3, was-2), "
            "root(ROOT-0, born-3), case(Hawaii-5, in-4), "
            "obl(born-3, Hawaii-5), punct(born-3, .-6)"
        )

    def test_no_parse_renders_placeholder(self, ner_document):
        assert format_dependencies(ner_document.sentences[0]) == "-"


class TestFormatCoref:
    """Tests for coreference chain rendering."""

    def test_chain_with_mentions(self, two_sentence_document):
        assert format_coref(two_sentence_document) == "{0: 'Obama' -> ['Obama', 'He']}"

    def test_zero_anaphora_mention(self, two_sentence_document):
        chain = SimpleNamespace(
            index=1,
            representative_text="_",
            mentions=[
                SimpleNamespace(sentence=1, start_word=(1, 1), end_word=(1, 1)),
                SimpleNamespace(sentence=0, start_word=4, end_word=5),
            ],
        )
        two_sentence_document.coref = [chain]

        assert format_coref(two_sentence_document) == "{1: '_' -> ['_', 'Hawaii']}"

    def test_no_chains(self):
        document = SimpleNamespace(sentences=[], coref=[])
        assert format_coref(document) == "{}"

    def test_coref_not_run(self, ner_document):
        assert format_coref(ner_document) == "{}"


class TestFormatAnnotation:
    """Tests for the full annotation reply."""

    def test_word_lines(self, two_sentence_document):
        lines = format_annotation(two_sentence_document).splitlines()

        assert lines[0] == "word='Obama', lemma='Obama', pos='NNP', ne='PERSON'"
        assert lines[2] == "word='born', lemma='bear', pos='VBN', ne='O'"

    def test_one_tree_and_graph_per_sentence(self, two_sentence_document):
        lines = format_annotation(two_sentence_document).splitlines()

        assert sum(line.startswith("tree: ") for line in lines) == 2
        assert sum(line.startswith("dependency graph: ") for line in lines) == 2
        assert sum(line.startswith("coreference link graph: ") for line in lines) == 1

    def test_section_order(self, two_sentence_document):
        lines = format_annotation(two_sentence_document).splitlines()

        # 6 words, tree, graph, 5 words, tree, graph, coref
        assert len(lines) == 16
        assert lines[6].startswith("tree: (ROOT (S (NP (NNP Obama))")
        assert lines[7].startswith("dependency graph: nsubj:pass(born-3, Obama-1)")
        assert lines[8].startswith("word='He'")
        assert lines[13].startswith("tree: (ROOT (S (NP (PRP He))")
        assert lines[14].startswith("dependency graph: nsubj:pass(elected-3, He-1)")
        assert lines[15] == "coreference link graph: {0: 'Obama' -> ['Obama', 'He']}"

    def test_sentence_order_preserved(self, two_sentence_document):
        text = format_annotation(two_sentence_document)

        assert text.index("word='Obama'") < text.index("word='He'")

    def test_reply_is_newline_terminated(self, two_sentence_document):
        assert format_annotation(two_sentence_document).endswith("\n")

    def test_missing_tree_renders_placeholder(self, ner_document):
        text = format_annotation(ner_document)

        assert "tree: -\n" in text
        assert "dependency graph: -\n" in text
