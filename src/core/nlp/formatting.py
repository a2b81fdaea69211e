"""Plain-text rendering of stanza annotation output for Slack replies."""

from typing import Any

ROOT_LABEL = "ROOT"
MISSING = "-"
ZERO_MENTION = "_"
NER_PREFIXES = ("B-", "I-", "E-", "S-")


def _strip_bioes(tag: str | None) -> str:
    """Reduce a BIOES entity tag to its entity class.

    >>> _strip_bioes("S-PERSON")
    'PERSON'
    >>> _strip_bioes("O")
    'O'
    """
    if not tag:
        return "O"
    if tag.startswith(NER_PREFIXES):
        return tag[2:]
    return tag


def entity_tags(document: Any) -> list[str]:
    """Return one entity class per token, in document order."""
    return [
        _strip_bioes(token.ner)
        for sentence in document.sentences
        for token in sentence.tokens
    ]


def format_entity_tags(document: Any) -> str:
    """Render entity tags as a bracketed list, e.g. `[PERSON, O, LOCATION]`."""
    return "[" + ", ".join(entity_tags(document)) + "]"


def _format_word(word: Any) -> str:
    token = getattr(word, "parent", None)
    ne = _strip_bioes(getattr(token, "ner", None)) if token is not None else "O"
    return (
        f"word='{word.text}', lemma='{word.lemma or MISSING}', "
        f"pos='{word.xpos or word.upos or MISSING}', ne='{ne}'"
    )


def format_dependencies(sentence: Any) -> str:
    """Render a sentence's dependency graph as typed dependencies.

    Each word yields `rel(head-i, word-j)` with 1-based word indices and
    `ROOT-0` as the governor of the sentence root.
    """
    words = sentence.words
    relations = []
    for word in words:
        if word.head is None:
            continue
        if word.head == 0:
            governor = f"{ROOT_LABEL}-0"
        else:
            governor = f"{words[word.head - 1].text}-{word.head}"
        relations.append(f"{word.deprel}({governor}, {word.text}-{word.id})")
    return ", ".join(relations) if relations else MISSING


def _mention_text(document: Any, mention: Any) -> str:
    # Zero anaphora mentions carry (word_id, empty_index) tuples, not a span
    if not isinstance(mention.start_word, int) or not isinstance(mention.end_word, int):
        return ZERO_MENTION
    words = document.sentences[mention.sentence].words
    return " ".join(w.text for w in words[mention.start_word : mention.end_word])


def format_coref(document: Any) -> str:
    """Render the coreference chains of a document.

    Chains are keyed by their index, each showing the representative
    mention followed by every mention in the chain.
    """
    chains = getattr(document, "coref", None) or []
    parts = []
    for chain in chains:
        mentions = ", ".join(
            f"'{_mention_text(document, m)}'" for m in chain.mentions
        )
        parts.append(f"{chain.index}: '{chain.representative_text}' -> [{mentions}]")
    return "{" + ", ".join(parts) + "}"


def format_annotation(document: Any) -> str:
    """Render a fully annotated document.

    For every sentence: one line per word, then the parse tree, then the
    dependency graph. After all sentences, one coreference line.

    Args:
        document: Annotated stanza Document.

    Returns:
        Newline-terminated text with sentences in input order.
    """
    lines: list[str] = []
    for sentence in document.sentences:
        for word in sentence.words:
            lines.append(_format_word(word))

        tree = getattr(sentence, "constituency", None)
        lines.append(f"tree: {tree if tree is not None else MISSING}")
        lines.append(f"dependency graph: {format_dependencies(sentence)}")

    lines.append(f"coreference link graph: {format_coref(document)}")
    return "\n".join(lines) + "\n"
