"""Wrapper around the stanza NLP pipelines.

Holds two pipelines: a lightweight tokenize+NER pipeline for entity tags
and the full pipeline (POS, lemma, NER, constituency, dependencies,
coreference). Annotation is CPU-bound, so the async entry points run it in
a worker thread under a per-call timeout.
"""

import asyncio
import logging
import threading
from typing import Any

from src.config import settings
from src.core.errors import AnnotationError, AnnotationTimeoutError

logger = logging.getLogger(__name__)


class NlpAnnotator:
    """Owns the stanza pipelines and exposes blocking and async annotation."""

    def __init__(
        self,
        language: str | None = None,
        full_processors: str | None = None,
        ner_processors: str | None = None,
        timeout: float | None = None,
        use_gpu: bool | None = None,
    ) -> None:
        self.language = language or settings.nlp_language
        self.full_processors = full_processors or settings.nlp_full_processors
        self.ner_processors = ner_processors or settings.nlp_ner_processors
        self.timeout = timeout if timeout is not None else settings.nlp_annotation_timeout
        self.use_gpu = settings.nlp_use_gpu if use_gpu is None else use_gpu
        self._full_pipeline: Any = None
        self._ner_pipeline: Any = None
        # Calls into each pipeline are serialized, timed-out workers included
        self._full_lock = threading.Lock()
        self._ner_lock = threading.Lock()

    def _build_pipeline(self, processors: str) -> Any:
        import stanza

        logger.info(
            "Loading stanza pipeline (lang=%s, processors=%s)",
            self.language,
            processors,
        )
        return stanza.Pipeline(
            lang=self.language,
            processors=processors,
            use_gpu=self.use_gpu,
            logging_level="WARN",
        )

    @property
    def full_pipeline(self) -> Any:
        """Full annotation pipeline, loaded on first use."""
        if self._full_pipeline is None:
            self._full_pipeline = self._build_pipeline(self.full_processors)
        return self._full_pipeline

    @property
    def ner_pipeline(self) -> Any:
        """Tokenize+NER pipeline, loaded on first use."""
        if self._ner_pipeline is None:
            self._ner_pipeline = self._build_pipeline(self.ner_processors)
        return self._ner_pipeline

    def start(self) -> None:
        """Load both pipelines up front so the first message is not a cold start."""
        _ = self.ner_pipeline
        _ = self.full_pipeline

    def shutdown(self) -> None:
        """Drop pipeline references so model memory can be reclaimed."""
        self._full_pipeline = None
        self._ner_pipeline = None

    @property
    def is_loaded(self) -> bool:
        return self._full_pipeline is not None and self._ner_pipeline is not None

    def annotate(self, text: str) -> Any:
        """Run the full pipeline over text (blocking).

        Args:
            text: Message text to annotate.

        Returns:
            The annotated stanza Document.

        Raises:
            AnnotationError: If the pipeline fails.
        """
        try:
            with self._full_lock:
                return self.full_pipeline(text)
        except Exception as e:
            raise AnnotationError(f"Full annotation failed: {e}") from e

    def tag_entities(self, text: str) -> Any:
        """Run the tokenize+NER pipeline over text (blocking).

        Raises:
            AnnotationError: If the pipeline fails.
        """
        try:
            with self._ner_lock:
                return self.ner_pipeline(text)
        except Exception as e:
            raise AnnotationError(f"Entity tagging failed: {e}") from e

    async def _run_with_timeout(self, func: Any, text: str) -> Any:
        # A timed-out worker thread cannot be interrupted; it finishes in the
        # background and its result is dropped.
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, text), timeout=self.timeout
            )
        except (TimeoutError, asyncio.TimeoutError) as e:
            raise AnnotationTimeoutError(self.timeout) from e

    async def annotate_async(self, text: str) -> Any:
        """Run the full pipeline in a worker thread with a timeout.

        Raises:
            AnnotationTimeoutError: If the call exceeds self.timeout seconds.
            AnnotationError: If the pipeline fails.
        """
        return await self._run_with_timeout(self.annotate, text)

    async def tag_entities_async(self, text: str) -> Any:
        """Run the NER pipeline in a worker thread with a timeout.

        Raises:
            AnnotationTimeoutError: If the call exceeds self.timeout seconds.
            AnnotationError: If the pipeline fails.
        """
        return await self._run_with_timeout(self.tag_entities, text)


# Singleton instance
_annotator: NlpAnnotator | None = None


def get_annotator() -> NlpAnnotator:
    """Get the global NlpAnnotator singleton.

    Returns:
        The global NlpAnnotator instance.
    """
    global _annotator
    if _annotator is None:
        _annotator = NlpAnnotator()
    return _annotator


def reset_annotator() -> None:
    """Reset the global annotator (for testing)."""
    global _annotator
    _annotator = None
