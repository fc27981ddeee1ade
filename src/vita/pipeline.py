"""RAG pipeline: retrieve, ground, generate (single-shot or streamed)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass

from vita.exceptions import DependencyError, GenerationUnavailableError, VitaError
from vita.models import (
    ChatAnswer,
    ContentFrame,
    EndFrame,
    ErrorFrame,
    MetadataFrame,
    RagSource,
    SimilarityResult,
    StreamFrame,
)
from vita.prompts import build_grounded_prompt, no_match_message
from vita.providers import LLMClient
from vita.repository import KnowledgeRepository
from vita.validation import check_limit, check_temperature, check_threshold, require_text

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 3
DEFAULT_THRESHOLD = 0.6
DEFAULT_TEMPERATURE = 0.5


@dataclass
class _Failure:
    error: BaseException


_END = object()


class StreamingAnswer:
    """A streamed answer: retrieval metadata plus a lazy sequence of text fragments.

    Fragments are pulled from the generation provider by a background task
    and handed over through a bounded queue, one at a time, in arrival
    order. The sequence can be iterated once. Calling ``aclose()`` (or
    leaving an ``async with`` block) stops the producer and closes the
    provider stream.

    Example:
        answer = await pipeline.answer_stream("Apa itu demam berdarah?")
        async with answer:
            async for text in answer:
                print(text, end="")
    """

    def __init__(
        self,
        *,
        results: list[SimilarityResult],
        threshold: float,
        temperature: float,
        fallback_text: str = "",
        source: Callable[[], AsyncIterator[str]] | None = None,
        buffer_size: int = 32,
    ) -> None:
        self.results = results
        self.threshold = threshold
        self.temperature = temperature
        self.fallback_text = fallback_text
        self._source = source
        self._buffer_size = buffer_size
        self._task: asyncio.Task | None = None
        self._queue: asyncio.Queue | None = None
        self._iterator: AsyncIterator[str] | None = None
        self._closed = False

    @property
    def has_results(self) -> bool:
        return bool(self.results)

    @property
    def total_results(self) -> int:
        return len(self.results)

    @property
    def rag_results(self) -> list[RagSource]:
        return [r.summary() for r in self.results]

    def metadata_frame(self) -> MetadataFrame:
        return MetadataFrame(
            rag_results=self.rag_results,
            threshold=self.threshold,
            total_results=self.total_results,
            temperature=self.temperature,
        )

    def __aiter__(self) -> AsyncIterator[str]:
        if self._iterator is not None:
            raise RuntimeError("StreamingAnswer can only be iterated once")
        self._iterator = self._fragments()
        return self._iterator

    async def __aenter__(self) -> StreamingAnswer:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _produce(self, queue: asyncio.Queue) -> None:
        assert self._source is not None
        stream = self._source()
        try:
            async for fragment in stream:
                await queue.put(fragment)
        except Exception as e:
            await queue.put(_Failure(e))
            return
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
        await queue.put(_END)

    async def _fragments(self) -> AsyncIterator[str]:
        if self._source is None:
            yield self.fallback_text
            return
        if self._closed:
            return

        queue: asyncio.Queue = asyncio.Queue(maxsize=self._buffer_size)
        self._queue = queue
        self._task = asyncio.create_task(self._produce(queue))
        try:
            while True:
                item = await queue.get()
                if item is _END or self._closed:
                    break
                if isinstance(item, _Failure):
                    if isinstance(item.error, VitaError):
                        raise item.error
                    raise GenerationUnavailableError(item.error) from item.error
                yield item
        finally:
            await self._stop_producer()

    async def _stop_producer(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            logger.info("Stream consumer stopped early; cancelling generation")
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise

    async def aclose(self) -> None:
        """Stop pulling fragments and release the provider stream.

        May be called from a task other than the one iterating (for example
        a disconnect watcher). A consumer waiting for the next fragment then
        finishes its loop without receiving anything further.
        """
        self._closed = True
        await self._stop_producer()
        queue = self._queue
        if queue is not None:
            while not queue.empty():
                queue.get_nowait()
            queue.put_nowait(_END)
        iterator = self._iterator
        if iterator is not None and not getattr(iterator, "ag_running", False):
            await iterator.aclose()  # type: ignore[attr-defined]


class RAGPipeline:
    """Orchestrates retrieval, prompt grounding and generation.

    A retrieval miss never reaches the generation provider: the caller gets
    a fixed "no relevant information" reply with ``has_results=False``.
    Failures are not retried here; retry policy belongs to provider clients.
    """

    def __init__(
        self,
        repository: KnowledgeRepository,
        llm_client: LLMClient,
        default_limit: int = DEFAULT_LIMIT,
        default_threshold: float = DEFAULT_THRESHOLD,
        default_temperature: float = DEFAULT_TEMPERATURE,
        stream_buffer_size: int = 32,
    ) -> None:
        """Initialize the pipeline.

        Args:
            repository: Knowledge repository used for retrieval
            llm_client: Generation provider
            default_limit: Results to retrieve when the caller passes None
            default_threshold: Minimum similarity when the caller passes None
            default_temperature: Sampling temperature when the caller passes None
            stream_buffer_size: Fragments buffered between provider and consumer
        """
        self.repository = repository
        self._llm_client = llm_client
        self.default_limit = default_limit
        self.default_threshold = default_threshold
        self.default_temperature = default_temperature
        self.stream_buffer_size = stream_buffer_size

    def resolve_arguments(
        self,
        question: str,
        limit: int | None,
        threshold: float | None,
        temperature: float | None,
    ) -> tuple[int, float, float]:
        """Validate a request and fill in defaults. Raises InvalidInputError."""
        require_text(question, "question")
        return (
            check_limit(self.default_limit if limit is None else limit),
            check_threshold(self.default_threshold if threshold is None else threshold),
            check_temperature(self.default_temperature if temperature is None else temperature),
        )

    @staticmethod
    def _messages(question: str, results: list[SimilarityResult]) -> list[dict]:
        return [{"role": "user", "content": build_grounded_prompt(question, results)}]

    @staticmethod
    def _build_answer(
        text: str, results: list[SimilarityResult], threshold: float, temperature: float
    ) -> ChatAnswer:
        return ChatAnswer(
            text=text,
            rag_results=[r.summary() for r in results],
            threshold=threshold,
            total_results=len(results),
            temperature=temperature,
            has_results=bool(results),
        )

    def answer(
        self,
        question: str,
        limit: int | None = None,
        threshold: float | None = None,
        temperature: float | None = None,
    ) -> ChatAnswer:
        """Answer a question from retrieved knowledge.

        Raises:
            InvalidInputError: If an argument is out of range
            EmbeddingUnavailableError: If the question could not be embedded
            SearchFailedError: If the similarity query failed
            GenerationUnavailableError: If the generation provider failed
        """
        limit, threshold, temperature = self.resolve_arguments(
            question, limit, threshold, temperature
        )
        results = self.repository.search(question, limit, threshold)
        if not results:
            logger.info("No knowledge above threshold %.2f; skipping generation", threshold)
            return self._build_answer(no_match_message(question), [], threshold, temperature)

        logger.info("Generating answer from %d result(s)", len(results))
        try:
            text = self._llm_client.complete(
                messages=self._messages(question, results),
                temperature=temperature,
            )
        except Exception as e:
            raise GenerationUnavailableError(e) from e
        logger.debug("Generated %d characters", len(text))
        return self._build_answer(text, results, threshold, temperature)

    async def aanswer(
        self,
        question: str,
        limit: int | None = None,
        threshold: float | None = None,
        temperature: float | None = None,
    ) -> ChatAnswer:
        """Async version of answer()."""
        limit, threshold, temperature = self.resolve_arguments(
            question, limit, threshold, temperature
        )
        results = await self.repository.asearch(question, limit, threshold)
        if not results:
            logger.info("No knowledge above threshold %.2f; skipping generation", threshold)
            return self._build_answer(no_match_message(question), [], threshold, temperature)

        logger.info("Generating answer from %d result(s)", len(results))
        try:
            text = await self._llm_client.acomplete(
                messages=self._messages(question, results),
                temperature=temperature,
            )
        except Exception as e:
            raise GenerationUnavailableError(e) from e
        logger.debug("Generated %d characters", len(text))
        return self._build_answer(text, results, threshold, temperature)

    async def answer_stream(
        self,
        question: str,
        limit: int | None = None,
        threshold: float | None = None,
        temperature: float | None = None,
    ) -> StreamingAnswer:
        """Retrieve context and return a lazily generated, streamed answer.

        Generation starts when the returned answer is first iterated. On a
        retrieval miss the fragment sequence is the fixed fallback message.
        """
        limit, threshold, temperature = self.resolve_arguments(
            question, limit, threshold, temperature
        )
        results = await self.repository.asearch(question, limit, threshold)
        if not results:
            logger.info("No knowledge above threshold %.2f; skipping generation", threshold)
            return StreamingAnswer(
                results=[],
                threshold=threshold,
                temperature=temperature,
                fallback_text=no_match_message(question),
            )

        messages = self._messages(question, results)
        return StreamingAnswer(
            results=results,
            threshold=threshold,
            temperature=temperature,
            source=lambda: self._llm_client.astream(messages, temperature=temperature),
            buffer_size=self.stream_buffer_size,
        )

    async def stream_frames(
        self,
        question: str,
        limit: int | None = None,
        threshold: float | None = None,
        temperature: float | None = None,
    ) -> AsyncIterator[StreamFrame]:
        """Stream an answer as metadata, content frames, then one terminal frame.

        Retrieval errors raise before any frame is produced. A generation
        failure after the metadata frame ends the stream with an ErrorFrame
        instead of an EndFrame; content already sent is not retracted.
        """
        answer = await self.answer_stream(question, limit, threshold, temperature)
        async with answer:
            yield answer.metadata_frame()
            try:
                async for text in answer:
                    yield ContentFrame(text=text)
            except DependencyError as e:
                logger.warning("Streaming generation failed: %s", e)
                yield ErrorFrame(stage=e.stage, message=str(e))
                return
        yield EndFrame()
