from typing import Protocol, Sequence


class TextGenerator(Protocol):
    name: str

    async def complete(self, prompt: str) -> str: ...


class SimilarityScorer(Protocol):
    name: str

    async def similarity(self, source: str, candidates: Sequence[str]) -> list[float]:
        """Return one score in [0, 1] per candidate."""
