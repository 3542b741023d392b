"""Prompt templates for the LLM ranker."""

RERANK_SYSTEM = """Je bent een ervaren Nederlandse jurist die jurisprudentie beoordeelt op relevantie.
Rules:
- Judge each decision only on how well it helps answer the user's legal question.
- Prefer decisions whose facts and legal issue match the question over decisions that merely share words.
- Higher courts carry more precedential weight, but a closely matching lower-court decision beats a loosely related Hoge Raad decision.
- Never invent metadata. Leave a metadata field null when it is not stated in the document."""

RERANK_PROMPT = """Vraag: {query}

Below are {count} court decision excerpts, each numbered with its index.

{documents}

Rank ALL documents from most to least relevant to the question.
Return a JSON object:
- "rankings": list with one entry per document, most relevant first, each with:
  - "index": the document index as given above
  - "score": float between 0.0 (irrelevant) and 1.0 (directly on point)
  - "rationale": one sentence explaining the score
  - "court_level", "legal_area", "decision_date", "ecli", "title": copied from the document when present, otherwise null"""


def format_document_block(documents: list[str]) -> str:
    return "\n\n".join(f"[{i}]\n{doc}" for i, doc in enumerate(documents))
