import logging
from typing import List, Optional, Sequence

from google import genai
from google.genai import types

from verify_news.core.config import (
    GEMINI_API_KEY,
    GEMINI_MODEL,
    ANALYSIS_MAX_OUTPUT_TOKENS,
    ANALYSIS_TEMPERATURE,
    ANALYSIS_TIMEOUT_MS,
)
from verify_news.core.errors import AnalysisError
from verify_news.models.verification import Source

logger = logging.getLogger(__name__)


ANALYSIS_PROMPT = """
You are a professional fact-checker. Evaluate the following news claim using the search results provided below.

CLAIM: "{claim}"

===============================================================================
SEARCH RESULTS
===============================================================================
{source_context}

===============================================================================
INSTRUCTIONS
===============================================================================
1. Decide on exactly ONE verdict from: True, False, Partially True, Inconclusive
   - True: the evidence confirms the claim
   - False: the evidence contradicts the claim
   - Partially True: some parts are confirmed, others are wrong or misleading
   - Inconclusive: the evidence is insufficient to decide
2. Reason objectively and cite the search results that support your conclusion.
3. Do not speculate beyond the evidence.

Format your response EXACTLY as:
VERDICT: [True/False/Partially True/Inconclusive]
EXPLANATION: [2-4 sentence explanation citing the evidence]
"""


def build_source_context(sources: Sequence[Source]) -> str:
    """
    Format the retained sources as a numbered evidence block for the prompt.
    """
    if not sources:
        return "No search results were found."

    blocks = []
    for i, source in enumerate(sources, start=1):
        blocks.append(
            f"[{i}] {source.title or 'Untitled'}\n"
            f"URL: {source.url}\n"
            f"Snippet: {source.snippet or 'N/A'}"
        )
    return "\n\n".join(blocks)


class AnalysisService:
    """
    Asks Google Gemini for a verdict on a claim given search evidence.
    """

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        max_output_tokens: int = ANALYSIS_MAX_OUTPUT_TOKENS,
        temperature: float = ANALYSIS_TEMPERATURE,
        timeout_ms: int = ANALYSIS_TIMEOUT_MS,
        client: Optional[genai.Client] = None,
    ):
        self.model = model
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature

        if client is not None:
            self.client = client
        elif api_key:
            self.client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout_ms),
            )
        else:
            logger.warning("GEMINI_API_KEY not set. Verification requests will fail at the analysis step.")
            self.client = None

    def analyze(self, claim: str, sources: List[Source]) -> str:
        """
        Run the single analysis round trip.

        Args:
            claim (str): The claim being verified
            sources (list): Retained search results, in relevance order

        Returns:
            str: Free-form analysis text from the model

        Raises:
            AnalysisError: If the model call fails or returns no text
        """
        if self.client is None:
            raise AnalysisError("Gemini API key is not configured")

        prompt = ANALYSIS_PROMPT.format(claim=claim, source_context=build_source_context(sources))
        config = types.GenerateContentConfig(
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
        )

        logger.info("[Analysis] Requesting verdict from %s for: %s...", self.model, claim[:50])
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
            text = (response.text or "").strip()
        except Exception as e:
            raise AnalysisError(f"Gemini request failed: {e}") from e

        if not text:
            raise AnalysisError("Gemini returned an empty response")

        logger.info("[Analysis] Got response (%d chars)", len(text))
        return text
