from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from google import genai
from google.genai import types

from yt_viral.config import DEFAULT_MODEL
from yt_viral.errors import AnalysisError, MissingCredentialError
from yt_viral.models import CommentRecord

logger = logging.getLogger(__name__)

_ANALYSIS_PROMPT = """
YouTube video title: "{title}"
Comments on this video:
{comments}

Analyse these comments and extract:
1. Overall viewer reaction (positive / negative / neutral)
2. What viewers particularly liked
3. What viewers felt was lacking
4. Latent viewer needs: what they are curious about or asking for
5. At least 3 concrete ideas for new videos based on this analysis
6. Exactly 5 core keywords capturing the video's topic and viewer interests

Respond only with a JSON object with these keys:
"sentiment" (string), "positivePoints", "negativePoints", "userNeeds",
"contentIdeas", "recommendedKeywords" (arrays of strings).
"""

_OUTLINE_PROMPT = """
Original video title: "{title}"
Chosen new keyword: "{keyword}"

We want to make a YouTube video on the keyword above.
Write a concrete, well-structured script outline that will hold viewers' interest.

Sections:
1. Hook intro (0-30s)
2. Problem statement and points of empathy
3. Core information / solution (step by step)
4. A twist or a pro tip
5. Outro and subscribe call-to-action

Format it nicely in Markdown.
"""


_STRING_LIST = types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))

_ANALYSIS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "sentiment": types.Schema(type=types.Type.STRING),
        "positivePoints": _STRING_LIST,
        "negativePoints": _STRING_LIST,
        "userNeeds": _STRING_LIST,
        "contentIdeas": _STRING_LIST,
        "recommendedKeywords": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="5 core keywords for new content",
        ),
    },
    required=[
        "sentiment",
        "positivePoints",
        "negativePoints",
        "userNeeds",
        "contentIdeas",
        "recommendedKeywords",
    ],
)


@dataclass(frozen=True)
class AnalysisResult:
    sentiment: str = ""
    positive_points: List[str] = field(default_factory=list)
    negative_points: List[str] = field(default_factory=list)
    user_needs: List[str] = field(default_factory=list)
    content_ideas: List[str] = field(default_factory=list)
    recommended_keywords: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        # passed through as the model returned it, missing keys -> empty
        return cls(
            sentiment=str(data.get("sentiment", "") or ""),
            positive_points=list(data.get("positivePoints", []) or []),
            negative_points=list(data.get("negativePoints", []) or []),
            user_needs=list(data.get("userNeeds", []) or []),
            content_ideas=list(data.get("contentIdeas", []) or []),
            recommended_keywords=list(data.get("recommendedKeywords", []) or []),
        )


class GeminiAnalyzer:
    """
    Comment analysis and script outlines via Gemini.
    Build one per request so a changed GEMINI_API_KEY applies on the next call.
    """

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL, client: Any = None) -> None:
        if client is None:
            if not (api_key or "").strip():
                raise MissingCredentialError("GEMINI_API_KEY")
            client = genai.Client(api_key=api_key)
        self._client = client
        self._model_name = model_name

    def analyze(self, title: str, comments: Iterable[CommentRecord]) -> AnalysisResult:
        comment_text = "\n".join(f"- {c.text}" for c in comments)
        prompt = _ANALYSIS_PROMPT.format(title=title, comments=comment_text)

        response = self._client.models.generate_content(
            model=self._model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=_ANALYSIS_SCHEMA,
            ),
        )
        raw = (getattr(response, "text", "") or "{}").strip()

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise AnalysisError(f"analysis response was not JSON: {raw[:200]}") from e
        if not isinstance(data, dict):
            raise AnalysisError("analysis response was not a JSON object")

        logger.info("analysis for %r: %d keywords", title, len(data.get("recommendedKeywords", []) or []))
        return AnalysisResult.from_dict(data)

    def outline(self, keyword: str, original_title: str) -> str:
        prompt = _OUTLINE_PROMPT.format(title=original_title, keyword=keyword)
        response = self._client.models.generate_content(model=self._model_name, contents=prompt)
        return getattr(response, "text", "") or ""
